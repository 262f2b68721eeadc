"""Sparse term vectors and cosine similarity."""

import math
import re
from collections import Counter
from typing import Iterable, Mapping

import numpy as np

TermVector = Counter

_TOKEN_SPLIT = re.compile(r"[^A-Za-z0-9_]")


class VectorSpace:
    """Bag-of-words vectors over source text."""

    @staticmethod
    def tokenize(text: str, min_length: int, stop_words: Iterable[str] = ()) -> list[str]:
        """Identifier-like tokens longer than ``min_length``, stop words removed (case-insensitive)."""
        stop = stop_words if isinstance(stop_words, (set, frozenset)) else set(stop_words)
        return [
            token
            for token in _TOKEN_SPLIT.split(text)
            if len(token) > min_length and token.lower() not in stop
        ]

    @staticmethod
    def term_vector(tokens: Iterable[str]) -> TermVector:
        return Counter(tokens)

    @staticmethod
    def cosine_similarity(a: Mapping[str, int], b: Mapping[str, int]) -> float:
        """
        Cosine similarity: (A . B) / sqrt(|A|^2 * |B|^2).

        Taking one square root of the product keeps identical vectors at
        exactly 1.0. Either vector empty or all-zero gives 0.0.
        """
        if not a or not b:
            return 0.0

        keys = list(a.keys() | b.keys())
        va = np.fromiter((a.get(k, 0) for k in keys), dtype=np.float64, count=len(keys))
        vb = np.fromiter((b.get(k, 0) for k in keys), dtype=np.float64, count=len(keys))

        mag_a = float(np.dot(va, va))
        mag_b = float(np.dot(vb, vb))
        if mag_a == 0 or mag_b == 0:
            return 0.0
        return float(np.dot(va, vb)) / math.sqrt(mag_a * mag_b)


cosine_similarity = VectorSpace.cosine_similarity
