"""Unsupervised learning over a codebase.

``learn`` builds one term vector per file and a statistical model of
import counts. Both are published together as a single immutable
``LearnedState``; queries read whichever state was current when they
started.
"""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from ..logging_config import get_logger
from ..math.statistics import Statistics, StatsModel
from ..math.vectors import TermVector, VectorSpace
from ..scanning.models import Skipped
from ..scanning.reader import LOCAL_FS, FileSystem, read_source, stat_source

logger = get_logger(__name__)

DEFAULT_MAX_FILES = 500
MIN_TOKEN_LENGTH = 2
ANOMALY_THRESHOLD = 3.0
SIMILARITY_THRESHOLD = 0.85
ALREADY_RUNNING = "already running"

STOP_WORDS = frozenset(
    {
        "const", "let", "var", "import", "from", "require",
        "class", "function", "return", "if", "else", "this",
        "new", "export", "default", "async", "await", "for",
        "while", "do", "switch", "case", "break", "continue",
        "try", "catch", "finally", "throw", "null", "undefined",
        "true", "false",
    }
)  # fmt: skip

_IMPORT_WORD = re.compile(r"\b(?:import|require)\b")


def count_imports(text: str) -> int:
    """Occurrences of the words ``import`` and ``require``, wherever they appear."""
    return len(_IMPORT_WORD.findall(text))


@dataclass(frozen=True)
class LearnedState:
    vectors: Mapping[str, TermVector] = field(default_factory=lambda: MappingProxyType({}))
    model: Optional[StatsModel] = None
    skipped: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class LearnOutcome:
    files_learned: int = 0
    files_supplied: int = 0
    skipped: Mapping[str, str] = field(default_factory=dict)
    declined: bool = False
    reason: Optional[str] = None


@dataclass(frozen=True)
class AnomalyResult:
    is_anomaly: bool
    score: float
    message: Optional[str] = None


@dataclass(frozen=True)
class Similarity:
    most_similar_file: str
    similarity: float  # cosine, 0..1


class LearningKernel:
    """Vector-space model and import-count statistics for a project."""

    def __init__(
        self,
        fs: FileSystem = LOCAL_FS,
        max_files: int = DEFAULT_MAX_FILES,
        anomaly_threshold: float = ANOMALY_THRESHOLD,
        similarity_threshold: float = SIMILARITY_THRESHOLD,
        min_token_length: int = MIN_TOKEN_LENGTH,
    ):
        self.fs = fs
        self.max_files = max_files
        self.anomaly_threshold = anomaly_threshold
        self.similarity_threshold = similarity_threshold
        self.min_token_length = min_token_length
        self._state = LearnedState()
        self._lock = threading.Lock()

    @property
    def state(self) -> LearnedState:
        return self._state

    @property
    def learned_file_count(self) -> int:
        return len(self._state.vectors)

    @property
    def has_learned(self) -> bool:
        return self._state.model is not None

    def learn(self, file_paths: Iterable[str]) -> LearnOutcome:
        """Replace the learned state with one built from ``file_paths``.

        Declined (not queued) while another learning pass is running.
        """
        if not self._lock.acquire(blocking=False):
            logger.debug("Learning declined: another pass is running")
            return LearnOutcome(declined=True, reason=ALREADY_RUNNING)

        try:
            paths = list(file_paths)
            vectors: dict[str, TermVector] = {}
            import_counts: list[float] = []
            skipped: dict[str, str] = {p: "file limit" for p in paths[self.max_files :]}

            for path in paths[: self.max_files]:
                text = self._read(path)
                if isinstance(text, Skipped):
                    skipped[path] = text.reason
                    continue
                tokens = VectorSpace.tokenize(text, self.min_token_length, STOP_WORDS)
                vectors[path] = VectorSpace.term_vector(tokens)
                import_counts.append(count_imports(text))

            model = Statistics.fit(import_counts)
            self._state = LearnedState(
                vectors=MappingProxyType(vectors),
                model=model,
                skipped=MappingProxyType(skipped),
            )
            logger.debug(
                f"Learned {len(vectors)} files: mean imports {model.mean:.2f}, std {model.std_dev:.2f}"
            )
            return LearnOutcome(files_learned=len(vectors), files_supplied=len(paths), skipped=skipped)
        finally:
            self._lock.release()

    def detect_anomaly(self, text: str) -> AnomalyResult:
        """Z-score of ``text``'s import count against the learned model."""
        model = self._state.model
        if model is None:
            return AnomalyResult(is_anomaly=False, score=0.0)

        z = Statistics.z_score(count_imports(text), model.mean, model.std_dev)
        score = round(z, 2)
        if z <= self.anomaly_threshold:
            return AnomalyResult(is_anomaly=False, score=score)
        return AnomalyResult(
            is_anomaly=True,
            score=score,
            message=(
                f"Statistical Anomaly: This file has unusually high complexity (Z-Score: {score:.2f}). "
                f"Typical is ~{Statistics.round_half_up(model.mean)} imports."
            ),
        )

    def classify_layer(self, path: str) -> Optional[Similarity]:
        """Nearest learned neighbour of ``path`` if similar enough."""
        vectors = self._state.vectors
        target = vectors.get(path)
        if target is None:
            return None

        best = 0.0
        best_file = None
        for other, vector in vectors.items():
            if other == path:
                continue
            similarity = VectorSpace.cosine_similarity(target, vector)
            if similarity > best:
                best = similarity
                best_file = other

        if best_file is not None and best > self.similarity_threshold:
            return Similarity(most_similar_file=best_file, similarity=best)
        return None

    def reset(self) -> None:
        self._state = LearnedState()

    def _read(self, path: str):
        stat = stat_source(path, self.fs)
        if isinstance(stat, Skipped):
            return stat
        text = read_source(path, self.fs)
        if isinstance(text, Skipped):
            return text
        return text.value
