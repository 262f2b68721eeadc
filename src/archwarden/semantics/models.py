"""Semantic data models: architectural concepts and flow verdicts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Concept(Enum):
    """Architectural concept of a file, guessed from its path.

    Declaration order is classification priority.
    """

    PRESENTATION = "Presentation"
    BUSINESS = "Business"
    DATA = "Data"
    UTILITY = "Utility"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class SemanticVerdict:
    """A dependency whose direction contradicts the concepts involved."""

    is_suspicious: bool
    score: int  # confidence, 0-100
    message: str
    source_concept: Concept
    target_concept: Concept
