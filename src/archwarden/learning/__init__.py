"""Learned project model: term vectors and import-count statistics."""

from .kernel import (
    STOP_WORDS,
    AnomalyResult,
    LearnedState,
    LearningKernel,
    LearnOutcome,
    Similarity,
    count_imports,
)

__all__ = [
    "AnomalyResult",
    "LearnOutcome",
    "LearnedState",
    "LearningKernel",
    "STOP_WORDS",
    "Similarity",
    "count_imports",
]
