"""Mathematical utilities: descriptive statistics and term vectors."""

from .statistics import Statistics, StatsModel
from .vectors import TermVector, VectorSpace, cosine_similarity

__all__ = [
    "Statistics",
    "StatsModel",
    "TermVector",
    "VectorSpace",
    "cosine_similarity",
]
