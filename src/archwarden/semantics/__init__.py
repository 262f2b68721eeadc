"""Semantic analysis: path-based architectural concepts."""

from .concepts import ALLOWED_FLOW, CONCEPT_KEYWORDS, SemanticClassifier
from .models import Concept, SemanticVerdict

__all__ = [
    "ALLOWED_FLOW",
    "CONCEPT_KEYWORDS",
    "Concept",
    "SemanticClassifier",
    "SemanticVerdict",
]
