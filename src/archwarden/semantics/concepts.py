"""Keyword-based concept classification and dependency-flow checks.

A path is classified by its last three segments (two directories and the
file name): the first concept with a keyword contained in any of them
wins. Dependencies should flow Presentation -> Business -> Data, with
Utility usable from everywhere but depending on nothing else.
"""

from __future__ import annotations

from typing import Optional

from .models import Concept, SemanticVerdict

CONCEPT_KEYWORDS: dict[Concept, tuple[str, ...]] = {
    Concept.PRESENTATION: (
        "view", "page", "screen", "ui", "component", "widget", "frontend", "render", "template",
    ),
    Concept.BUSINESS: (
        "controller", "service", "manager", "logic", "handler", "processor", "usecase", "interactor",
    ),
    Concept.DATA: (
        "model", "entity", "schema", "repo", "repository", "database", "store", "dao", "dto", "orm",
    ),
    Concept.UTILITY: (
        "util", "utils", "helper", "helpers", "common", "lib", "shared", "config", "constant",
    ),
}  # fmt: skip

ALLOWED_FLOW: dict[Concept, frozenset[Concept]] = {
    Concept.PRESENTATION: frozenset({Concept.BUSINESS, Concept.PRESENTATION, Concept.UTILITY}),
    Concept.BUSINESS: frozenset({Concept.DATA, Concept.BUSINESS, Concept.UTILITY}),
    Concept.DATA: frozenset({Concept.DATA, Concept.UTILITY}),
    Concept.UTILITY: frozenset({Concept.UTILITY}),
}

SEVERE_FLOWS = frozenset(
    {
        (Concept.DATA, Concept.PRESENTATION),
        (Concept.UTILITY, Concept.PRESENTATION),
        (Concept.UTILITY, Concept.BUSINESS),
    }
)

BASE_CONFIDENCE = 70
SEVERE_CONFIDENCE = 95
NAME_BONUS = 5

_SIGNIFICANT_SEGMENTS = 3


def _basename(path: str) -> str:
    return path.replace("\\", "/").rsplit("/", 1)[-1].lower()


class SemanticClassifier:
    """Classifies paths into concepts and flags suspicious dependencies."""

    def classify(self, path: str) -> Concept:
        segments = path.lower().replace("\\", "/").split("/")[-_SIGNIFICANT_SEGMENTS:]
        for concept, keywords in CONCEPT_KEYWORDS.items():
            if any(keyword in segment for keyword in keywords for segment in segments):
                return concept
        return Concept.UNKNOWN

    def analyze(self, source: str, target: str) -> Optional[SemanticVerdict]:
        """Verdict for ``source`` depending on ``target``, or None when the flow is fine
        or either side cannot be classified."""
        source_concept = self.classify(source)
        target_concept = self.classify(target)
        if Concept.UNKNOWN in (source_concept, target_concept):
            return None
        if target_concept in ALLOWED_FLOW[source_concept]:
            return None

        return SemanticVerdict(
            is_suspicious=True,
            score=self._confidence(source, target, source_concept, target_concept),
            message=(
                f"Suspicious dependency: {source_concept.value} should not depend on "
                f"{target_concept.value}."
            ),
            source_concept=source_concept,
            target_concept=target_concept,
        )

    def _confidence(self, source: str, target: str, source_concept: Concept, target_concept: Concept) -> int:
        if (source_concept, target_concept) in SEVERE_FLOWS:
            return SEVERE_CONFIDENCE

        confidence = BASE_CONFIDENCE
        if any(k in _basename(source) for k in CONCEPT_KEYWORDS[source_concept]):
            confidence += NAME_BONUS
        if any(k in _basename(target) for k in CONCEPT_KEYWORDS[target_concept]):
            confidence += NAME_BONUS
        return min(confidence, 100)
