"""Tests for concept classification and flow verdicts."""

import pytest

from archwarden.semantics import Concept, SemanticClassifier


class TestClassify:
    """Keyword classification of paths."""

    @pytest.mark.parametrize(
        "path,concept",
        [
            ("src/components/Button.tsx", Concept.PRESENTATION),
            ("src/services/userService.ts", Concept.BUSINESS),
            ("src/models/user.ts", Concept.DATA),
            ("src/utils/dates.ts", Concept.UTILITY),
            ("src/main.ts", Concept.UNKNOWN),
            ("C:\\app\\src\\pages\\home.tsx", Concept.PRESENTATION),
        ],
    )
    def test_classify(self, path, concept):
        assert SemanticClassifier().classify(path) is concept

    def test_only_last_three_segments(self):
        assert SemanticClassifier().classify("views/a/b/c/main.ts") is Concept.UNKNOWN

    def test_priority_order(self):
        """Presentation keywords win over data keywords."""
        assert SemanticClassifier().classify("src/components/model.ts") is Concept.PRESENTATION


class TestAnalyze:
    """Dependency flow verdicts."""

    def test_severe_flow(self):
        verdict = SemanticClassifier().analyze("src/models/user.ts", "src/components/Button.tsx")
        assert verdict.is_suspicious
        assert verdict.score == 95
        assert verdict.message == "Suspicious dependency: Data should not depend on Presentation."
        assert verdict.source_concept is Concept.DATA
        assert verdict.target_concept is Concept.PRESENTATION

    def test_allowed_flow(self):
        assert SemanticClassifier().analyze("src/pages/home.tsx", "src/services/api.ts") is None

    def test_unknown_side(self):
        assert SemanticClassifier().analyze("src/main.ts", "src/components/Button.tsx") is None

    def test_base_confidence(self):
        verdict = SemanticClassifier().analyze("src/pages/home.tsx", "src/models/user.ts")
        assert verdict.score == 70

    def test_name_bonus(self):
        verdict = SemanticClassifier().analyze("src/pages/home/HomeView.tsx", "src/models/userModel.ts")
        assert verdict.score == 80
