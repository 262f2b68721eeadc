"""Tests for the pure metric formulas."""

import pytest

from archwarden.metrics import coupling, health_score, instability, maintainability_from_text


class TestInstability:
    """I = Ce / (Ca + Ce) and its bands."""

    @pytest.mark.parametrize(
        "afferent,efferent,value,classification",
        [
            (0, 0, 0.0, "Stable (Abstract)"),
            (4, 1, 0.2, "Stable (Abstract)"),
            (1, 1, 0.5, "Balanced"),
            (1, 3, 0.75, "Flexible"),
            (1, 9, 0.9, "Unstable (Concrete)"),
            (0, 3, 1.0, "Unstable (Concrete)"),
        ],
    )
    def test_bands(self, afferent, efferent, value, classification):
        result = instability(afferent, efferent)
        assert result.instability == value
        assert result.classification == classification
        assert (result.afferent, result.efferent) == (afferent, efferent)

    def test_rounded_to_three_places(self):
        assert instability(2, 1).instability == 0.333


class TestCoupling:
    """Coupling quality bands."""

    @pytest.mark.parametrize(
        "afferent,efferent,quality",
        [
            (2, 3, "Low Coupling (Good)"),
            (3, 3, "Moderate Coupling"),
            (10, 5, "Moderate Coupling"),
            (10, 6, "High Coupling (Review)"),
            (20, 6, "Very High Coupling (Refactor)"),
        ],
    )
    def test_bands(self, afferent, efferent, quality):
        result = coupling(afferent, efferent)
        assert result.quality == quality
        assert result.total == afferent + efferent


class TestMaintainability:
    """Textual maintainability index."""

    def test_empty_text_is_excellent(self):
        result = maintainability_from_text("")
        assert result.index == 100.0
        assert result.grade == "A (Excellent)"
        assert result.suggestions == ()

    def test_clamped_to_range(self):
        result = maintainability_from_text("x = a + b;\n" * 2000)
        assert 0.0 <= result.index <= 100.0

    def test_long_file_suggestion(self):
        result = maintainability_from_text("x\n" * 400)
        assert "File is too long, consider splitting" in result.suggestions

    def test_complexity_suggestion(self):
        result = maintainability_from_text("if (a) {}\n" * 25)
        assert "High cyclomatic complexity detected" in result.suggestions

    def test_critical_grade(self):
        text = "if (a && b) { x = y + z; } else { w = v - u; }\n" * 3000
        result = maintainability_from_text(text)
        assert result.grade == "F (Critical)"
        assert result.suggestions[:3] == (
            "Urgent refactoring required",
            "Split into smaller modules",
            "Add documentation",
        )


class TestHealthScore:
    """Project health combination."""

    def test_weights(self):
        assert health_score(0.5, 80.0) == 68.0
        assert health_score(0.0, 100.0) == 100.0
        assert health_score(1.0, 0.0) == 0.0
