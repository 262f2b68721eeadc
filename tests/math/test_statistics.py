"""Tests for descriptive statistics."""

import pytest

from archwarden.math import Statistics, StatsModel


class TestFit:
    """Population mean and standard deviation."""

    def test_empty_sample(self):
        assert Statistics.fit([]) == StatsModel(mean=0.0, std_dev=1.0, sample_size=0)

    def test_constant_sample_floors_std(self):
        model = Statistics.fit([4, 4, 4])
        assert model.mean == 4.0
        assert model.std_dev == 1.0
        assert model.sample_size == 3

    def test_population_std(self):
        model = Statistics.fit([2, 4, 4, 4, 5, 5, 7, 9])
        assert model.mean == pytest.approx(5.0)
        assert model.std_dev == pytest.approx(2.0)

    def test_tight_sample_floors_std(self):
        """A spread below 1 is raised to 1, not only an exact 0."""
        model = Statistics.fit([1, 2])
        assert model.mean == pytest.approx(1.5)
        assert model.std_dev == 1.0


class TestHelpers:
    """z-score and rounding."""

    def test_z_score(self):
        assert Statistics.z_score(9, 5, 2) == pytest.approx(2.0)
        assert Statistics.z_score(9, 5, 0) == 0.0

    @pytest.mark.parametrize("value,expected", [(2.5, 3), (2.4, 2), (3.5, 4), (0.0, 0)])
    def test_round_half_up(self, value, expected):
        assert Statistics.round_half_up(value) == expected
