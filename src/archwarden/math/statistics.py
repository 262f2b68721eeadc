"""Descriptive statistics for the import-count model."""

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class StatsModel:
    """Mean and population standard deviation of a sample.

    ``std_dev`` is never below 1: a tight sample would otherwise turn a
    one- or two-import difference into a large z-score.
    """

    mean: float = 0.0
    std_dev: float = 1.0
    sample_size: int = 0


class Statistics:
    """Statistical helpers."""

    @staticmethod
    def fit(values: list[float]) -> StatsModel:
        """Population mean and standard deviation, floored to 1."""
        if not values:
            return StatsModel()
        arr = np.asarray(values, dtype=np.float64)
        mean = float(arr.mean())
        std = float(arr.std())  # ddof=0: population
        return StatsModel(mean=mean, std_dev=max(std, 1.0), sample_size=len(values))

    @staticmethod
    def z_score(x: float, mean: float, std: float) -> float:
        """Compute single z-score: z = (x - mu) / sigma."""
        if std == 0:
            return 0.0
        return (x - mean) / std

    @staticmethod
    def round_half_up(x: float) -> int:
        return int(math.floor(x + 0.5))
