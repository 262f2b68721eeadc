"""Architecture metrics: instability, coupling, maintainability."""

from .calculator import MetricsEngine
from .formulas import coupling, health_score, instability, maintainability_from_text
from .models import (
    CouplingMetrics,
    FileMetrics,
    InstabilityMetrics,
    MaintainabilityMetrics,
    ProjectSummary,
)

__all__ = [
    "CouplingMetrics",
    "FileMetrics",
    "InstabilityMetrics",
    "MaintainabilityMetrics",
    "MetricsEngine",
    "ProjectSummary",
    "coupling",
    "health_score",
    "instability",
    "maintainability_from_text",
]
