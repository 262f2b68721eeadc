"""Metric result models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class InstabilityMetrics:
    instability: float  # Ce / (Ca + Ce), 0 when isolated
    classification: str
    afferent: int
    efferent: int


@dataclass(frozen=True)
class CouplingMetrics:
    afferent: int
    efferent: int
    total: int
    quality: str


@dataclass(frozen=True)
class MaintainabilityMetrics:
    index: float  # 0-100
    grade: str
    suggestions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FileMetrics:
    """All metrics for one file. ``file`` is the basename."""

    file: str
    instability: InstabilityMetrics
    coupling: CouplingMetrics
    maintainability: MaintainabilityMetrics

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ProjectSummary:
    files_analyzed: int = 0
    average_instability: float = 0.0
    average_maintainability: float = 0.0
    total_afferent: int = 0
    total_efferent: int = 0
    health_score: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)
