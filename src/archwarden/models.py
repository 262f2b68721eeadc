"""Findings reported by archwarden."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ViolationKind(Enum):
    """What kind of check produced a finding."""

    GOD_OBJECT = "god_object"  # too many imports in one file
    ANOMALY = "anomaly"  # import count far above the project norm
    UNUSED_IMPORT = "unused_import"
    DEEP_CYCLE = "deep_cycle"
    RULE = "rule"  # explicit disallow rule
    LAYER = "layer"  # inner layer depends on outer layer
    ENCAPSULATION = "encapsulation"  # bypasses a directory's index file
    CYCLE = "cycle"  # direct A <-> B or self import
    SEMANTIC = "semantic"  # suspicious concept-to-concept flow


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    HINT = "hint"


@dataclass(frozen=True)
class Violation:
    """A single finding.

    ``index`` and ``length`` locate the offending import in the file's
    text; whole-file findings use 0/0.
    """

    kind: ViolationKind
    message: str
    severity: Severity = Severity.ERROR
    index: int = 0
    length: int = 0
    score: Optional[float] = None

    def with_span(self, index: int, length: int) -> "Violation":
        return Violation(self.kind, self.message, self.severity, index, length, self.score)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "severity": self.severity.value,
            "index": self.index,
            "length": self.length,
            "score": self.score,
        }
