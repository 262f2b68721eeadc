"""Dependency graph: snapshot models, store, and cycle detection."""

from .cycles import CycleDetector, DirectCycleChecker, detect_deep_cycle, find_all_cycles
from .models import BuildOutcome, Cycle, DependencyGraph, FileEntry, GraphStats, derive_reverse
from .paths import normalize_path, same_file, strip_extension
from .store import GraphStore

__all__ = [
    "BuildOutcome",
    "Cycle",
    "CycleDetector",
    "DependencyGraph",
    "DirectCycleChecker",
    "FileEntry",
    "GraphStats",
    "GraphStore",
    "derive_reverse",
    "detect_deep_cycle",
    "find_all_cycles",
    "normalize_path",
    "same_file",
    "strip_extension",
]
