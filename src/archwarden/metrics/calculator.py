"""Per-file and project-wide architecture metrics.

``MetricsEngine.analyze`` works from raw import strings rather than the
resolved graph, so package-style imports (``services/api``) also count
when they name a file in the analyzed set.
"""

from __future__ import annotations

import os
from typing import Iterable, Optional

from ..cache import LRUCache
from ..graph.paths import module_key, normalize_path, segment_suffix_match, strip_extension
from ..logging_config import get_logger
from ..scanning.extractor import ImportExtractor
from ..scanning.models import Skipped
from ..scanning.reader import LOCAL_FS, FileSystem, read_source, stat_source
from . import formulas
from .models import (
    CouplingMetrics,
    FileMetrics,
    InstabilityMetrics,
    MaintainabilityMetrics,
    ProjectSummary,
)

logger = get_logger(__name__)

DEFAULT_CACHE_SIZE = 200
FALLBACK_LANGUAGE = "javascript"


class MetricsEngine:
    """Coupling, instability and maintainability for a set of files."""

    def __init__(self, fs: FileSystem = LOCAL_FS, cache_size: int = DEFAULT_CACHE_SIZE):
        self.fs = fs
        self._extractor = ImportExtractor()
        self._imports: LRUCache[tuple[str, int], list[str]] = LRUCache(cache_size)
        self._dependencies: dict[str, list[str]] = {}
        self._dependents: dict[str, list[str]] = {}

    @property
    def files(self) -> list[str]:
        return list(self._dependencies)

    def analyze(self, file_paths: Iterable[str]) -> None:
        """Rebuild the dependency and dependent maps from scratch."""
        paths = list(dict.fromkeys(file_paths))
        dependencies = {path: self._raw_imports(path) for path in paths}

        keys = [(path, strip_extension(normalize_path(path))) for path in paths]
        dependents: dict[str, list[str]] = {}
        for source, raw_imports in dependencies.items():
            for raw in raw_imports:
                match = _find_file(module_key(raw), keys)
                if match is not None:
                    dependents.setdefault(match, []).append(source)

        self._dependencies = dependencies
        self._dependents = dependents
        logger.debug(f"Metrics analyzed {len(paths)} files")

    def calculate_instability(self, path: str) -> InstabilityMetrics:
        afferent, efferent = self._coupling_counts(path)
        return formulas.instability(afferent, efferent)

    def calculate_coupling(self, path: str) -> CouplingMetrics:
        afferent, efferent = self._coupling_counts(path)
        return formulas.coupling(afferent, efferent)

    def calculate_maintainability(self, path: str) -> MaintainabilityMetrics:
        stat = stat_source(path, self.fs)
        if isinstance(stat, Skipped):
            return MaintainabilityMetrics(index=0.0, grade="Unknown")
        text = read_source(path, self.fs)
        if isinstance(text, Skipped):
            return MaintainabilityMetrics(index=0.0, grade="Error", suggestions=("Could not analyze file",))
        return formulas.maintainability_from_text(text.value)

    maintainability_from_text = staticmethod(formulas.maintainability_from_text)

    def get_file_metrics(self, path: str) -> FileMetrics:
        return FileMetrics(
            file=os.path.basename(path),
            instability=self.calculate_instability(path),
            coupling=self.calculate_coupling(path),
            maintainability=self.calculate_maintainability(path),
        )

    def get_project_summary(self) -> ProjectSummary:
        count = len(self._dependencies)
        if count == 0:
            return ProjectSummary()

        total_instability = 0.0
        total_maintainability = 0.0
        total_afferent = 0
        total_efferent = 0
        for path in self._dependencies:
            inst = self.calculate_instability(path)
            total_instability += inst.instability
            total_afferent += inst.afferent
            total_efferent += inst.efferent
            total_maintainability += self.calculate_maintainability(path).index

        avg_instability = total_instability / count
        avg_maintainability = total_maintainability / count
        return ProjectSummary(
            files_analyzed=count,
            average_instability=round(avg_instability, 3),
            average_maintainability=round(avg_maintainability, 1),
            total_afferent=total_afferent,
            total_efferent=total_efferent,
            health_score=formulas.health_score(avg_instability, avg_maintainability),
        )

    def clear(self) -> None:
        self._dependencies = {}
        self._dependents = {}
        self._imports.clear()

    def _coupling_counts(self, path: str) -> tuple[int, int]:
        return len(self._dependents.get(path, ())), len(self._dependencies.get(path, ()))

    def _raw_imports(self, path: str) -> list[str]:
        stat = stat_source(path, self.fs)
        if isinstance(stat, Skipped):
            return []
        key = (normalize_path(path), stat.value.mtime)
        cached = self._imports.get(key)
        if cached is not None:
            return cached

        text = read_source(path, self.fs)
        if isinstance(text, Skipped):
            return []
        imports = [
            imp.path
            for imp in self._extractor.parse(text.value, stat.value.language or FALLBACK_LANGUAGE)
        ]
        self._imports.set(key, imports)
        return imports


def _find_file(import_key: str, keys: list[tuple[str, str]]) -> Optional[str]:
    """First file whose extension-less path is, or ends with, ``import_key``."""
    for path, file_key in keys:
        if segment_suffix_match(file_key, import_key):
            return path
    return None
