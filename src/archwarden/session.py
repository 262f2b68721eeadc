"""Analysis session for archwarden.

An ``AnalysisSession`` owns every engine component for one project and
wires them to a single ``AnalysisConfig``. Builds swap in new graph and
learned-state snapshots; validation reads whatever snapshots are current
and may run at any time.

Example:
    >>> from archwarden.config import load_config
    >>> from archwarden.session import AnalysisSession
    >>>
    >>> session = AnalysisSession(load_config())
    >>> session.build(paths)
    >>> violations = session.validate_file(path, text, version=1, relative_to=root)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Hashable, Iterable, Optional

from .architecture import RuleEngine
from .cache import AnalysisCache
from .config import AnalysisConfig
from .graph import BuildOutcome, CycleDetector, GraphStore
from .learning import LearningKernel, LearnOutcome
from .logging_config import get_logger
from .metrics import FileMetrics, MetricsEngine, ProjectSummary
from .models import Severity, Violation, ViolationKind
from .scanning import ImportExtractor, ImportStatement, LOCAL_FS, FileSystem, UnusedImportDetector
from .scanning.languages import language_for_path
from .scanning.resolver import join_import, resolve_relative_import
from .semantics import SemanticClassifier

logger = get_logger(__name__)

FALLBACK_LANGUAGE = "javascript"


@dataclass(frozen=True)
class SessionBuildOutcome:
    graph: BuildOutcome
    learning: Optional[LearnOutcome] = None


def _relative(path: str, root: str) -> str:
    return os.path.relpath(path, root).replace("\\", "/")


class AnalysisSession:
    """All analysis components for one project."""

    def __init__(self, config: Optional[AnalysisConfig] = None, fs: FileSystem = LOCAL_FS):
        self.config = config or AnalysisConfig()
        self.fs = fs

        self.disk_cache: Optional[AnalysisCache] = None
        if self.config.cache_enabled:
            self.disk_cache = AnalysisCache(
                cache_dir=self.config.cache_dir,
                ttl_hours=self.config.cache_ttl_hours,
            )

        self.store = GraphStore(
            fs=fs,
            max_files=self.config.max_graph_files,
            max_file_size=self.config.max_file_size_bytes,
            disk_cache=self.disk_cache,
        )
        self.cycles = CycleDetector(
            self.store,
            max_depth=self.config.max_cycle_depth,
            import_cache_size=self.config.import_cache_capacity,
        )
        self.rules = RuleEngine(fs)
        self.kernel = LearningKernel(
            fs=fs,
            max_files=self.config.max_learn_files,
            anomaly_threshold=self.config.anomaly_threshold,
            similarity_threshold=self.config.similarity_threshold,
        )
        self.semantics = SemanticClassifier()
        self.metrics_engine = MetricsEngine(fs, cache_size=self.config.import_cache_capacity)
        self.unused = UnusedImportDetector()
        self._extractor = ImportExtractor()
        self._results: dict[str, tuple[Hashable, list[Violation]]] = {}

    def build(self, file_paths: Iterable[str]) -> SessionBuildOutcome:
        """Rebuild the dependency graph and, with ``enable_ai``, the learned model."""
        paths = list(file_paths)
        graph = self.store.build(paths)
        learning = self.kernel.learn(paths) if self.config.enable_ai else None
        if not graph.declined:
            # Deep-cycle findings depend on the graph
            self._results.clear()
        return SessionBuildOutcome(graph=graph, learning=learning)

    def validate_file(
        self,
        path: str,
        text: str,
        version: Hashable,
        relative_to: Optional[str] = None,
    ) -> list[Violation]:
        """All findings for one file's current text.

        The same list object is returned again while ``version`` is
        unchanged for ``path``.
        """
        cached = self._results.get(path)
        if cached is not None and cached[0] == version:
            return cached[1]

        config = self.config
        language = language_for_path(path) or FALLBACK_LANGUAGE
        imports = self._extractor.parse(text, language)
        violations: list[Violation] = []

        if len(imports) > config.max_imports:
            violations.append(
                Violation(
                    kind=ViolationKind.GOD_OBJECT,
                    message=(
                        f"God Object Alert: This file has {len(imports)} imports "
                        f"(Threshold: {config.max_imports}). Consider refactoring."
                    ),
                    severity=Severity.WARNING,
                )
            )

        if config.enable_ai:
            anomaly = self.kernel.detect_anomaly(text)
            if anomaly.is_anomaly:
                violations.append(
                    Violation(
                        kind=ViolationKind.ANOMALY,
                        message=anomaly.message,
                        severity=Severity.WARNING,
                        score=anomaly.score,
                    )
                )

        if config.detect_unused_imports:
            for unused in self.unused.detect(text, language):
                violations.append(
                    Violation(
                        kind=ViolationKind.UNUSED_IMPORT,
                        message=f"Unused import '{unused.name}' - Consider removing it",
                        severity=Severity.HINT,
                        index=unused.index,
                        length=unused.length,
                    )
                )

        if config.check_deep_cycles:
            cycle = self.cycles.detect_deep_cycle(path)
            if cycle is not None:
                violations.append(
                    Violation(kind=ViolationKind.DEEP_CYCLE, message=cycle.message, severity=Severity.WARNING)
                )

        source_rel = _relative(path, relative_to) if relative_to else os.path.basename(path)
        for imp in imports:
            violations.extend(self._check_import(path, source_rel, imp, relative_to))

        self._results[path] = (version, violations)
        logger.debug(f"Validated {path}: {len(violations)} findings")
        return violations

    def metrics(self, file_paths: Iterable[str]) -> tuple[list[FileMetrics], ProjectSummary]:
        paths = list(file_paths)
        self.metrics_engine.analyze(paths)
        return (
            [self.metrics_engine.get_file_metrics(p) for p in paths],
            self.metrics_engine.get_project_summary(),
        )

    def forget(self, path: str) -> None:
        """Drop the cached findings for ``path``."""
        self._results.pop(path, None)

    def close(self) -> None:
        if self.disk_cache is not None:
            self.disk_cache.close()

    def _check_import(
        self, path: str, source_rel: str, imp: ImportStatement, relative_to: Optional[str]
    ) -> list[Violation]:
        config = self.config
        target_abs = None
        target_rel = imp.path
        if imp.is_relative:
            from_dir = os.path.dirname(path)
            # Prefer the existing file so extension-less imports reach the cycle check
            target_abs = resolve_relative_import(from_dir, imp.path, self.fs) or join_import(
                from_dir, imp.path
            )
            if relative_to:
                target_rel = _relative(target_abs, relative_to)

        violation = self.rules.validate(source_rel, target_rel, config.rules, config.layers)
        if violation is not None:
            return [violation.with_span(imp.index, imp.length)]

        if target_abs is None:
            return []

        found: list[Violation] = []
        if config.enforce_encapsulation:
            violation = self.rules.check_encapsulation(target_abs)
            if violation is not None:
                found.append(violation.with_span(imp.index, imp.length))

        if config.check_cycles:
            cycle = self.cycles.check_direct_cycle(path, target_abs)
            if cycle is not None:
                found.append(
                    Violation(
                        kind=ViolationKind.CYCLE,
                        message=cycle.message,
                        severity=Severity.WARNING,
                        index=imp.index,
                        length=imp.length,
                    )
                )

        if config.enable_ai:
            verdict = self.semantics.analyze(path, target_abs)
            if verdict is not None:
                found.append(
                    Violation(
                        kind=ViolationKind.SEMANTIC,
                        message=verdict.message,
                        severity=Severity.WARNING,
                        index=imp.index,
                        length=imp.length,
                        score=verdict.score,
                    )
                )
        return found
