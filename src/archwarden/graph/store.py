"""Dependency graph construction from source files on disk."""

from __future__ import annotations

import os
import threading
from dataclasses import replace
from typing import Iterable, Optional

from ..cache import AnalysisCache
from ..logging_config import get_logger
from ..scanning.extractor import ImportExtractor
from ..scanning.models import ImportEdge, ImportStatement, Ok, ReadResult, Skipped, SourceFile
from ..scanning.reader import LOCAL_FS, FileSystem, read_source, stat_source
from ..scanning.resolver import resolve_relative_import
from .models import BuildOutcome, DependencyGraph, FileEntry, GraphStats
from .paths import normalize_path

logger = get_logger(__name__)

DEFAULT_MAX_FILES = 50
DEFAULT_MAX_FILE_SIZE = 500_000
FALLBACK_LANGUAGE = "javascript"
ALREADY_RUNNING = "already running"

# Marks an entry whose edges are kept but must be re-read on the next build
_STALE_MTIME = -1


class GraphStore:
    """Owns the current ``DependencyGraph`` snapshot.

    Builds are single-flight: a second ``build`` while one is running
    returns a declined ``BuildOutcome`` instead of blocking. Each build
    assembles a complete new snapshot and replaces the old one with one
    assignment.
    """

    def __init__(
        self,
        fs: FileSystem = LOCAL_FS,
        max_files: int = DEFAULT_MAX_FILES,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        disk_cache: Optional[AnalysisCache] = None,
    ):
        if max_files < 1:
            raise ValueError("max_files must be at least 1")
        self.fs = fs
        self.max_files = max_files
        self.max_file_size = max_file_size
        self.disk_cache = disk_cache
        self._extractor = ImportExtractor()
        self._graph = DependencyGraph()
        self._lock = threading.Lock()

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    @property
    def is_building(self) -> bool:
        return self._lock.locked()

    def build(self, file_paths: Iterable[str]) -> BuildOutcome:
        """Build a new snapshot from ``file_paths``.

        Only the first ``max_files`` distinct paths are processed; the rest
        are recorded in ``skipped`` as ``"file limit"``.
        """
        if not self._lock.acquire(blocking=False):
            logger.debug("Graph build declined: another build is running")
            return BuildOutcome(graph=self._graph, declined=True, reason=ALREADY_RUNNING)

        try:
            previous = self._graph
            paths = list(dict.fromkeys(os.path.abspath(p) for p in file_paths))
            skipped: dict[str, str] = {p: "file limit" for p in paths[self.max_files :]}

            entries: dict[str, FileEntry] = {}
            reused = 0
            for path in paths[: self.max_files]:
                prior = previous.entries.get(path)
                result = self._process(path, prior)
                if isinstance(result, Skipped):
                    skipped[path] = result.reason
                    continue
                entry = result.value
                if entry is prior:
                    reused += 1
                entries[path] = entry

            graph = DependencyGraph.from_entries(
                entries, files_supplied=len(paths), skipped=skipped, reused=reused
            )
            self._graph = graph
            logger.debug(
                f"Graph built: {graph.files_processed}/{graph.files_supplied} files, "
                f"{graph.edge_count} edges, {reused} reused"
            )
            return BuildOutcome(graph=graph)
        finally:
            self._lock.release()

    def invalidate(self, path: str) -> bool:
        """Force ``path`` to be re-read on the next build.

        Its current edges stay visible until then. Returns False when the
        file is not in the graph.
        """
        with self._lock:
            graph = self._graph
            node = graph.node_for(path)
            if node is None:
                return False
            entries = dict(graph.entries)
            entries[node] = replace(entries[node], mtime=_STALE_MTIME)
            self._graph = DependencyGraph.from_entries(
                entries,
                files_supplied=graph.files_supplied,
                skipped=graph.skipped,
                reused=graph.reused,
            )
            return True

    def clear(self) -> None:
        with self._lock:
            self._graph = DependencyGraph()

    def stats(self) -> GraphStats:
        return GraphStats.of(self._graph)

    def _process(self, path: str, prior: Optional[FileEntry]) -> ReadResult[FileEntry]:
        stat = stat_source(path, self.fs, self.max_file_size)
        if isinstance(stat, Skipped):
            return stat
        source = stat.value

        if prior is not None and prior.mtime == source.mtime:
            return Ok(prior)

        parsed = self._parse(source)
        if isinstance(parsed, Skipped):
            return parsed

        from_dir = os.path.dirname(path)
        edges = tuple(
            ImportEdge(
                source=path,
                raw=imp.path,
                index=imp.index,
                length=imp.length,
                target=resolve_relative_import(from_dir, imp.path, self.fs) if imp.is_relative else None,
            )
            for imp in parsed.value
        )
        return Ok(FileEntry(mtime=source.mtime, size=source.size, edges=edges))

    def _parse(self, source: SourceFile) -> ReadResult[list[ImportStatement]]:
        key = None
        if self.disk_cache is not None and self.disk_cache.enabled:
            key = AnalysisCache.file_key(normalize_path(source.path), source.mtime, source.size)
            cached = self.disk_cache.get(key)
            if cached is not None:
                return Ok(cached)

        text = read_source(source.path, self.fs)
        if isinstance(text, Skipped):
            return text

        imports = self._extractor.parse(text.value, source.language or FALLBACK_LANGUAGE)
        if key is not None:
            self.disk_cache.set(key, imports)
        return Ok(imports)
