"""Circular dependency detection.

Two checks:

- ``DirectCycleChecker``: does the file being imported import us back?
  Reads the target on demand, so it works without a built graph.
- ``detect_deep_cycle``: bounded depth-first search over a graph snapshot
  for longer loops (A -> B -> C -> A).
"""

from __future__ import annotations

import os
from typing import Optional

from ..cache import BoundedCache, LRUCache
from ..exceptions import InvalidConfigError
from ..logging_config import get_logger
from ..scanning.extractor import ImportExtractor
from ..scanning.models import ImportStatement, Skipped
from ..scanning.reader import LOCAL_FS, FileSystem, read_source, stat_source
from ..scanning.resolver import join_import
from .models import Cycle, DependencyGraph
from .paths import normalize_path, same_file
from .store import FALLBACK_LANGUAGE, GraphStore

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 10
MIN_DEPTH = 2
MAX_DEPTH = 20
DEFAULT_IMPORT_CACHE_SIZE = 200


def validate_max_depth(max_depth: int) -> int:
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        raise InvalidConfigError("max_cycle_depth", max_depth, "must be an integer")
    if not MIN_DEPTH <= max_depth <= MAX_DEPTH:
        raise InvalidConfigError(
            "max_cycle_depth", max_depth, f"must be between {MIN_DEPTH} and {MAX_DEPTH}"
        )
    return max_depth


class DirectCycleChecker:
    """Detects A -> B -> A by parsing B's imports.

    Parsed imports are cached per (path, mtime), so an edited file is
    re-parsed on the next check.
    """

    def __init__(
        self,
        fs: FileSystem = LOCAL_FS,
        cache: Optional[BoundedCache[tuple[str, int], list[ImportStatement]]] = None,
    ):
        self.fs = fs
        self.cache = cache if cache is not None else LRUCache(DEFAULT_IMPORT_CACHE_SIZE)
        self._extractor = ImportExtractor()

    def check(self, source: str, target: str) -> Optional[Cycle]:
        if not self.fs.exists(target):
            return None

        if same_file(source, target):
            return Cycle(files=(source,), message="Self-import detected!")

        imports = self._imports(target)
        if imports is None:
            return None

        target_dir = os.path.dirname(target)
        for imp in imports:
            if not imp.is_relative:
                continue
            if same_file(join_import(target_dir, imp.path), source):
                return Cycle(
                    files=(source, target, source),
                    message=(
                        f"Circular Dependency Detected! "
                        f"'{os.path.basename(source)}' <-> '{os.path.basename(target)}'"
                    ),
                )
        return None

    def clear_cache(self) -> None:
        self.cache.clear()

    def _imports(self, path: str) -> Optional[list[ImportStatement]]:
        stat = stat_source(path, self.fs)
        if isinstance(stat, Skipped):
            return None
        key = (normalize_path(path), stat.value.mtime)

        imports = self.cache.get(key)
        if imports is not None:
            return imports

        text = read_source(path, self.fs)
        if isinstance(text, Skipped):
            return None
        imports = self._extractor.parse(text.value, stat.value.language or FALLBACK_LANGUAGE)
        self.cache.set(key, imports)
        return imports


def detect_deep_cycle(
    graph: DependencyGraph, start: str, max_depth: int = DEFAULT_MAX_DEPTH
) -> Optional[Cycle]:
    """Find a cycle reachable from ``start`` within ``max_depth`` edges.

    Iterative DFS; every stack frame carries its own path tuple. Nodes are
    visited at most once per search, so some cycles through an already
    explored node go unreported. Frames beyond ``max_depth`` are not
    expanded.

    Returns:
        The walk from ``start`` to the first repeated file, or None
    """
    validate_max_depth(max_depth)
    root = graph.node_for(start)
    if root is None:
        return None

    root_key = normalize_path(root)
    visited = {root_key}
    on_path = {root_key}
    stack = [(root_key, (root,), iter(graph.dependencies(root)))]

    while stack:
        key, path, deps = stack[-1]
        dep = next(deps, None)
        if dep is None:
            stack.pop()
            on_path.discard(key)
            continue

        if len(path) > max_depth:
            continue

        dep_key = normalize_path(dep)
        if dep_key in on_path:
            files = path + (dep,)
            # A bare self loop is the direct check's business
            if len(files) > 2:
                return Cycle(files=files, message=_deep_message(files))
            continue
        if dep_key in visited:
            continue

        visited.add(dep_key)
        on_path.add(dep_key)
        stack.append((dep_key, path + (dep,), iter(graph.dependencies(dep))))

    return None


def find_all_cycles(graph: DependencyGraph, max_depth: int = DEFAULT_MAX_DEPTH) -> list[Cycle]:
    """Distinct cycles found by searching from every node in sorted order.

    Nodes already on a reported cycle are not used as starting points.
    Two walks closing the same loop count once.
    """
    validate_max_depth(max_depth)
    cycles: list[Cycle] = []
    covered: set[str] = set()
    seen_loops: set[tuple[str, ...]] = set()

    for node in sorted(graph.adjacency):
        if normalize_path(node) in covered:
            continue
        cycle = detect_deep_cycle(graph, node, max_depth)
        if cycle is None:
            continue
        covered.update(normalize_path(f) for f in cycle.files)
        canonical = _canonical_loop(cycle.loop)
        if canonical in seen_loops:
            continue
        seen_loops.add(canonical)
        cycles.append(cycle)

    return cycles


def _canonical_loop(loop: tuple[str, ...]) -> tuple[str, ...]:
    """Rotation of the loop (without its closing node) starting at its smallest member."""
    members = [normalize_path(f) for f in loop[:-1]]
    if not members:
        return ()
    pivot = members.index(min(members))
    return tuple(members[pivot:] + members[:pivot])


def _deep_message(files: tuple[str, ...]) -> str:
    names = " → ".join(os.path.basename(f) for f in files)
    return f"Deep Circular Dependency Detected ({len(files) - 1} levels) - {names}"


class CycleDetector:
    """Both cycle checks bound to a ``GraphStore``."""

    def __init__(
        self,
        store: GraphStore,
        max_depth: int = DEFAULT_MAX_DEPTH,
        import_cache_size: int = DEFAULT_IMPORT_CACHE_SIZE,
    ):
        self.store = store
        self.max_depth = validate_max_depth(max_depth)
        self.direct = DirectCycleChecker(store.fs, LRUCache(import_cache_size))

    def check_direct_cycle(self, source: str, target: str) -> Optional[Cycle]:
        return self.direct.check(source, target)

    def detect_deep_cycle(self, start: str) -> Optional[Cycle]:
        return detect_deep_cycle(self.store.graph, start, self.max_depth)

    def get_all_cycles(self) -> list[Cycle]:
        return find_all_cycles(self.store.graph, self.max_depth)
