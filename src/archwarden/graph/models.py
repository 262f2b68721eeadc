"""Dependency graph data models.

A ``DependencyGraph`` is an immutable snapshot: builds produce a new one
and swap it in, so a reader holding a reference never observes a
half-built graph. Edges are directed: ``adjacency[A]`` contains B means A
imports B. ``reverse`` is always derived from ``adjacency``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from ..scanning.models import ImportEdge
from .paths import normalize_path


def _empty() -> Mapping:
    return MappingProxyType({})


@dataclass(frozen=True)
class FileEntry:
    """Per-file graph entry, reusable while ``mtime`` is unchanged."""

    mtime: int
    size: int
    edges: tuple[ImportEdge, ...] = ()

    @property
    def targets(self) -> tuple[str, ...]:
        """Resolved targets in import order, without duplicates or self-edges."""
        seen: dict[str, None] = {}
        for edge in self.edges:
            if edge.target is not None and edge.target != edge.source:
                seen.setdefault(edge.target, None)
        return tuple(seen)


def derive_reverse(adjacency: Mapping[str, tuple[str, ...]]) -> dict[str, frozenset[str]]:
    """Reverse map (file -> files that import it), computed from adjacency only."""
    reverse: dict[str, set[str]] = {node: set() for node in adjacency}
    for source, targets in adjacency.items():
        for target in targets:
            reverse.setdefault(target, set()).add(source)
    return {node: frozenset(dependents) for node, dependents in reverse.items()}


@dataclass(frozen=True)
class DependencyGraph:
    """Immutable dependency graph snapshot.

    Diagnostics (``files_supplied``, ``skipped``, ``reused``) let callers
    detect truncation; they do not take part in equality.
    """

    entries: Mapping[str, FileEntry] = field(default_factory=_empty)
    adjacency: Mapping[str, tuple[str, ...]] = field(default_factory=_empty)
    reverse: Mapping[str, frozenset[str]] = field(default_factory=_empty)
    files_supplied: int = field(default=0, compare=False)
    skipped: Mapping[str, str] = field(default_factory=_empty, compare=False)
    reused: int = field(default=0, compare=False)
    _index: Mapping[str, str] = field(default_factory=_empty, compare=False, repr=False)

    @classmethod
    def from_entries(
        cls,
        entries: Mapping[str, FileEntry],
        files_supplied: int = 0,
        skipped: Optional[Mapping[str, str]] = None,
        reused: int = 0,
    ) -> "DependencyGraph":
        adjacency = {path: entry.targets for path, entry in entries.items()}
        return cls(
            entries=MappingProxyType(dict(entries)),
            adjacency=MappingProxyType(adjacency),
            reverse=MappingProxyType(derive_reverse(adjacency)),
            files_supplied=files_supplied,
            skipped=MappingProxyType(dict(skipped or {})),
            reused=reused,
            _index=MappingProxyType({normalize_path(p): p for p in entries}),
        )

    @property
    def files_processed(self) -> int:
        return len(self.entries)

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.adjacency.values())

    def node_for(self, path: str) -> Optional[str]:
        """The graph's own spelling of ``path`` (case/slash-insensitive), if present."""
        if path in self.adjacency:
            return path
        return self._index.get(normalize_path(path))

    def dependencies(self, path: str) -> tuple[str, ...]:
        node = self.node_for(path)
        return self.adjacency[node] if node is not None else ()

    def dependents(self, path: str) -> frozenset[str]:
        node = self.node_for(path)
        if node is None:
            return self.reverse.get(path, frozenset())
        return self.reverse.get(node, frozenset())

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.node_for(path) is not None

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class GraphStats:
    total_files: int
    total_dependencies: int
    average_dependencies: float

    @classmethod
    def of(cls, graph: DependencyGraph) -> "GraphStats":
        total_files = len(graph.adjacency)
        total_dependencies = graph.edge_count
        average = round(total_dependencies / total_files, 2) if total_files else 0.0
        return cls(total_files, total_dependencies, average)


@dataclass(frozen=True)
class BuildOutcome:
    """Result of a build request. ``declined`` means another build was running."""

    graph: DependencyGraph
    declined: bool = False
    reason: Optional[str] = None

    @property
    def truncated(self) -> bool:
        return self.graph.files_processed < self.graph.files_supplied


@dataclass(frozen=True)
class Cycle:
    """A closed walk through the graph.

    ``files`` runs from the start file to the repeated file, inclusive,
    so ``depth`` (edge count) is ``len(files) - 1``.
    """

    files: tuple[str, ...]
    message: str = ""

    @property
    def depth(self) -> int:
        return max(len(self.files) - 1, 0)

    @property
    def has_cycle(self) -> bool:
        return True

    @property
    def loop(self) -> tuple[str, ...]:
        """Only the closed part: from the first occurrence of the repeated file."""
        if not self.files:
            return ()
        closing = normalize_path(self.files[-1])
        for i, f in enumerate(self.files):
            if normalize_path(f) == closing:
                return self.files[i:]
        return self.files
