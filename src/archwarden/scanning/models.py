"""Scanning data models: source files, import statements, import edges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class SourceFile:
    """A file as seen by one analysis pass. Re-read when ``mtime`` changes."""

    path: str
    language: Optional[str]
    mtime: int  # st_mtime_ns
    size: int


@dataclass(frozen=True)
class ImportStatement:
    """One recognized import/require construct.

    ``index`` and ``length`` locate ``full_match`` in the source text.
    """

    path: str
    index: int
    length: int
    full_match: str = ""

    @property
    def is_relative(self) -> bool:
        return self.path.startswith(".")


@dataclass(frozen=True)
class ImportEdge:
    """An import owned by ``source``; ``target`` is None for external imports."""

    source: str
    raw: str
    index: int
    length: int
    target: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.target is not None


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful read."""

    value: T


@dataclass(frozen=True)
class Skipped:
    """A file that produced no data, and why."""

    path: str
    reason: str


ReadResult = Union[Ok[T], Skipped]
