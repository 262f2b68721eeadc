"""File-system access.

The engine never touches ``os`` directly: it goes through a ``FileSystem``
so tests and editor hosts can substitute in-memory or unsaved-buffer
views. ``read_source`` turns every failure into a ``Skipped`` result with
the reason attached instead of raising.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Protocol

from ..exceptions import FileAccessError
from ..logging_config import get_logger
from .languages import language_for_path
from .models import Ok, ReadResult, Skipped, SourceFile

logger = get_logger(__name__)


@dataclass(frozen=True)
class FileStat:
    mtime: int  # nanoseconds
    size: int


class FileSystem(Protocol):
    """Minimal file-system surface used by the engine."""

    def exists(self, path: str) -> bool: ...

    def is_file(self, path: str) -> bool: ...

    def stat(self, path: str) -> FileStat: ...

    def read_text(self, path: str) -> str: ...


class LocalFileSystem:
    """``FileSystem`` backed by the real disk."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def stat(self, path: str) -> FileStat:
        try:
            st = os.stat(path)
        except OSError as e:
            raise FileAccessError(path, e.strerror or str(e)) from e
        return FileStat(mtime=st.st_mtime_ns, size=st.st_size)

    def read_text(self, path: str) -> str:
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            raise FileAccessError(path, e.strerror or str(e)) from e


LOCAL_FS = LocalFileSystem()


def stat_source(
    path: str, fs: FileSystem = LOCAL_FS, max_size: Optional[int] = None
) -> ReadResult[SourceFile]:
    """Stat ``path`` into a SourceFile, or explain why it was skipped."""
    if not fs.is_file(path):
        return Skipped(path, "missing")
    try:
        st = fs.stat(path)
    except FileAccessError as e:
        logger.debug(f"Skipping {path}: {e.reason}")
        return Skipped(path, f"stat failed: {e.reason}")
    if max_size is not None and st.size > max_size:
        logger.debug(f"Skipping {path}: {st.size} bytes exceeds {max_size}")
        return Skipped(path, "too large")
    return Ok(SourceFile(path=path, language=language_for_path(path), mtime=st.mtime, size=st.size))


def read_source(path: str, fs: FileSystem = LOCAL_FS) -> ReadResult[str]:
    """Read ``path`` as text, or explain why it was skipped."""
    try:
        return Ok(fs.read_text(path))
    except FileAccessError as e:
        logger.debug(f"Skipping {path}: {e.reason}")
        return Skipped(path, f"read failed: {e.reason}")
