"""Relative import resolution.

Only imports starting with ``.`` are resolved. Package-style imports are
external by definition here: no package-manager resolution is attempted.
"""

from __future__ import annotations

import os
from typing import Optional

from .reader import LOCAL_FS, FileSystem

# Tried in order, first as ``<base><ext>`` then as ``<base>/index<ext>``
RESOLVE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs", "")


def resolve_relative_import(
    from_dir: str, raw_path: str, fs: FileSystem = LOCAL_FS
) -> Optional[str]:
    """Resolve ``raw_path`` against ``from_dir`` to an existing file.

    Returns:
        Absolute path of the first existing candidate, or None
    """
    if not raw_path.startswith("."):
        return None

    base = join_import(from_dir, raw_path)

    for ext in RESOLVE_EXTENSIONS:
        candidate = base + ext
        if _is_file(fs, candidate):
            return candidate

    for ext in RESOLVE_EXTENSIONS:
        candidate = os.path.join(base, f"index{ext}")
        if _is_file(fs, candidate):
            return candidate

    return None


def join_import(from_dir: str, raw_path: str) -> str:
    """Absolute, normalized ``from_dir/raw_path`` without touching the disk."""
    return os.path.normpath(os.path.join(os.path.abspath(from_dir), raw_path))


def _is_file(fs: FileSystem, path: str) -> bool:
    try:
        return fs.is_file(path)
    except (OSError, ValueError):
        return False
