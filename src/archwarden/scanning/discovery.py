"""Source file discovery for command-line runs."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from ..exceptions import InvalidPathError
from ..logging_config import get_logger
from .languages import supported_extensions

logger = get_logger(__name__)


def should_skip_file(relative: Path, exclude_patterns: Iterable[str]) -> bool:
    """
    Check if a file should be skipped based on exclusion patterns.

    A pattern excludes a file when it matches the file's project-relative
    path or any of its parent directories, so ``node_modules/*`` excludes
    everything below ``node_modules``.
    """
    candidates = [relative, *list(relative.parents)[:-1]]
    for pattern in exclude_patterns:
        if any(candidate.match(pattern) for candidate in candidates):
            return True
    return False


def discover_files(
    root: Path,
    exclude_patterns: Iterable[str] = (),
    extensions: Optional[Iterable[str]] = None,
) -> list[str]:
    """Absolute paths of supported source files under ``root``, sorted.

    Raises:
        InvalidPathError: If ``root`` does not exist
    """
    root = Path(root)
    if not root.exists():
        raise InvalidPathError(root, "does not exist")
    if root.is_file():
        return [str(root.resolve())]

    ext_set = set(extensions) if extensions is not None else set(supported_extensions())
    patterns = list(exclude_patterns)
    found: list[str] = []
    skipped = 0
    for filepath in sorted(root.rglob("*")):
        if filepath.suffix not in ext_set or not filepath.is_file():
            continue
        if should_skip_file(filepath.relative_to(root), patterns):
            skipped += 1
            continue
        found.append(str(filepath.resolve()))

    logger.debug(f"Discovered {len(found)} files under {root} ({skipped} excluded)")
    return found
