"""Path identity used by cycle detection and metrics.

Two spellings denote the same file when they are equal after lowercasing
and slash normalization, or when one equals the other minus its extension
(extension-less import strings). Prefix matches do not count: ``user``
and ``user-profile.js`` are different files.
"""

from __future__ import annotations

import re

_EXTENSION = re.compile(r"\.[^/.]+$")
_LEADING_RELATIVE = re.compile(r"^(?:\.\.?/)+")


def normalize_path(path: str) -> str:
    return path.replace("\\", "/").lower()


def strip_extension(path: str) -> str:
    return _EXTENSION.sub("", path)


def same_file(path_a: str, path_b: str) -> bool:
    a = normalize_path(path_a)
    b = normalize_path(path_b)
    if a == b:
        return True
    return a == strip_extension(b) or b == strip_extension(a)


def module_key(path: str) -> str:
    """Normalized, extension-less form with leading ``./`` and ``../`` dropped."""
    return _LEADING_RELATIVE.sub("", strip_extension(normalize_path(path)))


def segment_suffix_match(candidate: str, target: str) -> bool:
    """True when ``candidate`` equals ``target`` or ends with ``/`` + ``target``.

    Both arguments are expected in ``module_key`` form.
    """
    if not candidate or not target:
        return False
    return candidate == target or candidate.endswith("/" + target)
