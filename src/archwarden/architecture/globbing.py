"""Path glob matching for rules and layers.

Syntax:
    ``**``      zero or more whole path segments
    ``*``       any run of characters within one segment
    ``?``       one character within a segment
    ``[abc]``   character class, ``[!abc]`` / ``[^abc]`` negated
    ``{a,b}``   alternatives within a segment
    ``\\x``     literal ``x``

With ``match_base``, a pattern containing no ``/`` is matched against the
path's basename only.
"""

from __future__ import annotations

import re
from functools import lru_cache

from ..exceptions import InvalidConfigError

_CLASS_ESCAPES = set("\\[]^&~|")


def glob_match(path: str, pattern: str, match_base: bool = False) -> bool:
    """Match a slash-separated ``path`` against ``pattern``.

    Raises:
        InvalidConfigError: If ``pattern`` is not a usable glob
    """
    if not isinstance(pattern, str):
        raise InvalidConfigError("pattern", pattern, "must be a string")
    regex = compile_glob(pattern)
    if match_base and "/" not in pattern:
        path = path.rsplit("/", 1)[-1]
    return regex.fullmatch(path) is not None


@lru_cache(maxsize=512)
def compile_glob(pattern: str) -> re.Pattern:
    if not pattern:
        raise InvalidConfigError("pattern", pattern, "must not be empty")

    segments = pattern.split("/")
    last = len(segments) - 1
    parts: list[str] = []
    for i, segment in enumerate(segments):
        if segment == "**":
            if i == last:
                if parts and parts[-1] == "/":
                    # "a/**" also matches "a" itself
                    parts.pop()
                    parts.append("(?:/.*)?")
                else:
                    parts.append(".*")
            else:
                parts.append("(?:[^/]+/)*")
            continue
        parts.append(_translate_segment(segment, pattern))
        if i != last:
            parts.append("/")
    return re.compile("".join(parts), re.DOTALL)


def _translate_segment(segment: str, pattern: str) -> str:
    out: list[str] = []
    i = 0
    n = len(segment)
    while i < n:
        c = segment[i]
        i += 1
        if c == "*":
            # "a**b" inside a segment behaves like "*"
            while i < n and segment[i] == "*":
                i += 1
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "\\":
            if i < n:
                out.append(re.escape(segment[i]))
                i += 1
            else:
                out.append(re.escape("\\"))
        elif c == "[":
            end = _class_end(segment, i)
            if end < 0:
                raise InvalidConfigError("pattern", pattern, "unbalanced '['")
            body = segment[i:end]
            i = end + 1
            negate = body[:1] in ("!", "^")
            if negate:
                body = body[1:]
            escaped = "".join("\\" + ch if ch in _CLASS_ESCAPES else ch for ch in body)
            out.append(f"[^/{escaped}]" if negate else f"(?!/)[{escaped}]")
        elif c == "{":
            end = segment.find("}", i)
            body = segment[i:end] if end >= 0 else ""
            if end < 0 or "," not in body:
                out.append(re.escape(c))
                continue
            i = end + 1
            alternatives = "|".join(_translate_segment(alt, pattern) for alt in body.split(","))
            out.append(f"(?:{alternatives})")
        else:
            out.append(re.escape(c))
    return "".join(out)


def _class_end(segment: str, start: int) -> int:
    """Index of the ``]`` closing a class that opened just before ``start``, or -1."""
    i = start
    if i < len(segment) and segment[i] in "!^":
        i += 1
    # A leading "]" is a literal member
    if i < len(segment) and segment[i] == "]":
        i += 1
    return segment.find("]", i)
