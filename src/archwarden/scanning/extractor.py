"""Regex-based import extraction.

Pure functions of (text, language): no I/O, no state. Results are
approximate by design; each language is a list of patterns registered in
``languages.EXTRACTORS``.
"""

from __future__ import annotations

import heapq
import re
from typing import Iterator, Optional

from .languages import EXTRACTORS, is_language_supported, language_for_path, supported_languages
from .models import ImportStatement


def _matches(pattern: re.Pattern[str], text: str) -> Iterator[tuple[int, str, re.Match[str]]]:
    for match in pattern.finditer(text):
        import_path = next((g for g in match.groups() if g), None)
        if import_path:
            yield match.start(), import_path, match


def parse_imports(text: str, language: Optional[str]) -> Iterator[ImportStatement]:
    """Yield the import statements found in ``text``, in document order.

    Each pattern scans the document lazily and the streams are merged by
    offset. A match is kept once per ``(offset, path)`` pair: overlapping
    patterns (e.g. a ``require()`` seen by two rules) do not produce
    duplicates.

    Unsupported or missing language tags yield nothing. Each call returns
    a fresh generator, so iteration can be restarted by calling again.
    """
    extractor = EXTRACTORS.get(language) if language else None
    if extractor is None:
        return

    streams = [_matches(pattern, text) for pattern in extractor.compiled]
    last: Optional[tuple[int, str]] = None
    for start, import_path, match in heapq.merge(*streams, key=lambda m: (m[0], m[1])):
        if (start, import_path) == last:
            continue
        last = (start, import_path)
        yield ImportStatement(
            path=import_path,
            index=start,
            length=match.end() - start,
            full_match=match.group(0),
        )


class ImportExtractor:
    """Object facade over ``parse_imports`` for callers that want lists."""

    def parse(self, text: str, language: Optional[str]) -> list[ImportStatement]:
        """All imports in ``text``, sorted by position."""
        return list(parse_imports(text, language))

    def parse_file_text(self, text: str, path: str, default: Optional[str] = None) -> list[ImportStatement]:
        """Parse using the language implied by ``path``'s extension."""
        return self.parse(text, language_for_path(path) or default)

    def count(self, text: str, language: Optional[str]) -> int:
        return sum(1 for _ in parse_imports(text, language))

    is_language_supported = staticmethod(is_language_supported)
    supported_languages = staticmethod(supported_languages)
