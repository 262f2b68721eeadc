"""Language extractors: the single source of truth for import patterns.

Adding a new language:
  1. Build a LanguageExtractor with its extensions and import patterns.
  2. Pass it to register_extractor(). The extractor and graph store pick it
     up automatically.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Optional

from ..exceptions import UnsupportedLanguageError


@dataclass(frozen=True)
class LanguageExtractor:
    """Everything the import extractor needs to know about a language.

    Each pattern captures the import path in its first non-empty group.
    Patterns run in list order.
    """

    name: str
    extensions: tuple[str, ...]
    import_patterns: tuple[str, ...]
    flags: int = 0
    compiled: tuple[re.Pattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "compiled", tuple(re.compile(p, self.flags) for p in self.import_patterns)
        )


# ── Re-usable building blocks ──────────────────────────────────────

_ES_IMPORT_FROM = r"""import\s+.*?from\s+['"](.*?)['"]"""
_ES_SIDE_EFFECT = r"""import\s+['"](.*?)['"]"""
_ES_EXPORT_FROM = r"""export\s+.*?from\s+['"](.*?)['"]"""
_COMMONJS_REQUIRE = r"""require\(['"](.*?)['"]\)"""

_ECMASCRIPT = (_ES_IMPORT_FROM, _ES_SIDE_EFFECT, _ES_EXPORT_FROM, _COMMONJS_REQUIRE)
_ECMASCRIPT_JSX = (_ES_IMPORT_FROM, _ES_SIDE_EFFECT, _COMMONJS_REQUIRE)


# ── Language definitions ───────────────────────────────────────────

_BUILTIN = (
    LanguageExtractor("javascript", (".js", ".mjs", ".cjs"), _ECMASCRIPT),
    LanguageExtractor("javascriptreact", (".jsx",), _ECMASCRIPT_JSX),
    LanguageExtractor("typescript", (".ts",), _ECMASCRIPT),
    LanguageExtractor("typescriptreact", (".tsx",), _ECMASCRIPT_JSX),
    LanguageExtractor(
        "python",
        (".py",),
        (
            r"from\s+(.*?)\s+import",
            r"^\s*import\s+(.*?)(?:\s+as\s+.*)?$",
        ),
        flags=re.MULTILINE,
    ),
    LanguageExtractor(
        "go",
        (".go",),
        (
            r"""import\s+['"](.*?)['"]""",
            r"import\s+\(\s*([\s\S]*?)\s*\)",
        ),
    ),
    LanguageExtractor("csharp", (".cs",), (r"using\s+([^;]*);",)),
    LanguageExtractor("java", (".java",), (r"import\s+([^;]*);",)),
    LanguageExtractor(
        "php",
        (".php",),
        (r"""(?:use|require|include|require_once|include_once)\s+['"]?(.*?)['"]?\s*;""",),
    ),
    LanguageExtractor("rust", (".rs",), (r"use\s+([^;]*);", r"mod\s+([^;]*);")),
    LanguageExtractor("dart", (".dart",), (r"""import\s+['"](.*?)['"]""",)),
    LanguageExtractor("ruby", (".rb",), (r"""(?:require|require_relative)\s+['"](.*?)['"]""",)),
    LanguageExtractor("swift", (".swift",), (r"import\s+(.*)",)),
)

EXTRACTORS: dict[str, LanguageExtractor] = {}
_EXTENSION_INDEX: dict[str, str] = {}


def register_extractor(extractor: LanguageExtractor) -> None:
    """Register (or replace) the extractor for a language tag."""
    EXTRACTORS[extractor.name] = extractor
    for ext in extractor.extensions:
        _EXTENSION_INDEX[ext.lower()] = extractor.name


for _extractor in _BUILTIN:
    register_extractor(_extractor)


def language_for_path(path: str) -> Optional[str]:
    """Language tag for a file path, from its extension. None if unknown."""
    return _EXTENSION_INDEX.get(PurePath(path).suffix.lower())


def supported_languages() -> list[str]:
    return sorted(EXTRACTORS)


def supported_extensions() -> list[str]:
    return sorted(_EXTENSION_INDEX)


def is_language_supported(language: str) -> bool:
    return language in EXTRACTORS


def require_language(language: str) -> LanguageExtractor:
    """Extractor for ``language``, raising for unknown tags.

    Raises:
        UnsupportedLanguageError: If no extractor is registered for the tag
    """
    try:
        return EXTRACTORS[language]
    except KeyError:
        raise UnsupportedLanguageError(language, supported_languages()) from None
