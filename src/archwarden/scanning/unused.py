"""Unused import detection for JavaScript-family files.

A binding counts as used when its name appears as a whole word anywhere
outside its own import statement. Purely textual, so names that only
appear in comments or strings count as used.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .extractor import parse_imports

MAX_CONTENT_LENGTH = 300_000

UNUSED_CHECK_LANGUAGES = frozenset({"javascript", "javascriptreact", "typescript", "typescriptreact"})

SIDE_EFFECT_PATTERNS = (
    re.compile(r"""^\s*import\s+['"][^'"]+['"]\s*;?\s*$"""),
    re.compile(r"""^\s*import\s+['"][^'"]+\.(?:css|scss|less)['"]"""),
    re.compile(r"""^\s*require\s*\(\s*['"][^'"]+\.css['"]\s*\)"""),
)

_DEFAULT_IMPORT = re.compile(r"import\s+(\w+)\s*(?:,|from)")
_NAMED_IMPORT = re.compile(r"import\s*(?:\w+\s*,\s*)?\{([^}]+)\}")
_NAMESPACE_IMPORT = re.compile(r"import\s*(?:\w+\s*,\s*)?\*\s*as\s+(\w+)")
_REQUIRE_DEFAULT = re.compile(r"(?:const|let|var)\s+(\w+)\s*=\s*require")
_REQUIRE_DESTRUCTURED = re.compile(r"(?:const|let|var)\s*\{([^}]+)\}\s*=\s*require")
_WORD = re.compile(r"^\w+$")


@dataclass(frozen=True)
class UnusedImport:
    name: str
    line: int  # 0-based
    index: int
    length: int
    kind: str  # "default", "named", "namespace"


@dataclass(frozen=True)
class ImportSuggestion:
    message: str
    action: str  # "remove" or "organize"


class UnusedImportDetector:
    """Finds imported bindings that are never referenced."""

    def detect(self, text: str, language: str) -> list[UnusedImport]:
        if language not in UNUSED_CHECK_LANGUAGES or len(text) > MAX_CONTENT_LENGTH:
            return []

        unused: list[UnusedImport] = []
        for imp in parse_imports(text, language):
            start, end = _statement_span(text, imp.index)
            statement = text[start:end]
            if any(p.search(statement) for p in SIDE_EFFECT_PATTERNS):
                continue

            line = text.count("\n", 0, imp.index)
            for name, kind in _bound_names(statement):
                if not _is_name_used(name, text, start, end):
                    unused.append(
                        UnusedImport(name=name, line=line, index=imp.index, length=imp.length, kind=kind)
                    )
        return unused

    def suggestions(self, unused: list[UnusedImport]) -> list[ImportSuggestion]:
        result = [
            ImportSuggestion(f"Remove unused {u.kind} import '{u.name}'", "remove") for u in unused
        ]
        if len(unused) > 3:
            result.insert(
                0,
                ImportSuggestion(
                    f"Consider using 'Organize Imports' to clean up {len(unused)} unused imports",
                    "organize",
                ),
            )
        return result


def _statement_span(text: str, index: int) -> tuple[int, int]:
    """Bounds of the statement containing ``index`` (newline or semicolon delimited)."""
    start = index
    while start > 0 and text[start - 1] not in "\n;":
        start -= 1
    end = index
    while end < len(text) and text[end] not in "\n;":
        end += 1
    return start, min(end + 1, len(text))


def _bound_names(statement: str) -> list[tuple[str, str]]:
    names: list[tuple[str, str]] = []

    m = _DEFAULT_IMPORT.search(statement)
    if m:
        names.append((m.group(1), "default"))

    m = _NAMED_IMPORT.search(statement)
    if m:
        for part in m.group(1).split(","):
            part = part.strip()
            alias = re.match(r"(\w+)\s+as\s+(\w+)", part)
            if alias:
                names.append((alias.group(2), "named"))
            elif _WORD.match(part):
                names.append((part, "named"))

    m = _NAMESPACE_IMPORT.search(statement)
    if m:
        names.append((m.group(1), "namespace"))

    m = _REQUIRE_DEFAULT.search(statement)
    if m:
        names.append((m.group(1), "default"))

    m = _REQUIRE_DESTRUCTURED.search(statement)
    if m:
        for part in m.group(1).split(","):
            part = part.strip()
            alias = re.match(r"(\w+)\s*:\s*(\w+)", part)
            if alias:
                names.append((alias.group(2), "named"))
            elif _WORD.match(part):
                names.append((part, "named"))

    return names


def _is_name_used(name: str, text: str, start: int, end: int) -> bool:
    # Blank out the import statement so its own binding doesn't count
    masked = text[:start] + " " * (end - start) + text[end:]
    return re.search(rf"\b{re.escape(name)}\b", masked) is not None
