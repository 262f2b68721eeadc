"""Explicit rule, layer and encapsulation checks.

Layers are ordered inner to outer. Dependencies may only point inwards:
a file in layer 0 importing a file in layer 2 is a violation, the reverse
is fine.
"""

from __future__ import annotations

import os
from typing import Optional, Sequence

from ..config import LayerConfig, RuleConfig
from ..exceptions import InvalidConfigError
from ..logging_config import get_logger
from ..models import Severity, Violation, ViolationKind
from ..scanning.reader import LOCAL_FS, FileSystem
from .globbing import glob_match

logger = get_logger(__name__)

INDEX_EXTENSIONS = ("js", "ts", "jsx", "tsx")


def _slashes(path: str) -> str:
    return path.replace("\\", "/")


class RuleEngine:
    """Validates one import edge against rules and layers.

    A rule or layer whose glob is unusable is skipped; the error is logged
    once per pattern and kept in ``config_errors``.
    """

    def __init__(self, fs: FileSystem = LOCAL_FS):
        self.fs = fs
        self.config_errors: list[InvalidConfigError] = []
        self._reported: set[str] = set()

    def validate(
        self,
        source: str,
        target: str,
        rules: Sequence[RuleConfig] = (),
        layers: Sequence[LayerConfig] = (),
    ) -> Optional[Violation]:
        """First rule or layer violation for ``source`` importing ``target``.

        Both paths are project-relative; backslashes are normalized.
        """
        source = _slashes(source)
        target = _slashes(target)
        return self._check_rules(source, target, rules) or self._check_layers(source, target, layers)

    def check_encapsulation(self, target: str) -> Optional[Violation]:
        """Warn when ``target`` sits next to an index file that should be imported instead."""
        directory = os.path.dirname(target)
        filename = os.path.basename(target)
        if filename.startswith("index."):
            return None

        for ext in INDEX_EXTENSIONS:
            try:
                has_index = self.fs.exists(os.path.join(directory, f"index.{ext}"))
            except OSError:
                return None
            if has_index:
                return Violation(
                    kind=ViolationKind.ENCAPSULATION,
                    message=(
                        f"Encapsulation Warning: Directory has an 'index' file. Import from the "
                        f"directory '{os.path.basename(directory)}' instead of specific file "
                        f"'{filename}'."
                    ),
                    severity=Severity.WARNING,
                )
        return None

    def _check_rules(self, source: str, target: str, rules: Sequence[RuleConfig]) -> Optional[Violation]:
        for rule in rules:
            try:
                if not glob_match(source, rule.source, match_base=True):
                    continue
                for pattern in rule.disallow:
                    if glob_match(target, pattern, match_base=True):
                        return Violation(
                            kind=ViolationKind.RULE,
                            message=rule.message or f"Violation: '{source}' cannot import from '{pattern}'",
                        )
            except InvalidConfigError as e:
                self._report(e)
        return None

    def _check_layers(self, source: str, target: str, layers: Sequence[LayerConfig]) -> Optional[Violation]:
        if not layers:
            return None

        source_index = self._layer_index(source, layers)
        target_index = self._layer_index(target, layers)
        if source_index is None or target_index is None:
            return None

        if source_index < target_index:
            return Violation(
                kind=ViolationKind.LAYER,
                message=(
                    f"Layer Violation: '{layers[source_index].name}' layer cannot depend on "
                    f"outer '{layers[target_index].name}' layer."
                ),
            )
        return None

    def _layer_index(self, path: str, layers: Sequence[LayerConfig]) -> Optional[int]:
        for i, layer in enumerate(layers):
            try:
                if glob_match(path, layer.pattern):
                    return i
            except InvalidConfigError as e:
                self._report(e)
        return None

    def _report(self, error: InvalidConfigError) -> None:
        key = repr(error.value)
        if key in self._reported:
            return
        self._reported.add(key)
        self.config_errors.append(error)
        logger.warning(f"Ignoring invalid pattern {error.value!r}: {error.reason}")
