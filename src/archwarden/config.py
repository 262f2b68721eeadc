"""Configuration loading and management for archwarden.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.archwarden.toml)
    3. Project config (./archwarden.toml)
    4. Explicit config file
    5. Environment variables (ARCHWARDEN_* prefix)
    6. Keyword overrides (typically CLI flags)

Rules and layers are declared as arrays of tables::

    [[rules]]
    source = "**/pages/**"
    disallow = ["**/database/**"]
    message = "Pages must go through a service"

    [[layers]]
    name = "Domain"
    pattern = "src/domain/**"

Example:
    >>> config = load_config(max_imports=30)
    >>> config.max_imports
    30
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_args, get_type_hints

from .exceptions import ArchwardenError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

# Deep-cycle search depth bounds
MIN_CYCLE_DEPTH = 2
MAX_CYCLE_DEPTH = 20


@dataclass(frozen=True)
class RuleConfig:
    """Explicit dependency rule.

    Files matching ``source`` may not import files matching any of the
    ``disallow`` globs.
    """

    source: str
    disallow: tuple[str, ...] = ()
    message: Optional[str] = None


@dataclass(frozen=True)
class LayerConfig:
    """Architectural layer. Position in the layer list is its ordinal (0 = innermost)."""

    name: str
    pattern: str


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis execution.

    All fields have sensible defaults. Users typically override only
    rules and layers via a config file.

    Attributes:
        Architecture:
            rules: Explicit disallow rules, evaluated before layers
            layers: Ordered layers, inner (stable) first

        Limits:
            max_imports: Imports per file before the god-object warning
            max_cycle_depth: Deep cycle search bound (2-20)
            max_graph_files: Files considered per graph build
            max_file_size_bytes: Larger files produce no edges
            max_learn_files: Files considered per learning pass
            import_cache_capacity: LRU capacity for per-file import lists

        Heuristics:
            anomaly_threshold: Z-score above which import counts are anomalous
            similarity_threshold: Cosine similarity needed for a nearest neighbour

        Feature flags:
            check_cycles: Direct (A <-> B) cycle check per import
            check_deep_cycles: Multi-hop cycle check per file
            enforce_encapsulation: Warn on imports that bypass an index file
            enable_ai: Anomaly detection and semantic flow analysis
            detect_unused_imports: Report unused JS/TS bindings

        Caching:
            cache_enabled: Persist parsed imports on disk between runs
            cache_dir: Directory for the persistent cache
            cache_ttl_hours: Persistent cache time-to-live

        Output control:
            verbosity: Logging verbosity level
    """

    rules: tuple[RuleConfig, ...] = ()
    layers: tuple[LayerConfig, ...] = ()

    max_imports: int = 20
    max_cycle_depth: int = 10
    max_graph_files: int = 50
    max_file_size_bytes: int = 500_000
    max_learn_files: int = 500
    import_cache_capacity: int = 200

    anomaly_threshold: float = 3.0
    similarity_threshold: float = 0.85

    check_cycles: bool = True
    check_deep_cycles: bool = True
    enforce_encapsulation: bool = True
    enable_ai: bool = True
    detect_unused_imports: bool = False

    cache_enabled: bool = False
    cache_dir: str = ".archwarden-cache"
    cache_ttl_hours: int = 24

    verbosity: Verbosity = "normal"

    # Glob patterns excluded from discovery by the CLI
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            "node_modules/*",
            "vendor/*",
            "dist/*",
            "build/*",
            ".git/*",
            "venv/*",
            ".venv/*",
            "__pycache__/*",
            "*.min.js",
            "*.bundle.js",
        ]
    )

    def __post_init__(self) -> None:
        """Validate configuration after initialization.

        Raises:
            InvalidConfigError: If a value is out of range
        """
        if not MIN_CYCLE_DEPTH <= self.max_cycle_depth <= MAX_CYCLE_DEPTH:
            raise InvalidConfigError(
                "max_cycle_depth",
                self.max_cycle_depth,
                f"must be between {MIN_CYCLE_DEPTH} and {MAX_CYCLE_DEPTH}",
            )
        for key in ("max_imports", "max_graph_files", "max_learn_files", "import_cache_capacity"):
            if getattr(self, key) < 1:
                raise InvalidConfigError(key, getattr(self, key), "must be at least 1")
        if self.max_file_size_bytes <= 0:
            raise InvalidConfigError("max_file_size_bytes", self.max_file_size_bytes, "must be positive")
        if self.anomaly_threshold <= 0:
            raise InvalidConfigError("anomaly_threshold", self.anomaly_threshold, "must be positive")
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise InvalidConfigError(
                "similarity_threshold", self.similarity_threshold, "must be between 0.0 and 1.0"
            )
        if self.verbosity not in get_args(Verbosity):
            raise InvalidConfigError("verbosity", self.verbosity, "must be quiet, normal or verbose")
        if self.cache_ttl_hours < 0:
            raise InvalidConfigError("cache_ttl_hours", self.cache_ttl_hours, "must be non-negative")

    @property
    def cache_ttl_seconds(self) -> int:
        """Get cache TTL in seconds."""
        return self.cache_ttl_hours * 3600


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ArchwardenError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".archwarden.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise ArchwardenError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "archwarden.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise ArchwardenError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ArchwardenError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise ArchwardenError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    if "rules" in merged:
        merged["rules"] = _parse_rules(merged["rules"])
    if "layers" in merged:
        merged["layers"] = _parse_layers(merged["layers"])

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ArchwardenError(f"Invalid configuration: {e}")


def _parse_rules(raw: Any) -> tuple[RuleConfig, ...]:
    """Convert ``[[rules]]`` tables (or RuleConfig objects) to RuleConfig."""
    rules = []
    for entry in raw or ():
        if isinstance(entry, RuleConfig):
            rules.append(entry)
        elif isinstance(entry, dict):
            disallow = entry.get("disallow") or ()
            if isinstance(disallow, str):
                disallow = (disallow,)
            try:
                rules.append(
                    RuleConfig(
                        source=entry["source"],
                        disallow=tuple(disallow),
                        message=entry.get("message"),
                    )
                )
            except KeyError as e:
                raise ArchwardenError(f"Invalid [[rules]] entry, missing {e}: {entry}")
        else:
            raise ArchwardenError(f"Invalid [[rules]] entry: {entry!r}")
    return tuple(rules)


def _parse_layers(raw: Any) -> tuple[LayerConfig, ...]:
    """Convert ``[[layers]]`` tables (or LayerConfig objects) to LayerConfig."""
    layers = []
    for entry in raw or ():
        if isinstance(entry, LayerConfig):
            layers.append(entry)
        elif isinstance(entry, dict):
            try:
                layers.append(LayerConfig(name=entry["name"], pattern=entry["pattern"]))
            except KeyError as e:
                raise ArchwardenError(f"Invalid [[layers]] entry, missing {e}: {entry}")
        else:
            raise ArchwardenError(f"Invalid [[layers]] entry: {entry!r}")
    return tuple(layers)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from ARCHWARDEN_* environment variables.

    Only scalar fields are read (ints, floats, bools, strings). Rules and
    layers can only come from config files or overrides.

    Returns:
        Dict of field_name -> parsed_value for any ARCHWARDEN_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"ARCHWARDEN_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise ArchwardenError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns:
        Parsed value or None if the field type isn't settable from the environment

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin in (list, tuple) or type_hint in (list, tuple):
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        return tomllib.load(f)
