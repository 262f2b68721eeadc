"""Tests for configuration loading."""

import os

import pytest

from archwarden.config import AnalysisConfig, LayerConfig, RuleConfig, load_config
from archwarden.exceptions import ArchwardenError, InvalidConfigError
from archwarden.graph.cycles import validate_max_depth


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """No global/project config files and no ARCHWARDEN_* variables leak in."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("ARCHWARDEN_"):
            monkeypatch.delenv(name)


CONFIG_TOML = """
max_imports = 30

[[rules]]
source = "**/pages/**"
disallow = ["**/database/**"]
message = "Go through a service"

[[rules]]
source = "*.test.js"
disallow = "*.private.js"

[[layers]]
name = "Domain"
pattern = "src/domain/**"

[[layers]]
name = "UI"
pattern = "src/ui/**"
"""


class TestDefaults:
    """Built-in defaults."""

    def test_defaults(self):
        config = load_config()
        assert config == AnalysisConfig()
        assert config.max_imports == 20
        assert config.max_cycle_depth == 10
        assert config.rules == ()
        assert config.cache_ttl_seconds == 24 * 3600


class TestConfigFile:
    """TOML config files."""

    def test_explicit_file(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(CONFIG_TOML)
        config = load_config(path)
        assert config.max_imports == 30
        assert config.rules == (
            RuleConfig("**/pages/**", ("**/database/**",), "Go through a service"),
            RuleConfig("*.test.js", ("*.private.js",)),
        )
        assert config.layers == (
            LayerConfig("Domain", "src/domain/**"),
            LayerConfig("UI", "src/ui/**"),
        )

    def test_project_file_discovered(self, tmp_path):
        (tmp_path / "archwarden.toml").write_text("max_imports = 12\n")
        assert load_config().max_imports == 12

    def test_missing_file(self, tmp_path):
        with pytest.raises(ArchwardenError, match="not found"):
            load_config(tmp_path / "nope.toml")

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("no_such_option = 1\n")
        with pytest.raises(ArchwardenError, match="Invalid configuration"):
            load_config(path)

    def test_rule_without_source(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text('[[rules]]\ndisallow = ["x"]\n')
        with pytest.raises(ArchwardenError, match="missing"):
            load_config(path)

    def test_malformed_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("max_imports = \n")
        with pytest.raises(ArchwardenError, match="Invalid config file"):
            load_config(path)


class TestOverrides:
    """Environment variables and keyword overrides."""

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.toml"
        path.write_text(CONFIG_TOML)
        monkeypatch.setenv("ARCHWARDEN_MAX_IMPORTS", "7")
        monkeypatch.setenv("ARCHWARDEN_ENABLE_AI", "off")
        config = load_config(path)
        assert config.max_imports == 7
        assert config.enable_ai is False

    def test_bad_env_bool(self, monkeypatch):
        monkeypatch.setenv("ARCHWARDEN_CHECK_CYCLES", "maybe")
        with pytest.raises(ArchwardenError, match="ARCHWARDEN_CHECK_CYCLES"):
            load_config()

    def test_keyword_overrides_win(self, monkeypatch):
        monkeypatch.setenv("ARCHWARDEN_MAX_IMPORTS", "7")
        assert load_config(max_imports=40).max_imports == 40

    def test_verbosity_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False).verbosity == "normal"

    def test_rule_objects_accepted(self):
        rule = RuleConfig("a/**", ("b/**",))
        assert load_config(rules=[rule]).rules == (rule,)


class TestValidation:
    """Range checks in AnalysisConfig."""

    @pytest.mark.parametrize(
        "field,value",
        [
            ("max_cycle_depth", 1),
            ("max_cycle_depth", 21),
            ("max_imports", 0),
            ("max_graph_files", 0),
            ("similarity_threshold", 1.5),
            ("anomaly_threshold", 0),
            ("cache_ttl_hours", -1),
            ("verbosity", "loud"),
        ],
    )
    def test_out_of_range(self, field, value):
        with pytest.raises(InvalidConfigError) as exc_info:
            AnalysisConfig(**{field: value})
        assert exc_info.value.key == field
        assert exc_info.value.value == value

    def test_depth_rule_matches_cycle_detector(self):
        """Config and cycle detection reject an out-of-range depth the same way."""
        with pytest.raises(InvalidConfigError) as from_config:
            AnalysisConfig(max_cycle_depth=21)
        with pytest.raises(InvalidConfigError) as from_cycles:
            validate_max_depth(21)
        assert from_config.value.reason == from_cycles.value.reason

    def test_load_config_error_is_archwarden_error(self):
        with pytest.raises(ArchwardenError):
            load_config(max_imports=0)
