"""Tests for the archwarden command line."""

import json
import logging

import pytest
from typer.testing import CliRunner

from archwarden import __version__
from archwarden.cli import app
from archwarden.logging_config import setup_logging

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run from an empty directory with no user config."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(home)


@pytest.fixture
def pages_config(tmp_path):
    path = tmp_path / "archwarden.toml"
    path.write_text('[[rules]]\nsource = "**/pages/**"\ndisallow = ["**/database/**"]\n')
    return path


@pytest.fixture
def web_project(project):
    project.write("src/database/db.js", "export const db = {};\n")
    project.write("src/pages/home.js", "import { db } from '../database/db';\n")
    project.write("node_modules/lib/index.js", "import x from '../../src/pages/home';\n")
    return project


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestCheck:
    """archwarden check."""

    def test_clean_project(self, chain, project):
        result = runner.invoke(app, ["check", str(project.root)])
        assert result.exit_code == 0
        assert "No violations" in result.output

    def test_rule_violation_exits_nonzero(self, web_project, pages_config):
        result = runner.invoke(
            app, ["check", str(web_project.path("src")), "-c", str(pages_config), "-f", "json", "-q"]
        )
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["files_checked"] == 2
        (violation,) = data["violations"]
        assert violation["file"] == "pages/home.js"
        assert violation["line"] == 1
        assert violation["kind"] == "rule"
        assert violation["severity"] == "error"

    def test_excluded_directories_skipped(self, web_project, pages_config):
        """node_modules is excluded by default; paths are relative to the project root."""
        result = runner.invoke(
            app, ["check", str(web_project.root), "-c", str(pages_config), "-f", "json", "-q"]
        )
        data = json.loads(result.stdout)
        assert data["files_checked"] == 2
        assert [v["file"] for v in data["violations"]] == ["src/pages/home.js"]

    def test_warnings_do_not_fail(self, triangle, project):
        result = runner.invoke(app, ["check", str(project.root), "-f", "json", "-q"])
        assert result.exit_code == 0
        kinds = {v["kind"] for v in json.loads(result.stdout)["violations"]}
        assert kinds == {"deep_cycle"}

    def test_language_filter(self, project):
        project.write("a.py", "import os\n")
        project.write("b.js", "export const b = 1;\n")
        result = runner.invoke(app, ["check", str(project.root), "-l", "python", "-f", "json", "-q"])
        assert json.loads(result.stdout)["files_checked"] == 1

    def test_unknown_language(self, project):
        result = runner.invoke(app, ["check", str(project.root), "-l", "cobol"])
        assert result.exit_code == 1
        assert "Unsupported language" in result.output

    def test_missing_path(self, tmp_path):
        result = runner.invoke(app, ["check", str(tmp_path / "missing")])
        assert result.exit_code != 0


class TestCycles:
    """archwarden cycles."""

    def test_reports_triangle(self, triangle, project):
        result = runner.invoke(app, ["cycles", str(project.root), "-f", "json", "-q"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["stats"]["total_files"] == 3
        assert data["cycles"] == [{"files": ["a.js", "b.js", "c.js", "a.js"], "depth": 3}]

    def test_no_cycles(self, chain, project):
        result = runner.invoke(app, ["cycles", str(project.root)])
        assert result.exit_code == 0
        assert "No circular dependencies" in result.output

    def test_config_verbosity_applies(self, chain, project, tmp_path):
        config = tmp_path / "verbose.toml"
        config.write_text('verbosity = "verbose"\n')
        try:
            result = runner.invoke(app, ["cycles", str(project.root), "-c", str(config)])
            assert result.exit_code == 0
            assert logging.getLogger("archwarden").level == logging.DEBUG
        finally:
            setup_logging()


class TestMetrics:
    """archwarden metrics."""

    def test_json(self, chain, project):
        result = runner.invoke(app, ["metrics", str(project.root), "-f", "json", "-q"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [f["path"] for f in data["files"]] == ["a.js", "b.js", "c.js"]
        assert data["summary"]["files_analyzed"] == 3

    def test_table(self, chain, project):
        result = runner.invoke(app, ["metrics", str(project.root)])
        assert result.exit_code == 0
        assert "Health score" in result.output


class TestCache:
    """Cache management commands."""

    def test_info_disabled(self):
        result = runner.invoke(app, ["cache-info"])
        assert result.exit_code == 0
        assert "Disabled" in result.output

    def test_clear_disabled(self):
        result = runner.invoke(app, ["cache-clear"])
        assert result.exit_code == 0
        assert "Cache is disabled" in result.output

    def test_enabled_cache(self, tmp_path):
        config = tmp_path / "cache.toml"
        config.write_text(f'cache_enabled = true\ncache_dir = "{(tmp_path / "c").as_posix()}"\n')
        info = runner.invoke(app, ["cache-info", "-c", str(config)])
        assert info.exit_code == 0
        assert "Enabled" in info.output
        cleared = runner.invoke(app, ["cache-clear", "-c", str(config)])
        assert "Cache cleared successfully" in cleared.output
