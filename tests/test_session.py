"""Tests for AnalysisSession wiring and per-file validation."""

import pytest

from archwarden import (
    AnalysisConfig,
    AnalysisSession,
    LayerConfig,
    RuleConfig,
    Severity,
    ViolationKind,
)

PAGES_RULE = RuleConfig(source="**/pages/**", disallow=("**/database/**",))


def _kinds(violations):
    return [v.kind for v in violations]


@pytest.fixture
def layered(project):
    """pages/home.js importing a database file that sits next to an index."""
    project.write("src/database/index.js", "export * from './db';\n")
    db = project.write("src/database/db.js", "export const db = {};\n")
    home = project.write("src/pages/home.js", "import { db } from '../database/db';\n")
    return home, db


def _session(**overrides):
    overrides.setdefault("enable_ai", False)
    return AnalysisSession(AnalysisConfig(**overrides))


class TestValidateFile:
    """Findings for a single file."""

    def test_rule_short_circuits_import_checks(self, project, layered):
        """A rule violation hides the encapsulation warning for the same import."""
        home, db = layered
        session = _session(rules=(PAGES_RULE,))
        text = project.root.joinpath("src/pages/home.js").read_text()
        violations = session.validate_file(home, text, version=1, relative_to=str(project.root))

        (violation,) = violations
        assert violation.kind is ViolationKind.RULE
        assert violation.severity is Severity.ERROR
        assert violation.index == 0
        assert violation.length == len("import { db } from '../database/db'")

    def test_encapsulation_without_rules(self, project, layered):
        home, db = layered
        text = project.root.joinpath("src/pages/home.js").read_text()
        violations = _session().validate_file(home, text, version=1, relative_to=str(project.root))
        assert _kinds(violations) == [ViolationKind.ENCAPSULATION]

    def test_layers_use_project_relative_paths(self, project):
        project.write("src/ui/button.js", "export const b = 1;\n")
        user = project.write("src/domain/user.js", "import { b } from '../ui/button';\n")
        session = _session(
            layers=(LayerConfig("Domain", "src/domain/**"), LayerConfig("UI", "src/ui/**"))
        )
        text = "import { b } from '../ui/button';\n"
        violations = session.validate_file(user, text, version=1, relative_to=str(project.root))
        assert _kinds(violations) == [ViolationKind.LAYER]

    def test_cycles_reported(self, project):
        x = project.write("x.js", "import { y } from './y';\n")
        y = project.write("y.js", "import { x } from './x';\n")
        session = _session()
        session.build([x, y])
        violations = session.validate_file(x, "import { y } from './y';\n", version=1)
        assert _kinds(violations) == [ViolationKind.DEEP_CYCLE, ViolationKind.CYCLE]
        assert violations[1].message == "Circular Dependency Detected! 'x.js' <-> 'y.js'"
        assert all(v.severity is Severity.WARNING for v in violations)

    def test_god_object_first(self, project):
        path = project.write("big.js")
        text = "import a from 'a';\nimport b from 'b';\nimport c from 'c';\n"
        violations = _session(max_imports=2).validate_file(path, text, version=1)
        assert violations[0].kind is ViolationKind.GOD_OBJECT
        assert violations[0].message == (
            "God Object Alert: This file has 3 imports (Threshold: 2). Consider refactoring."
        )

    def test_unused_imports_when_enabled(self, project):
        path = project.write("a.js")
        text = "import React from 'react';\n"
        assert _session().validate_file(path, text, version=1) == []
        violations = _session(detect_unused_imports=True).validate_file(path, text, version=1)
        (violation,) = violations
        assert violation.kind is ViolationKind.UNUSED_IMPORT
        assert violation.severity is Severity.HINT
        assert violation.message == "Unused import 'React' - Consider removing it"

    def test_anomaly_after_learning(self, project):
        typical = "import a from './a';\nimport b from './b';\n"
        paths = [project.write(f"lib{i}.js", typical) for i in range(4)]
        session = _session(enable_ai=True, max_imports=100)
        session.build(paths)

        text = "".join(f"import m{i} from 'm{i}';\n" for i in range(50))
        violations = session.validate_file(project.write("huge.js"), text, version=1)
        anomalies = [v for v in violations if v.kind is ViolationKind.ANOMALY]
        assert len(anomalies) == 1
        assert anomalies[0].score == 48.0


class TestResultCache:
    """Per-version memoization of findings."""

    def test_same_version_same_list(self, project):
        path = project.write("a.js")
        session = _session()
        first = session.validate_file(path, "", version=1)
        assert session.validate_file(path, "import x from 'x';", version=1) is first
        assert session.validate_file(path, "", version=2) is not first

    def test_build_clears_results(self, project):
        path = project.write("a.js")
        session = _session()
        first = session.validate_file(path, "", version=1)
        session.build([path])
        assert session.validate_file(path, "", version=1) is not first

    def test_declined_build_keeps_results(self, project):
        path = project.write("a.js")
        session = _session()
        first = session.validate_file(path, "", version=1)
        session.store._lock.acquire()
        try:
            outcome = session.build([path])
        finally:
            session.store._lock.release()
        assert outcome.graph.declined
        assert session.validate_file(path, "", version=1) is first

    def test_forget(self, project):
        path = project.write("a.js")
        session = _session()
        first = session.validate_file(path, "", version=1)
        session.forget(path)
        assert session.validate_file(path, "", version=1) is not first


class TestBuild:
    """Build outcomes."""

    def test_learning_follows_enable_ai(self, triangle):
        assert _session().build(triangle).learning is None
        outcome = _session(enable_ai=True).build(triangle)
        assert outcome.learning.files_learned == 3
        assert outcome.graph.graph.files_processed == 3

    def test_metrics(self, chain):
        per_file, summary = _session().metrics(chain)
        assert [m.file for m in per_file] == ["a.js", "b.js", "c.js"]
        assert summary.files_analyzed == 3

    def test_disk_cache_opened_and_closed(self, tmp_path, triangle):
        session = _session(cache_enabled=True, cache_dir=str(tmp_path / "cache"))
        try:
            session.build(triangle)
            assert session.disk_cache.stats()["size"] == 3
        finally:
            session.close()
