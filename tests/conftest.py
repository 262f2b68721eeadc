"""Shared test fixtures for archwarden tests."""

import os
import textwrap
from pathlib import Path

import pytest


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


class Project:
    """A throwaway source tree under ``tmp_path``."""

    def __init__(self, root: Path):
        self.root = root

    def write(self, relative: str, content: str = "") -> str:
        """Create ``relative`` with dedented ``content``; returns the absolute path."""
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return str(path)

    def path(self, relative: str) -> str:
        return str(self.root / relative)

    def touch_later(self, relative: str) -> None:
        """Bump the file's mtime so it looks edited."""
        path = self.root / relative
        st = path.stat()
        os.utime(path, ns=(st.st_atime_ns, st.st_mtime_ns + 1_000_000_000))


@pytest.fixture
def project(tmp_path):
    """Empty project tree rooted at ``tmp_path``."""
    return Project(tmp_path)


@pytest.fixture
def triangle(project):
    """a.js -> b.js -> c.js -> a.js."""
    a = project.write("a.js", "import { b } from './b';\n")
    b = project.write("b.js", "import { c } from './c';\n")
    c = project.write("c.js", "import { a } from './a';\nexport const c = 1;\n")
    return a, b, c


@pytest.fixture
def chain(project):
    """a.js -> b.js -> c.js, no cycle."""
    a = project.write("a.js", "import { b } from './b';\n")
    b = project.write("b.js", "import { c } from './c';\n")
    c = project.write("c.js", "export const c = 1;\n")
    return a, b, c
