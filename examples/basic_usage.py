#!/usr/bin/env python3
"""
Example: Basic usage of archwarden as a Python library
"""

from pathlib import Path

from archwarden import AnalysisSession, load_config
from archwarden.scanning import discover_files

root = Path("/path/to/project")
config = load_config()
files = discover_files(root, config.exclude_patterns)

session = AnalysisSession(config)
session.build(files)

# Validate every file
for path in files:
    text = Path(path).read_text(encoding="utf-8")
    for violation in session.validate_file(path, text, version=0, relative_to=str(root)):
        print(f"{path}: [{violation.severity.value}] {violation.message}")

# Project-wide cycles
for cycle in session.cycles.get_all_cycles():
    print(f"Cycle ({cycle.depth} levels): {' -> '.join(cycle.files)}")

session.close()
