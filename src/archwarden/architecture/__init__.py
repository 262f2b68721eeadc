"""Architecture checks: explicit rules, layers, encapsulation."""

from .globbing import compile_glob, glob_match
from .validator import INDEX_EXTENSIONS, RuleEngine

__all__ = ["INDEX_EXTENSIONS", "RuleEngine", "compile_glob", "glob_match"]
