"""
archwarden - Dependency Graph and Architecture Rule Enforcement

Extracts imports from multi-language source trees, resolves relative
imports to files, and checks the resulting dependency graph for cycles,
rule and layer violations, statistical anomalies, suspicious concept
flows, and coupling metrics.
"""

__version__ = "0.1.0"

from .config import AnalysisConfig, LayerConfig, RuleConfig, load_config
from .models import Severity, Violation, ViolationKind
from .session import AnalysisSession, SessionBuildOutcome

__all__ = [
    "AnalysisSession",  # Main entry point
    "SessionBuildOutcome",
    "AnalysisConfig",
    "RuleConfig",
    "LayerConfig",
    "load_config",
    "Violation",
    "ViolationKind",
    "Severity",
]
