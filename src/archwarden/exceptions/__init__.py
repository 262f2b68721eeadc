"""Exception hierarchy for archwarden."""

from .analysis import AnalysisError, FileAccessError, UnsupportedLanguageError
from .base import ArchwardenError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "ArchwardenError",
    "AnalysisError",
    "FileAccessError",
    "UnsupportedLanguageError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
