"""Tests for the exception hierarchy."""

import pytest

from archwarden.exceptions import (
    AnalysisError,
    ArchwardenError,
    ConfigurationError,
    FileAccessError,
    InvalidConfigError,
    InvalidPathError,
    UnsupportedLanguageError,
)


class TestHierarchy:
    """Every error is catchable as ArchwardenError."""

    @pytest.mark.parametrize(
        "error,parent",
        [
            (FileAccessError("a.js", "denied"), AnalysisError),
            (UnsupportedLanguageError("cobol", ["go"]), AnalysisError),
            (InvalidPathError("src", "does not exist"), ConfigurationError),
            (InvalidConfigError("pattern", "[x", "unbalanced '['"), ConfigurationError),
        ],
    )
    def test_parents(self, error, parent):
        assert isinstance(error, parent)
        assert isinstance(error, ArchwardenError)


class TestMessages:
    """String forms include details."""

    def test_plain(self):
        assert str(ArchwardenError("boom")) == "boom"

    def test_with_details(self):
        error = InvalidConfigError("max_cycle_depth", 25, "must be between 2 and 20")
        assert str(error) == (
            "Invalid configuration for max_cycle_depth: 25 "
            "(key=max_cycle_depth, value=25, reason=must be between 2 and 20)"
        )
        assert error.value == 25

    def test_unsupported_language_lists_supported(self):
        error = UnsupportedLanguageError("cobol", ["go", "rust"])
        assert error.details["supported"] == "go, rust"
        assert error.supported_languages == ["go", "rust"]
