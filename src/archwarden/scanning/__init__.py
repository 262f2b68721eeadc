"""Import scanning: extraction, relative resolution, file access."""

from .discovery import discover_files, should_skip_file
from .extractor import ImportExtractor, parse_imports
from .languages import (
    EXTRACTORS,
    LanguageExtractor,
    language_for_path,
    register_extractor,
    require_language,
    supported_extensions,
    supported_languages,
)
from .models import ImportEdge, ImportStatement, Ok, Skipped, SourceFile
from .reader import LOCAL_FS, FileStat, FileSystem, LocalFileSystem, read_source, stat_source
from .resolver import resolve_relative_import
from .unused import UnusedImport, UnusedImportDetector

__all__ = [
    "EXTRACTORS",
    "FileStat",
    "FileSystem",
    "ImportEdge",
    "ImportExtractor",
    "ImportStatement",
    "LOCAL_FS",
    "LanguageExtractor",
    "LocalFileSystem",
    "Ok",
    "Skipped",
    "SourceFile",
    "UnusedImport",
    "UnusedImportDetector",
    "discover_files",
    "language_for_path",
    "parse_imports",
    "read_source",
    "register_extractor",
    "require_language",
    "resolve_relative_import",
    "should_skip_file",
    "stat_source",
    "supported_extensions",
    "supported_languages",
]
