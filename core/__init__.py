"""
Participle Atlas - Core Module

Error hierarchy shared by every stage of the build.
"""
from core.errors import (
    ErrorSeverity,
    ErrorContext,
    AtlasError,
    AtlasConfigError,
    CorpusError,
    ChapterParseError,
    DatasetWriteError,
)

__all__ = [
    "ErrorSeverity",
    "ErrorContext",
    "AtlasError",
    "AtlasConfigError",
    "CorpusError",
    "ChapterParseError",
    "DatasetWriteError",
]
