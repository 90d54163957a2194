"""
Participle Atlas - Data Module

Record types and the dataset writer.

Architecture:
- schemas.py: Enumerations, tag lookup tables and record dataclasses
- exports.py: Deterministic JSON output of rows, aggregates and summary
"""

# =============================================================================
# SCHEMAS - Dataclass definitions
# =============================================================================
from data.schemas import (
    # Enums
    Voice,
    Usage,
    State,
    Person,
    CliticCategory,
    BookGroup,
    # Lookups
    binyan_label,
    voice_for,
    usage_for,
    state_for,
    person_for,
    clitic_category,
    book_group,
    parse_bcv,
    strip_marks,
    # Records
    Token,
    Verse,
    BookEntry,
    ChapterData,
    ParticipleRow,
    SummarySchema,
)

# =============================================================================
# EXPORTS - Dataset writer
# =============================================================================
from data.exports import (
    write_dataset,
    write_rows,
    write_json,
    read_aggregate,
    read_summary,
)

__all__ = [
    "Voice",
    "Usage",
    "State",
    "Person",
    "CliticCategory",
    "BookGroup",
    "binyan_label",
    "voice_for",
    "usage_for",
    "state_for",
    "person_for",
    "clitic_category",
    "book_group",
    "parse_bcv",
    "strip_marks",
    "Token",
    "Verse",
    "BookEntry",
    "ChapterData",
    "ParticipleRow",
    "SummarySchema",
    "write_dataset",
    "write_rows",
    "write_json",
    "read_aggregate",
    "read_summary",
]
