"""
Participle Atlas - Pipeline Module

Stages of the dataset build:
- clitics: backward walk over the particles before a word
- extraction: participle tokens -> ParticipleRow
- aggregation: one fold over rows into mergeable count and rate tables
- orchestrator: DatasetBuilder tying load, extract, aggregate and write together
"""
from pipeline.clitics import (
    CliticChain,
    walk_clitic_chain,
    representative_letter,
    preceded_by,
)
from pipeline.extraction import (
    is_participle,
    build_row,
    extract_rows,
    extract_all,
)
from pipeline.aggregation import (
    Counter1,
    Counter2,
    RateTable,
    Aggregates,
    build_aggregates,
    merge_all,
    position_quartile,
)
from pipeline.orchestrator import DatasetBuilder, BuildResult

__all__ = [
    "CliticChain",
    "walk_clitic_chain",
    "representative_letter",
    "preceded_by",
    "is_participle",
    "build_row",
    "extract_rows",
    "extract_all",
    "Counter1",
    "Counter2",
    "RateTable",
    "Aggregates",
    "build_aggregates",
    "merge_all",
    "position_quartile",
    "DatasetBuilder",
    "BuildResult",
]
