"""
Participle Atlas - Dataset Writer

Writes the row table, the aggregate tables and the build summary as
independent JSON documents under <output_dir>/data/:

    data/participles.rows.json        {"rows": [...]}
    data/participles.rows.<n>.json    optional chunks of the row table
    data/agg/<table>.json             one document per aggregate table
    data/meta/summary.json            build summary

Documents are UTF-8 with raw Hebrew (ensure_ascii=False), sorted keys and
a fixed indent, so the same corpus always yields the same bytes.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Union

from config import (
    AGG_DIR,
    DATASET_DIR,
    META_DIR,
    ROWS_CHUNK_FILE,
    ROWS_FILE,
    SUMMARY_FILE,
)
from core.errors import DatasetWriteError, ErrorContext
from data.schemas import ParticipleRow, SummarySchema
from observability import get_logger

logger = get_logger(__name__)


def dataset_dir(output_dir: Union[str, Path]) -> Path:
    return Path(output_dir) / DATASET_DIR


def aggregate_path(output_dir: Union[str, Path], name: str) -> Path:
    return dataset_dir(output_dir) / AGG_DIR / f"{name}.json"


def summary_path(output_dir: Union[str, Path]) -> Path:
    return dataset_dir(output_dir) / META_DIR / SUMMARY_FILE


def rows_path(output_dir: Union[str, Path]) -> Path:
    return dataset_dir(output_dir) / ROWS_FILE


def dumps(document: Any, indent: int = 2) -> str:
    """Deterministic JSON text with a trailing newline."""
    return json.dumps(document, ensure_ascii=False, sort_keys=True, indent=indent) + "\n"


def write_json(path: Path, document: Any, indent: int = 2) -> Path:
    """Write one document, creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dumps(document, indent), encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        raise DatasetWriteError(
            f"Failed to write {path}: {e}",
            path=path,
            cause=e,
            context=ErrorContext.from_current_span("write_json", "dataset_writer", path=str(path)),
        ) from e
    return path


def _chunks(rows: Sequence[Dict[str, Any]], size: int) -> List[Sequence[Dict[str, Any]]]:
    return [rows[start:start + size] for start in range(0, len(rows), size)]


def write_rows(
    output_dir: Union[str, Path],
    rows: Sequence[ParticipleRow],
    chunk_size: int = 0,
    indent: int = 2,
) -> List[Path]:
    """
    Write the row table, plus numbered chunks when chunk_size > 0.

    The full table is always written so a consumer can read either form.
    Chunks are numbered from 0.
    """
    documents = [row.to_dict() for row in rows]
    written = [write_json(rows_path(output_dir), {"rows": documents}, indent)]

    if chunk_size > 0:
        base = dataset_dir(output_dir)
        for index, chunk in enumerate(_chunks(documents, chunk_size)):
            path = base / ROWS_CHUNK_FILE.format(index=index)
            written.append(write_json(path, {"rows": list(chunk)}, indent))

    return written


def write_dataset(
    output_dir: Union[str, Path],
    rows: Sequence[ParticipleRow],
    tables: Mapping[str, Mapping[str, Any]],
    summary: SummarySchema,
    chunk_size: int = 0,
    indent: int = 2,
) -> List[Path]:
    """
    Write every document of the dataset.

    Args:
        output_dir: Root under which data/ is created
        rows: Participle rows in extraction order
        tables: Aggregate table name -> document (Aggregates.tables())
        summary: Build summary
        chunk_size: Rows per chunk file; 0 writes no chunks
        indent: JSON indentation

    Returns:
        Paths written, in write order

    Raises:
        DatasetWriteError: If any document cannot be written
    """
    written = write_rows(output_dir, rows, chunk_size, indent)

    for name in sorted(tables):
        written.append(write_json(aggregate_path(output_dir, name), dict(tables[name]), indent))

    written.append(write_json(summary_path(output_dir), summary.to_dict(), indent))

    logger.info(
        "Dataset written",
        output_dir=str(dataset_dir(output_dir)),
        files=len(written),
        rows=len(rows),
    )
    return written


def read_json(path: Union[str, Path]) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_aggregate(output_dir: Union[str, Path], name: str) -> Dict[str, Any]:
    """Read one aggregate document back, e.g. read_aggregate(out, "by_binyan")."""
    return read_json(aggregate_path(output_dir, name))


def read_summary(output_dir: Union[str, Path]) -> Dict[str, Any]:
    return read_json(summary_path(output_dir))
