"""
Tests for the dataset writer.
"""
import json

import pytest

from core.errors import DatasetWriteError
from data.exports import (
    aggregate_path,
    read_aggregate,
    read_summary,
    rows_path,
    summary_path,
    write_dataset,
    write_json,
)
from data.schemas import SummarySchema
from integrations.bhsa_json import BhsaJsonCorpus
from pipeline.aggregation import build_aggregates
from pipeline.extraction import extract_all


@pytest.fixture
def built(corpus_dir):
    corpus = BhsaJsonCorpus(corpus_dir)
    books = corpus.load_books()
    rows = extract_all(corpus.iter_chapters(), books)
    aggregates = build_aggregates(rows)
    summary = SummarySchema(
        total_rows=len(rows),
        chapter_files=3,
        skipped_files=list(corpus.skipped),
        books=len(books),
    )
    return rows, aggregates, summary


class TestWriteDataset:
    """Tests for the fixed output layout."""

    def test_layout(self, built, output_dir):
        rows, aggregates, summary = built
        write_dataset(output_dir, rows, aggregates.tables(), summary)

        base = output_dir / "data"
        assert (base / "participles.rows.json").is_file()
        assert (base / "meta" / "summary.json").is_file()
        for name in aggregates.table_names():
            assert (base / "agg" / f"{name}.json").is_file()
        assert not list(base.glob("participles.rows.*.json"))

    def test_rows_document(self, built, output_dir):
        rows, aggregates, summary = built
        write_dataset(output_dir, rows, aggregates.tables(), summary)

        document = json.loads(rows_path(output_dir).read_text(encoding="utf-8"))
        assert list(document) == ["rows"]
        assert len(document["rows"]) == 4
        first = document["rows"][0]
        assert first["ref"] == "Exodus 3:2"
        assert first["negated"] is True
        assert "gender" not in first

    def test_hebrew_written_raw(self, built, output_dir):
        rows, aggregates, summary = built
        write_dataset(output_dir, rows, aggregates.tables(), summary)

        text = aggregate_path(output_dir, "prep_type_by_binyan").read_text(encoding="utf-8")
        assert "ב" in text
        assert "\\u" not in text

    def test_summary(self, built, output_dir):
        rows, aggregates, summary = built
        write_dataset(output_dir, rows, aggregates.tables(), summary)

        document = read_summary(output_dir)
        assert document["totalRows"] == 4
        assert document["chapterFiles"] == 3
        assert len(document["skippedFiles"]) == 1
        assert document["books"] == 2
        assert document["generatedBy"] == "participle-atlas"

    def test_read_back_matches_memory(self, built, output_dir):
        rows, aggregates, summary = built
        write_dataset(output_dir, rows, aggregates.tables(), summary)

        recomputed = build_aggregates(rows).tables()
        for name in aggregates.table_names():
            assert read_aggregate(output_dir, name) == recomputed[name]

    def test_deterministic_bytes(self, built, tmp_path):
        rows, aggregates, summary = built
        first = tmp_path / "one"
        second = tmp_path / "two"
        write_dataset(first, rows, aggregates.tables(), summary)
        write_dataset(second, list(rows), build_aggregates(rows).tables(), summary)

        for path in sorted((first / "data").rglob("*.json")):
            twin = second / path.relative_to(first)
            assert path.read_bytes() == twin.read_bytes()

    def test_chunks(self, built, output_dir):
        rows, aggregates, summary = built
        written = write_dataset(output_dir, rows, aggregates.tables(), summary, chunk_size=3)

        base = output_dir / "data"
        chunk_0 = json.loads((base / "participles.rows.0.json").read_text(encoding="utf-8"))
        chunk_1 = json.loads((base / "participles.rows.1.json").read_text(encoding="utf-8"))
        full = json.loads(rows_path(output_dir).read_text(encoding="utf-8"))

        assert len(chunk_0["rows"]) == 3
        assert len(chunk_1["rows"]) == 1
        assert chunk_0["rows"] + chunk_1["rows"] == full["rows"]
        assert not (base / "participles.rows.2.json").exists()
        assert summary_path(output_dir) in written


class TestWriteErrors:
    def test_unwritable_target(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(DatasetWriteError) as exc_info:
            write_json(blocker / "agg" / "by_usage.json", {})

        assert exc_info.value.path.endswith("by_usage.json")

    def test_unserializable_document(self, tmp_path):
        with pytest.raises(DatasetWriteError):
            write_json(tmp_path / "bad.json", {"x": object()})
