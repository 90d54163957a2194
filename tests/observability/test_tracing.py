"""
Tests for build tracing and log processors.

Covers:
- stage spans emitted by DatasetBuilder
- error recording on spans
- trace context and service context log processors
- LogContext binding
"""
import pytest
import structlog
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

import observability.tracing as tracing
from core.errors import ChapterParseError, CorpusError
from observability.logging import LogContext, add_service_context, add_trace_context
from pipeline.orchestrator import DatasetBuilder


@pytest.fixture
def exporter(monkeypatch):
    """Route create_span through a private provider with an in-memory exporter."""
    memory = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(memory))
    monkeypatch.setattr(tracing, "get_tracer", lambda name, version="1.0.0": provider.get_tracer(name, version))
    yield memory
    provider.shutdown()


class TestBuildSpans:
    def test_stage_spans(self, exporter, build_config):
        DatasetBuilder(build_config).run()

        names = [span.name for span in exporter.get_finished_spans()]
        assert names == [
            "corpus.load",
            "rows.extract",
            "aggregates.build",
            "dataset.write",
            "dataset.build",
        ]

    def test_stage_attributes(self, exporter, build_config):
        DatasetBuilder(build_config).run()

        spans = {span.name: span for span in exporter.get_finished_spans()}
        assert spans["corpus.load"].attributes["corpus.chapter_files"] == 3
        assert spans["corpus.load"].attributes["corpus.skipped_files"] == 1
        assert spans["rows.extract"].attributes["rows.count"] == 4

    def test_fatal_error_marks_span(self, exporter, build_config, tmp_path):
        build_config.corpus.corpus_dir = tmp_path / "absent"

        with pytest.raises(CorpusError):
            DatasetBuilder(build_config).run()

        spans = {span.name: span for span in exporter.get_finished_spans()}
        assert spans["corpus.load"].status.status_code == StatusCode.ERROR
        assert spans["dataset.build"].status.status_code == StatusCode.ERROR

    def test_recoverable_error_keeps_status(self, exporter):
        with tracing.create_span("corpus.load"):
            error = ChapterParseError("bad chapter", path="x.json")
            assert error.recoverable is True

        finished = exporter.get_finished_spans()[0]
        assert finished.status.status_code != StatusCode.ERROR
        assert finished.attributes["error.code"] == "CHAPTER_PARSE_ERROR"


class TestLogProcessors:
    def test_trace_context_inside_span(self, exporter):
        with tracing.create_span("rows.extract"):
            event = add_trace_context(None, "info", {"event": "x"})

        assert len(event["trace_id"]) == 32
        assert len(event["span_id"]) == 16

    def test_trace_context_outside_span(self):
        event = add_trace_context(None, "info", {"event": "x"})
        assert "trace_id" not in event

    def test_service_context(self):
        processor = add_service_context("participle-atlas", "testing")
        event = processor(None, "info", {"event": "x"})
        assert event["service"] == "participle-atlas"
        assert event["environment"] == "testing"

    def test_log_context_binds_and_unbinds(self):
        with LogContext(chapter_file="Genesis/Genesis_chapter_1.json"):
            assert structlog.contextvars.get_contextvars()["chapter_file"].endswith("_1.json")
        assert "chapter_file" not in structlog.contextvars.get_contextvars()
