"""
Participle Atlas - Build Orchestrator

Runs the dataset build end to end:

    corpus.load -> rows.extract -> aggregates.build -> dataset.write

Each stage runs inside an OpenTelemetry span and logs its outcome.
Unreadable chapter files are skipped and listed in the summary; an
unreadable corpus root or a failed write aborts the run.
"""
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from opentelemetry import trace

from config import Config, get_config
from core.errors import AtlasConfigError, AtlasError
from data.exports import dataset_dir, write_dataset
from data.schemas import ParticipleRow, SummarySchema
from integrations.bhsa_json import BhsaJsonCorpus
from observability import create_span, get_logger
from pipeline.aggregation import Aggregates, build_aggregates
from pipeline.extraction import extract_all

logger = get_logger(__name__)


@dataclass
class BuildResult:
    """Outcome of a dataset build."""
    output_dir: Path
    total_rows: int
    chapter_files: int
    skipped_files: List[str]
    books: int
    files_written: List[Path]
    start_time: float
    end_time: float
    trace_id: Optional[str] = None
    aggregates: Optional[Aggregates] = field(default=None, repr=False)

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "output_dir": str(self.output_dir),
            "total_rows": self.total_rows,
            "chapter_files": self.chapter_files,
            "skipped_files": list(self.skipped_files),
            "books": self.books,
            "files_written": len(self.files_written),
            "duration": self.duration,
            "trace_id": self.trace_id,
        }


def get_current_trace_id() -> Optional[str]:
    """Get current trace ID as hex string."""
    span = trace.get_current_span()
    if span and span.is_recording():
        ctx = span.get_span_context()
        if ctx.is_valid:
            return format(ctx.trace_id, "032x")
    return None


class DatasetBuilder:
    """
    Builds the participle dataset from a BHSA JSON corpus.

    Example:
        >>> result = DatasetBuilder(get_config()).run()
        >>> result.total_rows
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or get_config()
        self._validate()
        self.corpus = BhsaJsonCorpus(
            self.config.corpus.corpus_dir,
            chapter_glob=self.config.corpus.chapter_glob,
            books_file=self.config.corpus.books_file,
        )

    def _validate(self) -> None:
        if self.config.pipeline.workers < 1:
            raise AtlasConfigError(
                "Worker count must be at least 1",
                config_key="PIPELINE_WORKERS",
                actual_value=self.config.pipeline.workers,
            )
        if self.config.output.rows_chunk_size < 0:
            raise AtlasConfigError(
                "Row chunk size must be 0 (disabled) or positive",
                config_key="ROWS_CHUNK_SIZE",
                actual_value=self.config.output.rows_chunk_size,
            )

    def run(self) -> BuildResult:
        """
        Execute the build.

        Raises:
            CorpusError: If the corpus root cannot be read
            DatasetWriteError: If an output document cannot be written
        """
        start_time = time.time()
        output_dir = Path(self.config.output.output_dir)

        with create_span(
            "dataset.build",
            attributes={
                "corpus.dir": str(self.config.corpus.corpus_dir),
                "output.dir": str(output_dir),
            },
        ):
            trace_id = get_current_trace_id()
            logger.info(
                "Dataset build started",
                corpus=str(self.config.corpus.corpus_dir),
                output=str(output_dir),
                workers=self.config.pipeline.workers,
            )
            try:
                with create_span("corpus.load") as span:
                    files = self.corpus.discover()
                    books = self.corpus.load_books()
                    chapters = list(self.corpus.iter_chapters(files))
                    skipped = list(self.corpus.skipped)
                    span.set_attribute("corpus.chapter_files", len(files))
                    span.set_attribute("corpus.skipped_files", len(skipped))
                    span.set_attribute("corpus.books", len(books))

                with create_span("rows.extract") as span:
                    rows: List[ParticipleRow] = extract_all(
                        chapters, books, workers=self.config.pipeline.workers
                    )
                    span.set_attribute("rows.count", len(rows))

                with create_span("aggregates.build") as span:
                    aggregates = build_aggregates(rows)
                    span.set_attribute("aggregates.tables", len(aggregates.table_names()))

                summary = SummarySchema(
                    total_rows=len(rows),
                    chapter_files=len(files),
                    skipped_files=skipped,
                    books=len(books),
                )

                with create_span("dataset.write", attributes={"output.dir": str(output_dir)}) as span:
                    written = write_dataset(
                        output_dir,
                        rows,
                        aggregates.tables(),
                        summary,
                        chunk_size=self.config.output.rows_chunk_size,
                        indent=self.config.output.indent,
                    )
                    span.set_attribute("output.files", len(written))

            except AtlasError as e:
                logger.error("Dataset build failed", error=str(e), error_code=e.error_code)
                raise

            end_time = time.time()
            logger.info(
                "Dataset build completed",
                rows=len(rows),
                chapter_files=len(files),
                skipped_files=len(skipped),
                output=str(dataset_dir(output_dir)),
                duration=round(end_time - start_time, 3),
            )

        return BuildResult(
            output_dir=output_dir,
            total_rows=len(rows),
            chapter_files=len(files),
            skipped_files=skipped,
            books=len(books),
            files_written=written,
            start_time=start_time,
            end_time=end_time,
            trace_id=trace_id,
            aggregates=aggregates,
        )
