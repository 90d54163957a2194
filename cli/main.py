"""
Participle Atlas - Main CLI Application

Command-line interface for building and inspecting the participle dataset.
"""
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from config import Config, get_config
from core.errors import AtlasConfigError, AtlasError
from data.exports import read_aggregate, read_summary
from observability import setup_logging, setup_tracing, shutdown_tracing
from pipeline.aggregation import Aggregates
from pipeline.orchestrator import BuildResult, DatasetBuilder

# Initialize app
app = typer.Typer(
    name="atlas",
    help="Participle Atlas - Hebrew Bible participle dataset builder",
    add_completion=False
)

console = Console()


def _build_config(
    corpus: Optional[Path],
    output: Optional[Path],
    workers: Optional[int],
    chunk_size: Optional[int],
) -> Config:
    try:
        config = Config()
    except ValueError as e:
        raise AtlasConfigError(
            f"Invalid configuration: {e}",
            cause=e,
            suggestions=["Check ENVIRONMENT and the numeric settings in the environment or .env"],
        ) from e
    if corpus is not None:
        config.corpus.corpus_dir = corpus
    if output is not None:
        config.output.output_dir = output
    if workers is not None:
        config.pipeline.workers = workers
    if chunk_size is not None:
        config.output.rows_chunk_size = chunk_size
    return config


@app.command()
def build(
    corpus: Optional[Path] = typer.Option(None, "--corpus", "-c", help="BHSA JSON corpus directory"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output root (data/ is created inside)"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Chapter extraction threads"),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", help="Rows per chunk file (0 = no chunks)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output")
):
    """Build the participle row table and aggregates from the corpus."""
    try:
        config = _build_config(corpus, output, workers, chunk_size)
        if verbose:
            config.logging.level = "DEBUG"
        setup_logging(config.logging, force=True)
        setup_tracing(config.tracing)
        console.print(f"[bold]Building dataset from: {escape(str(config.corpus.corpus_dir))}[/bold]")
        result = DatasetBuilder(config).run()
    except AtlasError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        for suggestion in e.suggestions:
            console.print(f"  - {escape(suggestion)}")
        raise typer.Exit(1)
    finally:
        shutdown_tracing()

    _display_build_result(result)


@app.command()
def summary(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output root of a previous build"),
):
    """Show the summary of a previously built dataset."""
    output_dir = output if output is not None else get_config().output.output_dir

    try:
        document = read_summary(output_dir)
        by_binyan = read_aggregate(output_dir, "by_binyan")
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: no readable dataset under {escape(str(output_dir))}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(Panel.fit(
        f"[bold blue]Participle Atlas[/bold blue]\n"
        f"Rows: {document.get('totalRows', 0)}  "
        f"Chapter files: {document.get('chapterFiles', 0)}  "
        f"Skipped: {len(document.get('skippedFiles', []))}",
        border_style="blue"
    ))
    _display_binyan_table(by_binyan)


@app.command()
def show(
    table: str = typer.Argument(..., help="Aggregate table name, e.g. by_usage"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output root of a previous build"),
):
    """Print one aggregate document as JSON."""
    if table not in Aggregates.table_names():
        console.print(f"[red]Unknown table: {escape(table)}[/red]")
        console.print("Available: " + ", ".join(Aggregates.table_names()))
        raise typer.Exit(1)

    output_dir = output if output is not None else get_config().output.output_dir
    try:
        document = read_aggregate(output_dir, table)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: cannot read {escape(table)}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print_json(json.dumps(document, ensure_ascii=False))


# =============================================================================
# Display helpers
# =============================================================================

def _display_build_result(result: BuildResult):
    table = Table(title="Dataset Build")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Rows", str(result.total_rows))
    table.add_row("Chapter files", str(result.chapter_files))
    table.add_row("Skipped files", str(len(result.skipped_files)))
    table.add_row("Books in lookup", str(result.books))
    table.add_row("Files written", str(len(result.files_written)))
    table.add_row("Duration", f"{result.duration:.2f}s")

    console.print(table)
    for path in result.skipped_files:
        console.print(f"[yellow]Skipped: {escape(path)}[/yellow]")
    console.print(f"[green]Wrote {result.total_rows} rows and aggregates to {escape(str(result.output_dir))}[/green]")


def _display_binyan_table(by_binyan: dict):
    table = Table(title="Participles by Binyan")
    table.add_column("Binyan", style="cyan")
    table.add_column("Active", justify="right")
    table.add_column("Passive", justify="right")

    for binyan in sorted(by_binyan):
        counts = by_binyan[binyan]
        table.add_row(binyan, str(counts.get("active", 0)), str(counts.get("passive", 0)))

    console.print(table)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
