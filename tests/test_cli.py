"""
Tests for the atlas command line.
"""
from typer.testing import CliRunner

from cli.main import app
from config import LoggingConfig
from data.exports import read_summary
from observability import setup_logging


runner = CliRunner()


class TestBuildCommand:
    def test_build(self, corpus_dir, output_dir):
        result = runner.invoke(app, ["build", "--corpus", str(corpus_dir), "--output", str(output_dir)])

        assert result.exit_code == 0, result.output
        assert "Wrote 4 rows" in result.output
        assert read_summary(output_dir)["totalRows"] == 4

    def test_build_with_chunks(self, corpus_dir, output_dir):
        result = runner.invoke(app, [
            "build",
            "--corpus", str(corpus_dir),
            "--output", str(output_dir),
            "--chunk-size", "2",
            "--workers", "2",
        ])

        assert result.exit_code == 0, result.output
        assert (output_dir / "data" / "participles.rows.1.json").is_file()

    def test_missing_corpus_exits_nonzero(self, tmp_path):
        result = runner.invoke(app, [
            "build",
            "--corpus", str(tmp_path / "absent"),
            "--output", str(tmp_path / "out"),
        ])

        assert result.exit_code == 1
        assert "CORPUS_ERROR" in result.output

    def test_invalid_workers(self, corpus_dir, output_dir):
        result = runner.invoke(app, [
            "build", "--corpus", str(corpus_dir), "--output", str(output_dir), "--workers", "0",
        ])
        assert result.exit_code == 1

    def test_invalid_environment_exits_nonzero(self, monkeypatch, corpus_dir, output_dir):
        monkeypatch.setenv("ENVIRONMENT", "staging")

        result = runner.invoke(app, ["build", "--corpus", str(corpus_dir), "--output", str(output_dir)])

        assert result.exit_code == 1
        assert "CONFIG_ERROR" in result.output
        assert not (output_dir / "data").exists()

    def test_build_applies_logging_config(self, monkeypatch, corpus_dir, output_dir, tmp_path):
        log_file = tmp_path / "logs" / "atlas.log"
        monkeypatch.setenv("LOG_TO_FILE", "true")
        monkeypatch.setenv("LOG_FILE", str(log_file))

        try:
            result = runner.invoke(app, ["build", "--corpus", str(corpus_dir), "--output", str(output_dir)])
            assert result.exit_code == 0, result.output
            assert "Chapter files discovered" in log_file.read_text(encoding="utf-8")
        finally:
            setup_logging(LoggingConfig(log_to_file=False), force=True)


class TestInspectCommands:
    def test_summary(self, corpus_dir, output_dir):
        runner.invoke(app, ["build", "--corpus", str(corpus_dir), "--output", str(output_dir)])

        result = runner.invoke(app, ["summary", "--output", str(output_dir)])

        assert result.exit_code == 0, result.output
        assert "Rows: 4" in result.output
        assert "Piel" in result.output

    def test_summary_without_dataset(self, tmp_path):
        result = runner.invoke(app, ["summary", "--output", str(tmp_path)])
        assert result.exit_code == 1

    def test_show(self, corpus_dir, output_dir):
        runner.invoke(app, ["build", "--corpus", str(corpus_dir), "--output", str(output_dir)])

        result = runner.invoke(app, ["show", "by_usage", "--output", str(output_dir)])

        assert result.exit_code == 0, result.output
        assert '"verbal": 2' in result.output

    def test_show_unknown_table(self, output_dir):
        result = runner.invoke(app, ["show", "no_such_table", "--output", str(output_dir)])
        assert result.exit_code == 1
        assert "Unknown table" in result.output
