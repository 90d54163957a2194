"""
Participle Atlas - Configuration

Centralized configuration for the dataset build.
Uses environment variables with sensible defaults.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, Optional
from enum import Enum

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Deployment environments."""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


@dataclass
class CorpusConfig:
    """Tagged corpus location and naming convention."""
    corpus_dir: Path = field(default_factory=lambda: Path(os.getenv("CORPUS_DIR", "./bhsa_json")))
    chapter_glob: str = field(default_factory=lambda: os.getenv("CHAPTER_GLOB", "**/*_chapter_*.json"))
    books_file: str = field(default_factory=lambda: os.getenv("BOOKS_FILE", "books.json"))


@dataclass
class OutputConfig:
    """Dataset output settings."""
    output_dir: Path = field(default_factory=lambda: Path(os.getenv("OUTPUT_DIR", "./public")))
    # 0 disables the participles.rows.<n>.json chunk files
    rows_chunk_size: int = field(default_factory=lambda: int(os.getenv("ROWS_CHUNK_SIZE", "0")))
    indent: int = field(default_factory=lambda: int(os.getenv("OUTPUT_INDENT", "2")))


@dataclass
class PipelineConfig:
    """Row extraction settings."""
    workers: int = field(default_factory=lambda: int(os.getenv("PIPELINE_WORKERS", "1")))


@dataclass
class LoggingConfig:
    """Logging configuration."""
    service_name: str = "participle-atlas"
    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    json_format: bool = field(default_factory=lambda: os.getenv("LOG_FORMAT", "console").lower() == "json")
    log_to_console: bool = field(default_factory=lambda: os.getenv("LOG_TO_CONSOLE", "true").lower() == "true")
    log_to_file: bool = field(default_factory=lambda: os.getenv("LOG_TO_FILE", "false").lower() == "true")
    log_file_path: Path = field(default_factory=lambda: Path(os.getenv("LOG_FILE", "./logs/atlas.log")))
    max_file_size: int = field(default_factory=lambda: int(os.getenv("LOG_MAX_SIZE", "10485760")))  # 10MB
    backup_count: int = field(default_factory=lambda: int(os.getenv("LOG_BACKUP_COUNT", "5")))
    environment: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "development"))


@dataclass
class TracingConfig:
    """OpenTelemetry tracing configuration."""
    service_name: str = "participle-atlas"
    service_version: str = "1.0.0"
    enabled: bool = field(
        default_factory=lambda: os.getenv("OTEL_TRACING_ENABLED", "false").lower() == "true"
    )
    console_export: bool = field(
        default_factory=lambda: os.getenv("OTEL_CONSOLE_EXPORT", "false").lower() == "true"
    )
    environment: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "development"))


@dataclass
class Config:
    """Main configuration class combining all sub-configs."""
    env: Environment = field(default_factory=lambda: Environment(os.getenv("ENVIRONMENT", "development")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")

    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.env == Environment.PRODUCTION

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for diagnostics."""
        return {
            "env": self.env.value,
            "debug": self.debug,
            "corpus_dir": str(self.corpus.corpus_dir),
            "chapter_glob": self.corpus.chapter_glob,
            "books_file": self.corpus.books_file,
            "output_dir": str(self.output.output_dir),
            "rows_chunk_size": self.output.rows_chunk_size,
            "workers": self.pipeline.workers,
        }


# Singleton configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create configuration singleton."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Reload configuration from environment."""
    global _config
    load_dotenv(override=True)
    _config = Config()
    return _config


# Directory and file names of the written dataset, relative to output_dir
DATASET_DIR = "data"
ROWS_FILE = "participles.rows.json"
ROWS_CHUNK_FILE = "participles.rows.{index}.json"
AGG_DIR = "agg"
META_DIR = "meta"
SUMMARY_FILE = "summary.json"
