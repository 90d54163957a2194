"""
Participle Atlas - Test Configuration

Pytest fixtures and configuration for all tests.
"""
from pathlib import Path
from typing import Any, Callable

import pytest

from config import Config
from data.schemas import Token
from tests.corpus_data import token_json, write_corpus


@pytest.fixture
def make_token() -> Callable[..., Token]:
    """Factory for Token records, built through Token.from_dict."""
    def factory(**kwargs: Any) -> Token:
        return Token.from_dict(token_json(**kwargs))
    return factory


@pytest.fixture
def sample_hebrew_text() -> str:
    """Sample Hebrew text for testing."""
    return "בְּרֵאשִׁית בָּרָא אֱלֹהִים אֵת הַשָּׁמַיִם וְאֵת הָאָרֶץ"


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    """
    Small corpus: two valid chapters with four participles and one
    malformed chapter file.
    """
    return write_corpus(tmp_path / "bhsa_json")


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "public"


@pytest.fixture
def build_config(corpus_dir: Path, output_dir: Path) -> Config:
    """Config pointed at the temporary corpus and output directories."""
    config = Config()
    config.corpus.corpus_dir = corpus_dir
    config.output.output_dir = output_dir
    config.output.rows_chunk_size = 0
    config.output.indent = 2
    config.pipeline.workers = 1
    return config
