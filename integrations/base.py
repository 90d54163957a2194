"""
Participle Atlas - Base Integration Classes

Common base class for tagged-corpus readers.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, List, Union

from data.schemas import BookEntry, ChapterData
from observability import get_logger


class BaseCorpusIntegration(ABC):
    """Base class for corpus integrations."""

    def __init__(self, corpus_path: Union[str, Path]):
        self.corpus_path = Path(corpus_path)
        self.logger = get_logger(f"atlas.integrations.{self.__class__.__name__}")

    @abstractmethod
    def discover(self) -> List[Path]:
        """List the chapter documents of the corpus."""

    @abstractmethod
    def load_chapter(self, path: Path) -> ChapterData:
        """Parse one chapter document."""

    @abstractmethod
    def load_books(self) -> List[BookEntry]:
        """Load the book-name lookup; empty when unavailable."""

    @abstractmethod
    def iter_chapters(self) -> Iterator[ChapterData]:
        """Yield every chapter that parses."""
