"""
Participle Atlas - BHSA JSON Corpus Reader

Reads a BHSA export laid out as one JSON document per chapter:

    bhsa_json/
        books.json                       [{"english": ..., "hebrew": ...}, ...]
        Genesis/Genesis_chapter_1.json   {"1": [token, ...], "2": [...], ...}
        1_Samuel/1_Samuel_chapter_3.json

A chapter that fails to parse is logged and skipped; the rest of the
corpus is still read. A missing or malformed books.json gives an empty
lookup and book names fall back to the chapter's directory name.
"""
import json
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from core.errors import ChapterParseError, CorpusError, ErrorContext
from data.schemas import BookEntry, ChapterData, Token, Verse
from integrations.base import BaseCorpusIntegration


class BhsaJsonCorpus(BaseCorpusIntegration):
    """
    Chapter-per-file BHSA corpus.

    Provides access to:
    - chapter documents matching a glob under the corpus root
    - the optional ordinal -> book name lookup
    """

    def __init__(
        self,
        corpus_path: Union[str, Path],
        chapter_glob: str = "**/*_chapter_*.json",
        books_file: str = "books.json",
    ):
        super().__init__(corpus_path)
        self.chapter_glob = chapter_glob
        self.books_file = books_file
        self.skipped: List[str] = []

    def discover(self) -> List[Path]:
        """Sorted chapter files under the corpus root."""
        if not self.corpus_path.is_dir():
            raise CorpusError(
                f"Corpus directory not found or not a directory: {self.corpus_path}",
                corpus_dir=self.corpus_path,
                context=ErrorContext(operation="discover", component="corpus"),
                suggestions=["Set CORPUS_DIR or pass --corpus"],
            )
        try:
            # glob hides permission errors on the root itself
            with os.scandir(self.corpus_path) as entries:
                next(entries, None)
            files = sorted(p for p in self.corpus_path.glob(self.chapter_glob) if p.is_file())
        except OSError as e:
            raise CorpusError(
                f"Corpus directory could not be read: {self.corpus_path}",
                corpus_dir=self.corpus_path,
                context=ErrorContext(operation="discover", component="corpus"),
                cause=e,
                suggestions=["Check read permissions on the corpus directory"],
            ) from e

        self.logger.info("Chapter files discovered", corpus=str(self.corpus_path), files=len(files))
        return files

    def load_books(self) -> List[BookEntry]:
        """Book lookup from books.json; any failure yields an empty list."""
        path = self.corpus_path / self.books_file
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.debug("Book lookup unavailable", path=str(path), reason=str(e))
            return []

        if not isinstance(data, list):
            self.logger.debug("Book lookup is not a list", path=str(path))
            return []

        books = []
        for item in data:
            # Keep a placeholder for odd entries so ordinals stay aligned
            if isinstance(item, dict):
                books.append(BookEntry(
                    english=str(item.get("english") or ""),
                    hebrew=str(item.get("hebrew") or ""),
                ))
            else:
                books.append(BookEntry())
        return books

    @staticmethod
    def book_name_for(path: Union[str, Path]) -> str:
        """Directory immediately above the chapter file, underscores as spaces."""
        parts = str(path).replace("\\", "/").split("/")
        book_dir = parts[-2] if len(parts) >= 2 else ""
        return book_dir.replace("_", " ")

    def load_chapter(self, path: Path) -> ChapterData:
        """Parse one chapter document."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            raise ChapterParseError(f"Unreadable chapter file: {e}", path=path, cause=e) from e

        if not isinstance(raw, dict):
            raise ChapterParseError(
                f"Chapter document must be an object, got {type(raw).__name__}",
                path=path,
            )

        verses: Dict[str, Verse] = {}
        for verse_key, tokens in raw.items():
            verses[str(verse_key)] = self._parse_verse(path, verse_key, tokens)

        return ChapterData(
            path=str(path),
            book_name=self.book_name_for(path),
            verses=verses,
        )

    @staticmethod
    def _parse_verse(path: Path, verse_key: Any, tokens: Any) -> Verse:
        if not isinstance(tokens, list):
            raise ChapterParseError(f"Verse {verse_key} is not a token list", path=path)
        parsed = []
        for token in tokens:
            if not isinstance(token, dict):
                raise ChapterParseError(f"Verse {verse_key} holds a non-object token", path=path)
            parsed.append(Token.from_dict(token))
        return tuple(parsed)

    def iter_chapters(self, files: Optional[List[Path]] = None) -> Iterator[ChapterData]:
        """Yield parsed chapters, skipping the ones that fail."""
        self.skipped = []
        for path in files if files is not None else self.discover():
            try:
                chapter = self.load_chapter(path)
            except ChapterParseError as e:
                self.skipped.append(str(path))
                self.logger.warning("Skipping chapter file", path=str(path), error=e.message)
                continue
            yield chapter
