"""
Participle Atlas - Participle Row Extractor

Turns parsed chapters into ParticipleRow records, one per token whose
verbal tense is ptca (active) or ptcp (passive).
"""
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence

from data.schemas import (
    BookEntry,
    ChapterData,
    CliticCategory,
    ParticipleRow,
    State,
    Token,
    binyan_label,
    book_group,
    parse_bcv,
    person_for,
    state_for,
    strip_marks,
    usage_for,
    voice_for,
)
from observability import LogContext, get_logger
from pipeline.clitics import CliticChain, preceded_by, walk_clitic_chain

logger = get_logger(__name__)

RELATIVIZER_FORMS = frozenset({"אשר"})
RELATIVIZER_GLOSS = "<relative>"
OBJECT_MARKER_FORMS = frozenset({"את"})
OBJECT_MARKER_GLOSS = "<object marker>"

SUBSTANTIVE_PDP = "subs"


def is_participle(token: Token) -> bool:
    return voice_for(token.tag("vt")) is not None


def _matches_marker(token: Token, forms: frozenset, gloss_marker: str) -> bool:
    # Any of the three signals counts; a gloss may over-match.
    if token.unpointed in forms:
        return True
    if strip_marks(token.pointed) in forms:
        return True
    return bool(token.gloss) and gloss_marker in token.gloss


def chain_has_relativizer(chain: CliticChain) -> bool:
    return any(_matches_marker(t, RELATIVIZER_FORMS, RELATIVIZER_GLOSS) for t in chain.tokens)


def chain_has_object_marker(chain: CliticChain) -> bool:
    return any(_matches_marker(t, OBJECT_MARKER_FORMS, OBJECT_MARKER_GLOSS) for t in chain.tokens)


def resolve_book_name(ordinal: int, books: Sequence[BookEntry], fallback: str) -> str:
    """English name for a 1-based ordinal, else the directory-derived name."""
    if 1 <= ordinal <= len(books) and books[ordinal - 1].english:
        return books[ordinal - 1].english
    return fallback


def build_row(
    verse: Sequence[Token],
    index: int,
    fallback_book: str,
    books: Sequence[BookEntry],
) -> Optional[ParticipleRow]:
    """Row for verse[index], or None when the token is not a participle."""
    token = verse[index]
    voice = voice_for(token.tag("vt"))
    if voice is None:
        return None

    chain = walk_clitic_chain(verse, index)
    book, chapter, verse_no = parse_bcv(token.bcv)
    book_name = resolve_book_name(book, books, fallback_book)
    state = state_for(token.tag("st"))

    prev_token = verse[index - 1] if index > 0 else None
    next_token = verse[index + 1] if index + 1 < len(verse) else None
    next_pdp = next_token.pdp if next_token is not None else None

    return ParticipleRow(
        book_code=book,
        book_name=book_name,
        book_group=book_group(book).value,
        chapter=chapter,
        verse=verse_no,
        bcv=token.bcv,
        ref=f"{book_name} {chapter}:{verse_no}",
        binyan=binyan_label(token.tag("vs")),
        voice=voice,
        usage=usage_for(token.pdp),
        state=state,
        person=person_for(token.tag("ps")),
        has_article=chain.has_article,
        negated=chain.negated,
        preceded_by=preceded_by(verse, index),
        chain=chain.tags,
        chain_letters=chain.letters,
        prep_letters=chain.letters_for(CliticCategory.PREPOSITION),
        relative_clause=chain_has_relativizer(chain),
        object_marker_before=chain_has_object_marker(chain),
        position=index,
        verse_length=len(verse),
        construct_before_noun=state == State.CONSTRUCT and next_pdp == SUBSTANTIVE_PDP,
        word_pointed=token.pointed,
        word_unpointed=token.unpointed,
        gender=token.tag("gn"),
        number=token.tag("nu"),
        prev_pdp=prev_token.pdp if prev_token is not None else None,
        next_pdp=next_pdp,
        gloss=token.gloss,
        freq_lex=token.freq_lex,
        freq_occ=token.freq_occ,
    )


def extract_rows(chapter: ChapterData, books: Sequence[BookEntry]) -> List[ParticipleRow]:
    """All participle rows of one chapter, in verse and word order."""
    rows: List[ParticipleRow] = []
    for verse in chapter.verses.values():
        for index in range(len(verse)):
            row = build_row(verse, index, chapter.book_name, books)
            if row is not None:
                rows.append(row)

    with LogContext(chapter_file=chapter.path):
        logger.debug("Chapter rows extracted", verses=len(chapter.verses), rows=len(rows))
    return rows


def extract_all(
    chapters: Iterable[ChapterData],
    books: Sequence[BookEntry],
    workers: int = 1,
) -> List[ParticipleRow]:
    """
    Rows for every chapter, concatenated in chapter order.

    Chapters are independent, so with workers > 1 they are extracted on a
    thread pool; executor.map keeps the input order.
    """
    if workers <= 1:
        rows: List[ParticipleRow] = []
        for chapter in chapters:
            rows.extend(extract_rows(chapter, books))
        return rows

    with ThreadPoolExecutor(max_workers=workers) as executor:
        per_chapter = list(executor.map(lambda c: extract_rows(c, books), chapters))
    return [row for chunk in per_chapter for row in chunk]

