"""
Participle Atlas - Data Schemas

Closed enumerations, total lookup functions and the record types that flow
through the build. All tag lookups have an explicit default so that an
absent or unfamiliar tag maps to a sentinel instead of failing.

Tag names follow the BHSA feature set:
    vt  - verbal tense (ptca / ptcp for participles)
    vs  - verbal stem (binyan)
    pdp - phrase dependent part of speech
    gn, nu, st, ps - gender, number, state, person
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple
import unicodedata


# =============================================================================
# ENUMS - Standard values across the system
# =============================================================================

class Voice(str, Enum):
    """Participle voice, fixed by the verbal tense code."""
    ACTIVE = "active"
    PASSIVE = "passive"


class Usage(str, Enum):
    """Syntactic usage of a participle."""
    VERBAL = "verbal"
    ADJECTIVAL = "adjectival"
    SUBSTANTIVE = "substantive"


class State(str, Enum):
    """Nominal state."""
    ABSOLUTE = "absolute"
    CONSTRUCT = "construct"
    UNKNOWN = "unknown"


class Person(str, Enum):
    """Grammatical person."""
    FIRST = "1"
    SECOND = "2"
    THIRD = "3"
    UNKNOWN = "unknown"


class CliticCategory(str, Enum):
    """Particles that attach before a word."""
    PREPOSITION = "prep"
    CONJUNCTION = "conj"
    ARTICLE = "art"
    NEGATION = "nega"


class BookGroup(str, Enum):
    """Tripartite canon division, in BHSA book order."""
    TORAH = "Torah"
    PROPHETS = "Prophets"
    WRITINGS = "Writings"
    UNKNOWN = "Unknown"


# =============================================================================
# LOOKUP TABLES
# =============================================================================

BINYAN_LABELS: Dict[str, str] = {
    "qal": "Qal",
    "nif": "Nifal",
    "piel": "Piel",
    "pual": "Pual",
    "hif": "Hifil",
    "hof": "Hofal",
    "hit": "Hitpael",
    "hsht": "Hishtafel",
}
UNKNOWN_BINYAN = "Unknown"

PARTICIPLE_VOICES: Dict[str, Voice] = {
    "ptca": Voice.ACTIVE,
    "ptcp": Voice.PASSIVE,
}

USAGE_BY_PDP: Dict[str, Usage] = {
    "adjv": Usage.ADJECTIVAL,
    "subs": Usage.SUBSTANTIVE,
}

STATE_BY_TAG: Dict[str, State] = {
    "a": State.ABSOLUTE,
    "c": State.CONSTRUCT,
}

PERSON_BY_TAG: Dict[str, Person] = {
    "p1": Person.FIRST,
    "p2": Person.SECOND,
    "p3": Person.THIRD,
}

CLITIC_BY_PDP: Dict[str, CliticCategory] = {c.value: c for c in CliticCategory}

# Inclusive ordinal ranges
BOOK_GROUP_RANGES: List[Tuple[int, int, BookGroup]] = [
    (1, 5, BookGroup.TORAH),
    (6, 26, BookGroup.PROPHETS),
    (27, 39, BookGroup.WRITINGS),
]


def binyan_label(code: Optional[str]) -> str:
    """Display name for a stem code; unknown codes are echoed back."""
    if not code:
        return UNKNOWN_BINYAN
    return BINYAN_LABELS.get(code, code)


def voice_for(vt: Optional[str]) -> Optional[Voice]:
    """Voice of a participle tense code, or None for non-participles."""
    if vt is None:
        return None
    return PARTICIPLE_VOICES.get(vt)


def usage_for(pdp: Optional[str]) -> Usage:
    if pdp is None:
        return Usage.VERBAL
    return USAGE_BY_PDP.get(pdp, Usage.VERBAL)


def state_for(st: Optional[str]) -> State:
    if st is None:
        return State.UNKNOWN
    return STATE_BY_TAG.get(st, State.UNKNOWN)


def person_for(ps: Optional[str]) -> Person:
    if ps is None:
        return Person.UNKNOWN
    return PERSON_BY_TAG.get(ps, Person.UNKNOWN)


def clitic_category(pdp: Optional[str]) -> Optional[CliticCategory]:
    """Clitic category of a part-of-speech tag, None for non-clitics."""
    if pdp is None:
        return None
    return CLITIC_BY_PDP.get(pdp)


def book_group(ordinal: int) -> BookGroup:
    for low, high, group in BOOK_GROUP_RANGES:
        if low <= ordinal <= high:
            return group
    return BookGroup.UNKNOWN


def _slice_int(code: str, start: int, end: int) -> int:
    piece = code[start:end]
    return int(piece) if piece.isdigit() else 0


def parse_bcv(code: Optional[str]) -> Tuple[int, int, int]:
    """
    Split a fixed-width reference code into (book, chapter, verse).

    "010203" -> (1, 2, 3). Missing or non-numeric slices give 0.
    """
    code = (code or "").strip()
    return _slice_int(code, 0, 2), _slice_int(code, 2, 4), _slice_int(code, 4, 6)


def strip_marks(text: str) -> str:
    """Remove Hebrew vowel points and cantillation marks, keeping letters."""
    return "".join(ch for ch in text if not unicodedata.combining(ch))


# =============================================================================
# CORPUS RECORDS
# =============================================================================

def _optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


@dataclass(frozen=True)
class Token:
    """
    One morphologically tagged word.

    word_forms is positional: [0] surface, [1] pointed, [2] unpointed,
    [3] consonantal.

    Example:
    {
        "book_chapter_verse": "010101",
        "pos_tag": {"vt": "ptca", "vs": "qal", "pdp": "verb", "gn": "m", "nu": "sg"},
        "word_forms": ["...", "...", "...", "..."],
        "gloss": "create",
        "freq_lex": 54
    }
    """
    bcv: str = ""
    tags: Mapping[str, Any] = field(default_factory=dict)
    word_forms: Tuple[str, ...] = ()
    gloss: Optional[str] = None
    freq_lex: Optional[int] = None
    freq_occ: Optional[int] = None
    status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Token":
        """Create from a corpus JSON object, tolerating missing keys."""
        tags = data.get("pos_tag")
        forms = data.get("word_forms")
        gloss = data.get("gloss")
        status = data.get("status")
        return cls(
            bcv=str(data.get("book_chapter_verse") or ""),
            tags=dict(tags) if isinstance(tags, dict) else {},
            word_forms=tuple(f if isinstance(f, str) else "" for f in forms)
            if isinstance(forms, list) else (),
            gloss=gloss if isinstance(gloss, str) else None,
            freq_lex=_optional_int(data.get("freq_lex")),
            freq_occ=_optional_int(data.get("freq_occ")),
            status=status if isinstance(status, str) else None,
        )

    def tag(self, name: str) -> Optional[str]:
        value = self.tags.get(name)
        return value if isinstance(value, str) and value else None

    def _form(self, index: int) -> str:
        return self.word_forms[index] if index < len(self.word_forms) else ""

    @property
    def pdp(self) -> Optional[str]:
        return self.tag("pdp")

    @property
    def pointed(self) -> str:
        return (self._form(1) or self._form(0)).strip()

    @property
    def unpointed(self) -> str:
        return (self._form(2) or self._form(3) or self._form(1) or self._form(0)).strip()


Verse = Tuple[Token, ...]


@dataclass(frozen=True)
class BookEntry:
    """Book name pair; list index + 1 is the book ordinal."""
    english: str = ""
    hebrew: str = ""


@dataclass
class ChapterData:
    """A parsed chapter file: verse key -> ordered tokens."""
    path: str
    book_name: str
    verses: Dict[str, Verse] = field(default_factory=dict)

    @property
    def token_count(self) -> int:
        return sum(len(v) for v in self.verses.values())


# =============================================================================
# PARTICIPLE ROW
# =============================================================================

@dataclass(frozen=True)
class ParticipleRow:
    """
    One participle occurrence with all classification fields.

    Example (to_dict):
    {
        "bookCode": 1, "bookName": "Genesis", "bookGroup": "Torah",
        "chapter": 1, "verse": 2, "bcv": "010102", "ref": "Genesis 1:2",
        "binyan": "Piel", "voice": "active", "usage": "verbal",
        "state": "absolute", "person": "unknown",
        "hasArticle": false, "negated": false,
        "precededBy": [], "chain": [], "chainLetters": [], "prepLetters": [],
        "relativeClause": false, "objectMarkerBefore": false,
        "position": 9, "verseLength": 14, ...
    }
    """
    book_code: int
    book_name: str
    book_group: str
    chapter: int
    verse: int
    bcv: str
    ref: str
    binyan: str
    voice: Voice
    usage: Usage
    state: State
    person: Person
    has_article: bool
    negated: bool
    preceded_by: Tuple[str, ...]
    chain: Tuple[str, ...]
    chain_letters: Tuple[str, ...]
    prep_letters: Tuple[str, ...]
    relative_clause: bool
    object_marker_before: bool
    position: int
    verse_length: int
    construct_before_noun: bool
    word_pointed: str
    word_unpointed: str
    gender: Optional[str] = None
    number: Optional[str] = None
    prev_pdp: Optional[str] = None
    next_pdp: Optional[str] = None
    gloss: Optional[str] = None
    freq_lex: Optional[int] = None
    freq_occ: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON object for the row table; absent optional fields are omitted."""
        data: Dict[str, Any] = {
            "bookCode": self.book_code,
            "bookName": self.book_name,
            "bookGroup": self.book_group,
            "chapter": self.chapter,
            "verse": self.verse,
            "bcv": self.bcv,
            "ref": self.ref,
            "binyan": self.binyan,
            "voice": self.voice.value,
            "usage": self.usage.value,
            "state": self.state.value,
            "person": self.person.value,
            "hasArticle": self.has_article,
            "negated": self.negated,
            "precededBy": list(self.preceded_by),
            "chain": list(self.chain),
            "chainLetters": list(self.chain_letters),
            "prepLetters": list(self.prep_letters),
            "relativeClause": self.relative_clause,
            "objectMarkerBefore": self.object_marker_before,
            "position": self.position,
            "verseLength": self.verse_length,
            "constructBeforeNoun": self.construct_before_noun,
            "wordPointed": self.word_pointed,
            "wordUnpointed": self.word_unpointed,
        }
        optional = {
            "gender": self.gender,
            "number": self.number,
            "prevPdp": self.prev_pdp,
            "nextPdp": self.next_pdp,
            "gloss": self.gloss,
            "freqLex": self.freq_lex,
            "freqOcc": self.freq_occ,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data


@dataclass
class SummarySchema:
    """Build summary written next to the aggregates."""
    total_rows: int = 0
    chapter_files: int = 0
    skipped_files: List[str] = field(default_factory=list)
    books: int = 0
    generated_by: str = "participle-atlas"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRows": self.total_rows,
            "chapterFiles": self.chapter_files,
            "skippedFiles": sorted(self.skipped_files),
            "books": self.books,
            "generatedBy": self.generated_by,
        }
