"""
Participle Atlas - Clitic Chain Walker

Finds the run of particles (preposition, conjunction, article, negation)
standing directly before a word in its verse.

The walk goes right to left from the word and stops at the first token
that is not a clitic, or at the start of the verse. The collected tokens
are then reversed, so element 0 of a chain is the clitic nearest the start
of the verse:

    verse:  [conj "ו"] [prep "ב"] [art] [participle]
    chain:  conj, prep, art
    letters: ו, ב, ה
"""
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from data.schemas import CliticCategory, Token, clitic_category

ARTICLE_LETTER = "ה"
CONJUNCTION_LETTER = "ו"
NEGATION_DEFAULT_LETTER = "ל"


@dataclass(frozen=True)
class CliticChain:
    """Clitics before a word, in verse (left-to-right) order."""
    tokens: Tuple[Token, ...] = ()
    categories: Tuple[CliticCategory, ...] = ()
    letters: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.categories

    @property
    def has_article(self) -> bool:
        return CliticCategory.ARTICLE in self.categories

    @property
    def negated(self) -> bool:
        return CliticCategory.NEGATION in self.categories

    @property
    def tags(self) -> Tuple[str, ...]:
        return tuple(c.value for c in self.categories)

    def letters_for(self, category: CliticCategory) -> Tuple[str, ...]:
        return tuple(
            letter for cat, letter in zip(self.categories, self.letters) if cat == category
        )


def _first_letter(token: Token) -> str:
    form = token.pointed or token.unpointed
    return form[0] if form else ""


def representative_letter(category: CliticCategory, token: Token) -> str:
    """Single letter standing for a clitic in prefix displays."""
    if category == CliticCategory.ARTICLE:
        return ARTICLE_LETTER
    if category == CliticCategory.CONJUNCTION:
        return CONJUNCTION_LETTER
    if category == CliticCategory.NEGATION:
        return _first_letter(token) or NEGATION_DEFAULT_LETTER
    return _first_letter(token)


def walk_clitic_chain(verse: Sequence[Token], index: int) -> CliticChain:
    """
    Collect the contiguous clitics immediately before verse[index].

    Args:
        verse: Tokens of the verse in word order
        index: Position of the target word

    Returns:
        CliticChain in left-to-right order; empty when the word is verse
        initial or directly preceded by a non-clitic
    """
    scanned: List[Tuple[CliticCategory, Token]] = []
    cursor = min(index, len(verse)) - 1

    while cursor >= 0:
        token = verse[cursor]
        category = clitic_category(token.pdp)
        if category is None:
            break
        scanned.append((category, token))
        cursor -= 1

    scanned.reverse()

    return CliticChain(
        tokens=tuple(token for _, token in scanned),
        categories=tuple(category for category, _ in scanned),
        letters=tuple(representative_letter(category, token) for category, token in scanned),
    )


def preceded_by(verse: Sequence[Token], index: int) -> Tuple[str, ...]:
    """Clitic category of the single token touching verse[index], if any."""
    if index <= 0 or index > len(verse):
        return ()
    category = clitic_category(verse[index - 1].pdp)
    return (category.value,) if category is not None else ()
