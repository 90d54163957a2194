"""
Tests for the clitic chain walker.
"""
import pytest

from data.schemas import CliticCategory, Token
from pipeline.clitics import (
    CliticChain,
    preceded_by,
    representative_letter,
    walk_clitic_chain,
)


@pytest.fixture
def participle(make_token):
    return make_token(pdp="verb", vt="ptca", vs="qal", pointed="הֹלֵךְ", unpointed="הלך")


class TestWalkCliticChain:
    """Tests for walk_clitic_chain."""

    def test_chain_is_in_verse_order(self, make_token, participle):
        verse = [
            make_token(pdp="conj", pointed="וְ", unpointed="ו"),
            make_token(pdp="prep", pointed="בְּ", unpointed="ב"),
            make_token(pdp="art", pointed="הַ", unpointed="ה"),
            participle,
        ]

        chain = walk_clitic_chain(verse, 3)

        assert chain.tags == ("conj", "prep", "art")
        assert chain.letters == ("ו", "ב", "ה")
        assert chain.has_article is True
        assert chain.negated is False
        assert chain.tokens == tuple(verse[:3])

    def test_walk_stops_at_non_clitic(self, make_token, participle):
        verse = [
            make_token(pdp="subs", pointed="אִישׁ", unpointed="איש"),
            make_token(pdp="prep", pointed="לְ", unpointed="ל"),
            participle,
        ]

        chain = walk_clitic_chain(verse, 2)

        assert chain.tags == ("prep",)
        assert chain.letters == ("ל",)

    def test_clitics_before_a_non_clitic_are_not_collected(self, make_token, participle):
        verse = [
            make_token(pdp="conj", pointed="וְ", unpointed="ו"),
            make_token(pdp="subs", pointed="אִישׁ", unpointed="איש"),
            participle,
        ]

        assert walk_clitic_chain(verse, 2).is_empty

    def test_verse_initial_word_has_empty_chain(self, participle):
        chain = walk_clitic_chain([participle], 0)

        assert chain == CliticChain()
        assert chain.is_empty
        assert chain.has_article is False

    def test_negation_sets_negated(self, make_token, participle):
        verse = [make_token(pdp="nega", pointed="לֹא", unpointed="לא"), participle]

        chain = walk_clitic_chain(verse, 1)

        assert chain.negated is True
        assert chain.letters == ("ל",)

    def test_token_without_tags_stops_walk(self, make_token, participle):
        verse = [make_token(pdp="prep", pointed="בְּ"), make_token(), participle]

        assert walk_clitic_chain(verse, 2).is_empty

    def test_letters_for_category(self, make_token, participle):
        verse = [
            make_token(pdp="prep", pointed="מִן", unpointed="מן"),
            make_token(pdp="prep", pointed="לְ", unpointed="ל"),
            participle,
        ]

        chain = walk_clitic_chain(verse, 2)

        assert chain.letters_for(CliticCategory.PREPOSITION) == ("מ", "ל")
        assert chain.letters_for(CliticCategory.ARTICLE) == ()


class TestRepresentativeLetter:
    """Tests for representative_letter."""

    def test_article_and_conjunction_are_fixed(self, make_token):
        token = make_token(pdp="art", pointed="")
        assert representative_letter(CliticCategory.ARTICLE, token) == "ה"
        assert representative_letter(CliticCategory.CONJUNCTION, token) == "ו"

    def test_negation_defaults_to_lamed(self, make_token):
        token = make_token(pdp="nega")
        assert representative_letter(CliticCategory.NEGATION, token) == "ל"

    def test_preposition_uses_first_letter(self, make_token):
        token = make_token(pdp="prep", pointed="כְּ", unpointed="כ")
        assert representative_letter(CliticCategory.PREPOSITION, token) == "כ"

    def test_preposition_falls_back_to_unpointed(self):
        token = Token.from_dict({"pos_tag": {"pdp": "prep"}, "word_forms": ["", "", "ב", ""]})
        assert representative_letter(CliticCategory.PREPOSITION, token) == "ב"

    def test_preposition_without_forms_is_empty(self, make_token):
        token = make_token(pdp="prep")
        assert representative_letter(CliticCategory.PREPOSITION, token) == ""


class TestPrecededBy:
    """Tests for preceded_by."""

    def test_reports_only_adjacent_clitic(self, make_token, participle):
        verse = [
            make_token(pdp="conj", pointed="וְ"),
            make_token(pdp="prep", pointed="בְּ"),
            participle,
        ]
        assert preceded_by(verse, 2) == ("prep",)

    def test_non_clitic_neighbour(self, make_token, participle):
        verse = [make_token(pdp="subs", pointed="אִישׁ"), participle]
        assert preceded_by(verse, 1) == ()

    def test_verse_initial(self, participle):
        assert preceded_by([participle], 0) == ()
