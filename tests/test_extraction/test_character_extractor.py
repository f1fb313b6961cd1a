from __future__ import annotations

import pytest

from storylens.extraction.character_extractor import CharacterExtractor, extract_characters
from storylens.utils.config import CharacterConfig


@pytest.fixture
def extractor():
    return CharacterExtractor()


def _names(candidates):
    return [c.name for c in candidates]


def test_attribution_with_context(extractor):
    candidates = extractor.extract('"We must leave before the sun rises," said Alex.')

    assert len(candidates) == 1
    alex = candidates[0]
    assert alex.name == "Alex"
    assert alex.count == 1
    assert alex.context == ['"We must leave before the sun rises," said Alex']


def test_pronouns_and_skip_words_are_ignored(extractor):
    names = _names(extractor.extract('"Hi there," She said. They said nothing at all.'))

    assert "She" not in names
    assert "They" not in names


def test_location_names_are_not_characters(extractor):
    names = _names(extractor.extract('"Hurry up, everyone," said Crystal Tower.'))

    assert "Crystal Tower" not in names


def test_action_verb_pass(extractor):
    candidates = extractor.extract("Morgan walked into the hall. Morgan smiled at the guard.")

    assert _names(candidates) == ["Morgan"]
    assert candidates[0].count == 2
    assert candidates[0].context == ["Morgan walked into the hall", "Morgan smiled at the guard"]


def test_action_verb_pass_can_be_disabled():
    extractor = CharacterExtractor(CharacterConfig(enable_action_verbs=False))

    assert extractor.extract("Morgan walked into the hall. Morgan smiled at the guard.") == []


def test_name_markers_need_repeated_mentions(extractor):
    once = extractor.extract("Alex met Morgan at dawn.")
    twice = extractor.extract("Alex met Morgan at dawn. Later Alex met Morgan again.")

    assert once == []
    assert _names(twice) == ["Morgan"]
    assert twice[0].count == 2
    assert twice[0].context == []


def test_sorted_by_count(extractor):
    text = 'Morgan walked into the hall. Morgan smiled at the guard. "Hello there," said Alex.'

    assert _names(extractor.extract(text)) == ["Morgan", "Alex"]


def test_context_is_capped():
    extractor = CharacterExtractor(CharacterConfig(max_context=1))
    candidates = extractor.extract("Morgan walked into the hall. Morgan smiled at the guard.")

    assert candidates[0].count == 2
    assert len(candidates[0].context) == 1


@pytest.mark.parametrize(
    "name, expected",
    [("Alex", True), ("Alex Morgan", True), ("A", False), ("She", False), ("alex", False)],
)
def test_is_valid_name(extractor, name, expected):
    assert extractor.is_valid_name(name) is expected


def test_looks_like_location(extractor):
    assert extractor.looks_like_location("Forest")
    assert extractor.looks_like_location("Shadowmere Forest")
    assert not extractor.looks_like_location("Alex")


def test_none_and_html(extractor):
    assert extractor.extract(None) == []
    assert _names(extract_characters('<p>"Wait for me," said <b>Alex</b>.</p>')) == ["Alex"]


def test_curly_quote_before_attribution_widens_context(extractor):
    sentence = (
        "Beneath the rattling shutters of the old mill on the hill, "
        "“We leave tonight”, Morgan said quietly"
    )

    candidates = extractor.extract(sentence + ".")

    morgan = candidates[0]
    assert morgan.name == "Morgan"
    assert morgan.context[0] == sentence[sentence.index("“") - 50:].strip()
    assert not morgan.context[0].startswith("Beneath")
