from __future__ import annotations

import pytest

from storylens.extraction.dialogue_extractor import DialogueExtractor, extract_dialogue
from storylens.utils.config import DialogueConfig


@pytest.fixture
def extractor():
    return DialogueExtractor()


def _pairs(entries):
    return {(e.speaker, e.dialogue) for e in entries}


def test_pattern_table_is_shape_by_verb(extractor):
    assert len(extractor.patterns) == 7 * len(extractor.config.verbs)
    assert extractor.patterns[0].shape == "P1"
    assert extractor.patterns[-1].shape == "P7"


def test_quote_comma_speaker_verb(extractor):
    entries = extractor.extract('"We should go," Alex said.', "ch1.md")

    assert ("Alex", "We should go") in _pairs(entries)
    assert all(e.file == "ch1.md" for e in entries)


def test_speaker_verb_comma_quote(extractor):
    entries = extractor.extract('Alex said, "We should go."')

    assert len(entries) == 1
    assert entries[0].speaker == "Alex"
    assert entries[0].dialogue == "We should go."
    assert entries[0].context == 'Alex said, "We should go."'


def test_quote_verb_speaker(extractor):
    entries = extractor.extract('"Wait here," said Alex.')

    assert _pairs(entries) == {("Alex", "Wait here")}


def test_speaker_verb_colon_quote(extractor):
    entries = extractor.extract('Morgan replied: "Not today."')

    assert _pairs(entries) == {("Morgan", "Not today.")}


def test_quote_period_speaker_verb(extractor):
    entries = extractor.extract('"The gate is open." Alex whispered')

    assert ("Alex", "The gate is open") in _pairs(entries)


def test_speaker_verb_quote(extractor):
    entries = extractor.extract('Alex whispered "Run."')

    assert _pairs(entries) == {("Alex", "Run.")}


def test_bare_quote_speaker_verb(extractor):
    entries = extractor.extract('"Over here" Morgan called.')

    assert _pairs(entries) == {("Morgan", "Over here")}


def test_line_matched_by_two_shapes_is_reported_twice(extractor):
    entries = extractor.extract('"We should go," Alex said.')

    assert len(entries) == 2
    assert {e.speaker for e in entries} == {"Alex"}


def test_two_word_speaker(extractor):
    entries = extractor.extract('"Hello," said Alex Morgan.')

    assert _pairs(entries) == {("Alex Morgan", "Hello")}


def test_verb_matching_ignores_case(extractor):
    entries = extractor.extract('"Fine," Alex SAID.')

    assert ("Alex", "Fine") in _pairs(entries)


def test_apostrophes_inside_quotes(extractor):
    double = extractor.extract('"It\'s a test," Alex said.')
    single = extractor.extract("'It's late,' said Alex.")

    assert ("Alex", "It's a test") in _pairs(double)
    assert _pairs(single) == {("Alex", "It's late")}


def test_curly_quotes(extractor):
    entries = extractor.extract("“Stay close,” said Morgan.")

    assert _pairs(entries) == {("Morgan", "Stay close")}


def test_html_is_stripped(extractor):
    entries = extractor.extract('<p>"Hold on," said <em>Alex</em>.</p>')

    assert _pairs(entries) == {("Alex", "Hold on")}


def test_empty_and_none_text(extractor):
    assert extractor.extract("") == []
    assert extractor.extract(None) == []
    assert extractor.extract("The wind howled all night.") == []


def test_custom_verbs():
    extractor = DialogueExtractor(DialogueConfig(verbs=["hissed"]))

    assert _pairs(extractor.extract('"Leave," hissed Morgan.')) == {("Morgan", "Leave")}
    assert extractor.extract('"Leave," said Morgan.') == []


def test_functional_api_uses_default_verbs():
    entries = extract_dialogue('"Wait here," said Alex.', "a.md")

    assert [(e.speaker, e.file) for e in entries] == [("Alex", "a.md")]
