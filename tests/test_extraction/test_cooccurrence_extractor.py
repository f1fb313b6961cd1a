from __future__ import annotations

import pytest

from storylens.extraction.cooccurrence_extractor import RelationshipAnalyzer, analyze_relationships
from storylens.utils.config import RelationshipConfig


@pytest.fixture
def analyzer():
    return RelationshipAnalyzer()


def test_pair_seen_in_two_sentences(analyzer):
    text = "Alex and Morgan walked. Alex thanked Morgan. Sam slept."

    rels = analyzer.analyze(text, ["Alex", "Morgan", "Sam"])

    assert len(rels) == 1
    rel = rels[0]
    assert (rel.char1, rel.char2) == ("Alex", "Morgan")
    assert rel.strength == 2
    assert rel.context == ["Alex and Morgan walked", "Alex thanked Morgan"]


def test_single_comention_is_below_threshold(analyzer):
    assert analyzer.analyze("Alex and Morgan walked. Sam slept.", ["Alex", "Morgan", "Sam"]) == []


def test_pair_order_does_not_depend_on_input_order(analyzer):
    text = "Morgan saw Alex. Alex waved at Morgan."

    forward = analyzer.analyze(text, ["Alex", "Morgan"])
    backward = analyzer.analyze(text, ["Morgan", "Alex"])

    assert [r.model_dump() for r in forward] == [r.model_dump() for r in backward]
    assert forward[0].key == ("Alex", "Morgan")


def test_three_characters_in_one_sentence():
    analyzer = RelationshipAnalyzer(RelationshipConfig(min_strength=1))

    rels = analyzer.analyze("Alex, Morgan and Sam shared a meal.", ["Alex", "Morgan", "Sam"])

    assert {r.key for r in rels} == {("Alex", "Morgan"), ("Alex", "Sam"), ("Morgan", "Sam")}


def test_names_match_whole_words_only(analyzer):
    text = "Alexander met Morgan. Alexander thanked Morgan."

    assert analyzer.analyze(text, ["Alex", "Morgan"]) == []


def test_duplicate_and_blank_names(analyzer):
    assert analyzer.analyze("Alex and Alex. Alex and Alex.", ["Alex", "Alex", " "]) == []


def test_context_is_capped():
    analyzer = RelationshipAnalyzer(RelationshipConfig(max_context=1))

    rels = analyzer.analyze("Alex met Morgan. Alex left Morgan. Morgan followed Alex.", ["Alex", "Morgan"])

    assert rels[0].strength == 3
    assert rels[0].context == ["Alex met Morgan"]


def test_sorted_by_strength(analyzer):
    text = (
        "Alex met Morgan. Alex left Morgan. Morgan followed Alex. "
        "Sam found Alex. Sam lost Alex."
    )

    rels = analyzer.analyze(text, ["Alex", "Morgan", "Sam"])

    assert [r.key for r in rels] == [("Alex", "Morgan"), ("Alex", "Sam")]


def test_names_must_be_a_collection():
    with pytest.raises(TypeError):
        analyze_relationships("Alex met Morgan.", "Alex")
    with pytest.raises(TypeError):
        analyze_relationships("Alex met Morgan.", None)


def test_empty_text():
    assert analyze_relationships(None, ["Alex", "Morgan"]) == []
