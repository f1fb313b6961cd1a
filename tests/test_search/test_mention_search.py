from __future__ import annotations

import pytest

from storylens.extraction.models import Document
from storylens.search.mention_search import (
    MentionSearch,
    characters_in_location,
    remove_dialogue,
    speaker_matches,
)

SCENE = '"We should go," Alex said. Morgan looked at Alex across the fire. Nobody spoke.'
FOREST = (
    "Alex entered the Forest. Morgan waited by the river. "
    "Morgan and Alex left the Forest together."
)


@pytest.fixture
def search():
    return MentionSearch(
        [
            Document(path="scene.md", text=SCENE),
            Document(path="forest.md", text=FOREST),
            Document(path="map.png", text="Alex", is_image=True),
            {"path": "draft.md", "text": None},
        ],
        characters=["Alex", "Morgan"],
    )


@pytest.mark.parametrize(
    "speaker, name, expected",
    [
        ("Alex", "Alex", True),
        ("alex", "ALEX", True),
        ("Alex Morgan", "Alex", True),
        ("Alex", "Alex Morgan", True),
        ("Alexander", "Alex", False),
        ("", "Alex", False),
    ],
)
def test_speaker_matches(speaker, name, expected):
    assert speaker_matches(speaker, name) is expected


def test_dialogue_for_returns_only_that_speaker(search):
    lines = search.dialogue_for("Alex")

    assert lines
    assert all(line.speaker == "Alex" and line.file == "scene.md" for line in lines)
    assert search.dialogue_for("Morgan") == []


def test_mentions_exclude_dialogue(search):
    mentions = search.mentions_for("Alex")

    assert [(m.context, m.file) for m in mentions] == [
        ("Morgan looked at Alex across the fire", "scene.md"),
        ("Alex entered the Forest", "forest.md"),
        ("Morgan and Alex left the Forest together", "forest.md"),
    ]
    dialogue = {line.dialogue for line in search.dialogue_for("Alex")}
    assert not any(d in m.context for m in mentions for d in dialogue)


def test_mentions_skip_images_and_blank_names(search):
    assert all(m.file != "map.png" for m in search.mentions_for("Alex"))
    assert search.mentions_for("  ") == []


def test_remove_dialogue_blanks_context():
    lines = MentionSearch([]).dialogue_extractor.extract(SCENE)

    remaining = remove_dialogue(SCENE, lines)

    assert "We should go" not in remaining
    assert "Morgan looked at Alex" in remaining


def test_location_mentions_list_present_characters(search):
    mentions = search.location_mentions_for("Forest")

    assert [(m.context, m.characters) for m in mentions] == [
        ("Alex entered the Forest", ["Alex"]),
        ("Morgan and Alex left the Forest together", ["Alex", "Morgan"]),
    ]


def test_characters_in_location(search):
    sightings = search.characters_in_location("Forest")

    assert [(s.character, s.file) for s in sightings] == [
        ("Alex", "forest.md"),
        ("Alex", "forest.md"),
        ("Morgan", "forest.md"),
    ]
    assert search.characters_in_location("Forest", ["Morgan"])[0].context == (
        "Morgan and Alex left the Forest together"
    )


def test_functional_characters_in_location():
    sightings = characters_in_location("Forest", [{"path": "f.md", "text": FOREST}], ["Morgan"])

    assert len(sightings) == 1


def test_stats_for(search):
    stats = search.stats_for("Alex")

    assert stats.name == "Alex"
    assert stats.mention_count == 3
    assert stats.dialogue_count == len(search.dialogue_for("Alex"))
    assert stats.dialogue_count >= 1


def test_files_must_be_a_collection():
    with pytest.raises(TypeError):
        MentionSearch("scene.md")


@pytest.mark.parametrize(
    "text",
    [
        '<p>"Hold on," said <em>Alex</em>.</p>',
        '"We should go,"\nAlex said. Nobody moved.',
        '"We should go,"  Alex   said.\n\nNobody moved.',
    ],
)
def test_attribution_split_by_markup_or_whitespace_is_not_a_mention(text):
    search = MentionSearch([Document(path="scene.md", text=text)])

    assert search.dialogue_for("Alex")
    assert search.mentions_for("Alex") == []


@pytest.mark.parametrize(
    "text",
    [
        '<p>"Stay close," said <em>Alex</em>. Morgan followed <b>Alex</b> into the dark.</p>\n'
        '<p>Alex whispered "Quiet."</p>',
        '"Stay close,"\nsaid Alex. Morgan followed Alex\ninto the dark. Alex whispered\n"Quiet."',
    ],
)
def test_mentions_never_overlap_dialogue_contexts(text):
    search = MentionSearch([Document(path="scene.md", text=text)])

    contexts = [line.context for line in search.dialogue_for("Alex")]
    mentions = [m.context for m in search.mentions_for("Alex")]

    assert contexts
    assert mentions == ["Morgan followed Alex into the dark"]
    for mention in mentions:
        assert not any(mention in ctx or ctx in mention for ctx in contexts)
