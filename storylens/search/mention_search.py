"""On-demand dialogue and mention lookup for a confirmed entity.

Mentions are found with a two-pass exclude-then-scan. First every dialogue
span of the document is blanked out. Then the remaining sentences are scanned
for the entity name. A sentence classified as an entity's dialogue therefore
never shows up among its mentions.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, List, Optional, Sequence

from loguru import logger

from storylens.extraction.dialogue_extractor import DialogueExtractor, get_dialogue_extractor
from storylens.extraction.models import (
    CharacterSighting,
    DialogueEntry,
    Document,
    EntityStats,
    Mention,
    coerce_documents,
)
from storylens.utils.text import QUOTE_CHARS, contains_word, split_sentences, strip_html

_QUOTE_CLASS = "[" + re.escape(QUOTE_CHARS) + "]"
_NOT_QUOTE_CLASS = "[^" + re.escape(QUOTE_CHARS) + "]"


def speaker_matches(speaker: str, name: str) -> bool:
    """Whether a dialogue speaker refers to the entity ``name``.

    Matches exact (case-insensitive) names, the name as a whole word inside the
    speaker, and either one being a prefix of the other followed by a space
    ("Alex" vs. "Alex Morgan").
    """
    speaker_lower = speaker.strip().lower()
    name_lower = name.strip().lower()
    if not speaker_lower or not name_lower:
        return False
    if speaker_lower == name_lower:
        return True
    if contains_word(speaker, name.strip()):
        return True
    return speaker_lower.startswith(name_lower + " ") or name_lower.startswith(speaker_lower + " ")


def remove_dialogue(text: str, dialogue: Sequence[DialogueEntry]) -> str:
    """Blank out every dialogue context and every quoted span holding known dialogue."""
    remaining = text
    for entry in dialogue:
        if entry.context:
            remaining = re.sub(re.escape(entry.context), " ", remaining, flags=re.IGNORECASE)
    for entry in dialogue:
        if entry.dialogue:
            quoted = (
                f"{_QUOTE_CLASS}{_NOT_QUOTE_CLASS}*"
                f"{re.escape(entry.dialogue)}{_NOT_QUOTE_CLASS}*{_QUOTE_CLASS}"
            )
            remaining = re.sub(quoted, " ", remaining, flags=re.IGNORECASE)
    return remaining


class MentionSearch:
    """Dialogue, mention and co-location lookups over a fixed file set."""

    def __init__(
        self,
        files: Iterable[Any],
        characters: Iterable[str] = (),
        *,
        dialogue_extractor: Optional[DialogueExtractor] = None,
    ) -> None:
        self.documents: List[Document] = coerce_documents(files)
        self.characters: List[str] = [c for c in characters if c and c.strip()]
        self.dialogue_extractor = dialogue_extractor or get_dialogue_extractor()

    def _searchable(self) -> List[Document]:
        # Image files and files without content carry no prose.
        return [doc for doc in self.documents if doc.text and not doc.is_image]

    def dialogue_for(self, name: str) -> List[DialogueEntry]:
        """All dialogue lines spoken by ``name`` across the file set."""
        matches: List[DialogueEntry] = []
        for document in self._searchable():
            dialogue = self.dialogue_extractor.extract(document.text, document.path)
            matches.extend(entry for entry in dialogue if speaker_matches(entry.speaker, name))
        return matches

    def mentions_for(self, name: str) -> List[Mention]:
        """Non-dialogue sentences that name ``name`` as a whole word."""
        if not name or not name.strip():
            return []

        mentions: List[Mention] = []
        for document in self._searchable():
            dialogue = self.dialogue_extractor.extract(document.text, document.path)
            # Contexts come from whitespace-collapsed text, so search the same form.
            clean_text = strip_html(document.text, collapse_whitespace=True)
            remaining = remove_dialogue(clean_text, dialogue)
            for sentence in split_sentences(remaining):
                trimmed = sentence.strip()
                if not trimmed or trimmed[0] in QUOTE_CHARS:
                    continue
                if contains_word(trimmed, name.strip()):
                    mentions.append(Mention(context=trimmed, file=document.path))
        logger.debug("Found {} mentions of {}", len(mentions), name)
        return mentions

    def location_mentions_for(self, location: str) -> List[Mention]:
        """Sentences naming ``location``, annotated with the known characters present."""
        if not location or not location.strip():
            return []

        mentions: List[Mention] = []
        for document in self._searchable():
            for sentence in split_sentences(strip_html(document.text, collapse_whitespace=True)):
                if not contains_word(sentence, location.strip()):
                    continue
                present = [c for c in self.characters if contains_word(sentence, c.strip())]
                mentions.append(
                    Mention(context=sentence.strip(), file=document.path, characters=present)
                )
        return mentions

    def characters_in_location(
        self, location: str, character_names: Optional[Iterable[str]] = None
    ) -> List[CharacterSighting]:
        """One sighting per (sentence, character) where both the location and character appear."""
        names = list(character_names) if character_names is not None else self.characters
        sightings: List[CharacterSighting] = []
        for mention in self.location_mentions_for(location):
            for name in names:
                if contains_word(mention.context, name.strip()):
                    sightings.append(
                        CharacterSighting(character=name, context=mention.context, file=mention.file)
                    )
        return sightings

    def stats_for(self, name: str) -> EntityStats:
        """Dialogue and mention totals used for entity overview counters."""
        return EntityStats(
            name=name,
            dialogue_count=len(self.dialogue_for(name)),
            mention_count=len(self.mentions_for(name)),
        )


def characters_in_location(
    location: str, files: Iterable[Any], character_names: Iterable[str]
) -> List[CharacterSighting]:
    """Characters named in the same sentence as ``location`` across ``files``."""
    return MentionSearch(files).characters_in_location(location, list(character_names))
