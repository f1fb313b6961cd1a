"""Merge per-file extraction results across a story's file set.

Two views share the same per-file extraction core:

- :meth:`EntityAggregator.parse_files` builds the full enrichment (characters,
  locations, relationships, dialogue) used for a complete story snapshot.
- :meth:`EntityAggregator.auto_detect_entities` returns only entities the caller
  does not know yet, each with a confidence tier.

Merging rules:
- Characters merge by exact name; counts are summed and context lists are
  concatenated (not de-duplicated).
- Locations merge by exact name; counts are summed.
- Relationships are computed once over all texts joined by blank lines, using
  the merged character names.

Confidence tiers are pure functions of the merged evidence:
- character: high if ``count >= 5`` or ``contexts >= 3``; medium if
  ``count >= 2`` or ``contexts >= 1``; otherwise low.
- location: high if ``count >= 5``; medium if ``count >= 3``; otherwise low.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional, Set

from loguru import logger

from storylens.extraction.character_extractor import CharacterExtractor, get_character_extractor
from storylens.extraction.cooccurrence_extractor import (
    RelationshipAnalyzer,
    get_relationship_analyzer,
)
from storylens.extraction.dialogue_extractor import DialogueExtractor, get_dialogue_extractor
from storylens.extraction.location_extractor import LocationExtractor, get_location_extractor
from storylens.extraction.models import (
    CharacterCandidate,
    Confidence,
    DetectionResult,
    DialogueEntry,
    Document,
    LocationCandidate,
    ParseResult,
    SuggestedEntity,
    coerce_documents,
)
from storylens.utils.config import Config, ConfidenceConfig, get_config


def character_confidence(
    count: int, context_length: int, config: ConfidenceConfig | None = None
) -> Confidence:
    """Confidence tier for a character from its mention count and context size."""
    config = config or ConfidenceConfig()
    if count >= config.character_high_count or context_length >= config.character_high_context:
        return Confidence.HIGH
    if (
        count >= config.character_medium_count
        or context_length >= config.character_medium_context
    ):
        return Confidence.MEDIUM
    return Confidence.LOW


def location_confidence(count: int, config: ConfidenceConfig | None = None) -> Confidence:
    """Confidence tier for a location from its mention count."""
    config = config or ConfidenceConfig()
    if count >= config.location_high_count:
        return Confidence.HIGH
    if count >= config.location_medium_count:
        return Confidence.MEDIUM
    return Confidence.LOW


def _exclusion_set(names: Any, argument: str) -> Set[str]:
    """Lower-cased, trimmed names; anything but a collection of names is misuse."""
    if isinstance(names, (str, bytes, Mapping)) or not isinstance(names, Iterable):
        raise TypeError(f"{argument} must be a collection of names, got {type(names).__name__}")
    return {str(name).strip().lower() for name in names}


class _CharacterAccumulator:
    """Internal accumulator used during merging."""

    def __init__(self) -> None:
        self._merged: Dict[str, CharacterCandidate] = {}

    def add(self, candidates: List[CharacterCandidate]) -> None:
        for candidate in candidates:
            existing = self._merged.get(candidate.name)
            if existing is None:
                self._merged[candidate.name] = candidate.model_copy(deep=True)
                continue
            existing.count += candidate.count
            existing.context.extend(candidate.context)

    def names(self) -> List[str]:
        return list(self._merged.keys())

    def to_candidates(self) -> List[CharacterCandidate]:
        return list(self._merged.values())


class _LocationAccumulator:
    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}

    def add(self, candidates: List[LocationCandidate]) -> None:
        for candidate in candidates:
            self._counts[candidate.name] = self._counts.get(candidate.name, 0) + candidate.count

    def to_candidates(self) -> List[LocationCandidate]:
        merged = [LocationCandidate(name=name, count=count) for name, count in self._counts.items()]
        return sorted(merged, key=lambda loc: loc.count, reverse=True)


class EntityAggregator:
    """Runs the extractors over every file and folds the results together."""

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        dialogue_extractor: Optional[DialogueExtractor] = None,
        character_extractor: Optional[CharacterExtractor] = None,
        location_extractor: Optional[LocationExtractor] = None,
        relationship_analyzer: Optional[RelationshipAnalyzer] = None,
    ) -> None:
        shared = config is None
        self.config = config or get_config()
        self.dialogue_extractor = dialogue_extractor or (
            get_dialogue_extractor() if shared else DialogueExtractor(self.config.dialogue)
        )
        self.character_extractor = character_extractor or (
            get_character_extractor() if shared else CharacterExtractor(self.config.characters)
        )
        self.location_extractor = location_extractor or (
            get_location_extractor() if shared else LocationExtractor(self.config.locations)
        )
        self.relationship_analyzer = relationship_analyzer or (
            get_relationship_analyzer()
            if shared
            else RelationshipAnalyzer(self.config.relationships)
        )

    def _merge_names(
        self, documents: List[Document]
    ) -> tuple[_CharacterAccumulator, _LocationAccumulator]:
        characters = _CharacterAccumulator()
        locations = _LocationAccumulator()
        for document in documents:
            characters.add(self.character_extractor.extract(document.text))
            locations.add(self.location_extractor.extract(document.text))
        return characters, locations

    def parse_files(self, files: Iterable[Any]) -> ParseResult:
        """Full enrichment of a file set.

        Args:
            files: Documents, or mappings with ``path``/``name`` and ``text``/``content``

        Returns:
            Merged characters, locations, dialogue and relationships

        Raises:
            TypeError: If ``files`` is not a collection of documents
        """
        documents = coerce_documents(files)

        characters = _CharacterAccumulator()
        locations = _LocationAccumulator()
        dialogue: List[DialogueEntry] = []

        for document in documents:
            characters.add(self.character_extractor.extract(document.text))
            locations.add(self.location_extractor.extract(document.text))
            dialogue.extend(self.dialogue_extractor.extract(document.text, document.path))

        all_text = "\n\n".join(document.text for document in documents)
        relationships = self.relationship_analyzer.analyze(all_text, characters.names())

        result = ParseResult(
            characters=characters.to_candidates(),
            locations=locations.to_candidates(),
            relationships=relationships,
            dialogue=dialogue,
        )
        logger.info(
            "Parsed {} files: {} characters, {} locations, {} relationships, {} dialogue lines",
            len(documents),
            len(result.characters),
            len(result.locations),
            len(result.relationships),
            len(result.dialogue),
        )
        return result

    def auto_detect_entities(
        self,
        files: Iterable[Any],
        existing_characters: Iterable[str] = (),
        existing_locations: Iterable[str] = (),
    ) -> DetectionResult:
        """Suggest characters and locations the caller does not already track.

        Exclusion is an exact match on lower-cased, trimmed names.

        Raises:
            TypeError: If ``files`` or either exclusion collection is not iterable
        """
        known_characters = _exclusion_set(existing_characters, "existing_characters")
        known_locations = _exclusion_set(existing_locations, "existing_locations")
        documents = coerce_documents(files)

        characters, locations = self._merge_names(documents)

        suggested_characters = [
            SuggestedEntity(
                name=candidate.name,
                count=candidate.count,
                confidence=character_confidence(
                    candidate.count, len(candidate.context), self.config.confidence
                ),
            )
            for candidate in characters.to_candidates()
            if candidate.name.strip().lower() not in known_characters
        ]
        suggested_locations = [
            SuggestedEntity(
                name=candidate.name,
                count=candidate.count,
                confidence=location_confidence(candidate.count, self.config.confidence),
            )
            for candidate in locations.to_candidates()
            if candidate.name.strip().lower() not in known_locations
        ]

        result = DetectionResult(
            characters=_rank(suggested_characters),
            locations=_rank(suggested_locations),
        )
        logger.info(
            "Auto-detected {} new characters and {} new locations across {} files",
            len(result.characters),
            len(result.locations),
            len(documents),
        )
        return result


def _rank(entities: List[SuggestedEntity]) -> List[SuggestedEntity]:
    return sorted(entities, key=lambda e: (e.confidence.rank, e.count), reverse=True)


def parse_files(files: Iterable[Any]) -> ParseResult:
    """Full enrichment of a file set with the global configuration."""
    return EntityAggregator().parse_files(files)


def auto_detect_entities(
    files: Iterable[Any],
    existing_characters: Iterable[str] = (),
    existing_locations: Iterable[str] = (),
) -> DetectionResult:
    """Suggest new characters/locations with the global configuration."""
    return EntityAggregator().auto_detect_entities(files, existing_characters, existing_locations)
