"""Extraction package exports."""

from storylens.extraction.character_extractor import CharacterExtractor, extract_characters
from storylens.extraction.cooccurrence_extractor import RelationshipAnalyzer, analyze_relationships
from storylens.extraction.dialogue_extractor import DialogueExtractor, extract_dialogue
from storylens.extraction.entity_merger import (
    EntityAggregator,
    auto_detect_entities,
    character_confidence,
    location_confidence,
    parse_files,
)
from storylens.extraction.location_extractor import LocationExtractor, extract_locations
from storylens.extraction.models import (
    CharacterCandidate,
    CharacterSighting,
    Confidence,
    DetectionResult,
    DialogueEntry,
    Document,
    EntityStats,
    LocationCandidate,
    Mention,
    ParseResult,
    Relationship,
    SuggestedEntity,
)

__all__ = [
    "CharacterCandidate",
    "CharacterExtractor",
    "CharacterSighting",
    "Confidence",
    "DetectionResult",
    "DialogueEntry",
    "DialogueExtractor",
    "Document",
    "EntityAggregator",
    "EntityStats",
    "LocationCandidate",
    "LocationExtractor",
    "Mention",
    "ParseResult",
    "Relationship",
    "RelationshipAnalyzer",
    "SuggestedEntity",
    "analyze_relationships",
    "auto_detect_entities",
    "character_confidence",
    "extract_characters",
    "extract_dialogue",
    "extract_locations",
    "location_confidence",
    "parse_files",
]
