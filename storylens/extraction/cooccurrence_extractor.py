"""Sentence-level character co-occurrence analysis."""

from collections.abc import Iterable
from itertools import combinations
from typing import Dict, List, Optional, Tuple

from loguru import logger

from storylens.extraction.models import Relationship
from storylens.utils.config import RelationshipConfig, get_config
from storylens.utils.text import contains_word, split_sentences, strip_html


def _unique_names(known_names: Iterable[str]) -> List[str]:
    if isinstance(known_names, (str, bytes)) or not isinstance(known_names, Iterable):
        raise TypeError(
            f"known_names must be a collection of names, got {type(known_names).__name__}"
        )
    names: List[str] = []
    seen = set()
    for name in known_names:
        cleaned = str(name).strip()
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            names.append(cleaned)
    return names


class RelationshipAnalyzer:
    """Suggests relationships between characters named in the same sentence."""

    def __init__(self, config: Optional[RelationshipConfig] = None) -> None:
        self.config = config or RelationshipConfig()
        logger.info(
            f"Initialized RelationshipAnalyzer (min_strength={self.config.min_strength})"
        )

    def analyze(self, text: str | None, known_names: Iterable[str]) -> List[Relationship]:
        """Count co-mentions per unordered pair; keep pairs seen in enough sentences."""
        names = _unique_names(known_names)
        if len(names) < 2:
            return []

        relationships: Dict[Tuple[str, str], Relationship] = {}

        for sentence in split_sentences(strip_html(text)):
            present = [name for name in names if contains_word(sentence, name)]
            if len(present) < 2:
                continue

            for first, second in combinations(present, 2):
                key = tuple(sorted((first, second)))
                relationship = relationships.get(key)
                if relationship is None:
                    relationship = relationships[key] = Relationship(char1=key[0], char2=key[1])
                relationship.strength += 1
                if len(relationship.context) < self.config.max_context:
                    relationship.context.append(sentence.strip())

        kept = [r for r in relationships.values() if r.strength >= self.config.min_strength]
        return sorted(kept, key=lambda r: r.strength, reverse=True)


_default_analyzer: RelationshipAnalyzer | None = None


def get_relationship_analyzer() -> RelationshipAnalyzer:
    """Shared analyzer for the active global configuration."""
    global _default_analyzer
    config = get_config().relationships
    if _default_analyzer is None or _default_analyzer.config is not config:
        _default_analyzer = RelationshipAnalyzer(config)
    return _default_analyzer


def analyze_relationships(text: str | None, known_names: Iterable[str]) -> List[Relationship]:
    """Suggest character relationships from sentence co-occurrence."""
    return get_relationship_analyzer().analyze(text, known_names)
