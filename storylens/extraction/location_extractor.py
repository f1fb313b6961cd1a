"""Heuristic location-name extractor.

Capture patterns are deliberately permissive so compound fictional place names
("Shadowmere Forest") are caught; frequency and location-keyword corroboration
in :meth:`LocationExtractor.filter_candidates` suppress ordinary capitalized
nouns and character names.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List, NamedTuple, Optional, Set, Tuple

from loguru import logger

from storylens.extraction.models import LocationCandidate
from storylens.utils.config import LocationConfig, get_config
from storylens.utils.text import split_sentences, strip_html

CAP_WORDS = r"[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*"
MULTI_CAP_WORDS = r"[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+"
SINGLE_CAP_WORD = r"[A-Z][a-z]{3,}\b"

_THE = r"(?i:the)"
_LEADING_ARTICLE_RE = re.compile(r"^(?:the|a|an)\s+", re.IGNORECASE)


class LocationPattern(NamedTuple):
    """A compiled capture pattern and the gate a capture must pass to be counted."""

    family: str
    trigger: str
    regex: re.Pattern[str]
    accept: Callable[[str], bool]


class LocationExtractor:
    """Extract candidate location names from a single document."""

    def __init__(self, config: Optional[LocationConfig] = None) -> None:
        self.config = config or LocationConfig()
        self.skip_words = set(self.config.skip_words)
        self.keywords = set(self.config.keywords)
        self.patterns = self._build_patterns()

        logger.info(f"Initialized LocationExtractor with {len(self.patterns)} patterns")

    def _word(self, word: str) -> str:
        return rf"\b(?i:{re.escape(word)})"

    def _build_patterns(self) -> List[LocationPattern]:
        patterns: List[LocationPattern] = []

        for prep in self.config.prepositions:
            word = self._word(prep)
            patterns.extend(
                [
                    LocationPattern(
                        "preposition_the",
                        prep,
                        re.compile(rf"{word}\s+{_THE}\s+({CAP_WORDS})"),
                        self._accept_after_article,
                    ),
                    LocationPattern(
                        "preposition_multi",
                        prep,
                        re.compile(rf"{word}\s+({MULTI_CAP_WORDS})"),
                        self._accept_multiword,
                    ),
                    LocationPattern(
                        "preposition_single",
                        prep,
                        re.compile(rf"{word}\s+({SINGLE_CAP_WORD})"),
                        self._accept_keyword,
                    ),
                ]
            )

        for verb in self.config.movement_verbs:
            word = self._word(verb)
            for connector in (r"\s+(?i:to)\s+", r"\s+(?i:at)\s+", r"\s+"):
                patterns.append(
                    LocationPattern(
                        "movement",
                        verb,
                        re.compile(rf"{word}{connector}(?:{_THE}\s+)?({CAP_WORDS})"),
                        self._accept_plain,
                    )
                )

        for verb in self.config.action_verbs:
            patterns.append(
                LocationPattern(
                    "location_action",
                    verb,
                    re.compile(rf"{self._word(verb)}\s+(?:{_THE}\s+)?({CAP_WORDS})"),
                    self._accept_plain,
                )
            )

        return patterns

    def _within_bounds(self, name: str) -> bool:
        return 3 <= len(name) < self.config.max_name_length and name not in self.skip_words

    def _accept_plain(self, name: str) -> bool:
        return self._within_bounds(name)

    def _accept_after_article(self, name: str) -> bool:
        if not self._within_bounds(name):
            return False
        words = name.split()
        return any(w in self.keywords for w in words) or len(words) > 1 or len(name) >= 6

    def _accept_multiword(self, name: str) -> bool:
        return self._within_bounds(name) and (len(name.split()) > 1 or name in self.keywords)

    def _accept_keyword(self, name: str) -> bool:
        return name in self.keywords and name not in self.skip_words

    def count_mentions(self, text: str | None) -> Dict[str, int]:
        """Raw capture frequencies before any post-filtering."""
        frequencies: Dict[str, int] = {}
        for sentence in split_sentences(strip_html(text)):
            # Several families can capture the same span; it is one mention.
            seen: Set[Tuple[int, str]] = set()
            for pattern in self.patterns:
                for match in pattern.regex.finditer(sentence):
                    name = match.group(1).strip()
                    span = (match.start(1), name)
                    if span in seen:
                        continue
                    if pattern.accept(name):
                        seen.add(span)
                        frequencies[name] = frequencies.get(name, 0) + 1
        return frequencies

    def keep(self, name: str, count: int) -> bool:
        """Frequency and keyword corroboration for a captured name."""
        if count < self.config.min_mentions:
            return False

        words = name.split()
        if any(w in self.skip_words for w in words):
            return False

        has_keyword = any(w in self.keywords for w in words)
        if len(words) == 1 and len(name) < self.config.min_single_word_length and not has_keyword:
            return False

        if _LEADING_ARTICLE_RE.match(name):
            return False

        if len(words) > 1 and not has_keyword and count < self.config.min_multiword_mentions:
            return False

        # Unsupported single proper nouns are usually characters.
        if len(words) == 1 and not has_keyword and count < self.config.min_multiword_mentions:
            return False

        return True

    def filter_candidates(self, frequencies: Dict[str, int]) -> List[LocationCandidate]:
        kept = [
            LocationCandidate(name=name, count=count)
            for name, count in frequencies.items()
            if self.keep(name, count)
        ]
        return sorted(kept, key=lambda loc: loc.count, reverse=True)

    def extract(self, text: str | None) -> List[LocationCandidate]:
        """Return filtered candidates sorted by count, most frequent first."""
        return self.filter_candidates(self.count_mentions(text))


_default_extractor: LocationExtractor | None = None


def get_location_extractor() -> LocationExtractor:
    """Shared extractor for the active global configuration."""
    global _default_extractor
    config = get_config().locations
    if _default_extractor is None or _default_extractor.config is not config:
        _default_extractor = LocationExtractor(config)
    return _default_extractor


def extract_locations(text: str | None) -> List[LocationCandidate]:
    """Extract candidate location names from ``text`` using the shared extractor."""
    return get_location_extractor().extract(text)
