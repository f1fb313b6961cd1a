"""Heuristic character-name extractor.

Names are harvested from dialogue attribution ("said Alex", "Alex said",
"Alex, said") per sentence, and from ``"quote", Name`` spans over the whole
text. Optional recall passes pick up subjects of action verbs ("Alex walked")
and names introduced by markers ("met Alex"). Every candidate is checked
against skip words, pronouns and location vocabulary.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Dict, List, Optional, Tuple

from loguru import logger

from storylens.extraction.models import CharacterCandidate
from storylens.utils.config import CharacterConfig, get_config
from storylens.utils.text import alternation, has_lowercase_word, split_sentences, strip_html

NAME = r"[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?"

_QUOTE_THEN_NAME_RE = re.compile(
    rf"[\"'`“”‘’](?P<quote>[^\"'`“”‘’]+)[\"'`“”‘’]\s*,\s*(?P<name>{NAME})"
)
# A quote closed before the comma, followed by "Name verb".
_QUOTE_BEFORE_ATTRIBUTION_RE = re.compile(
    r"([\"'`“”‘’][^\"'`“”‘’]+[\"'`“”‘’])\s*,\s*[A-Z][a-z]+\s+\w+"
)


class CharacterExtractor:
    """Extract candidate character names from a single document."""

    def __init__(self, config: Optional[CharacterConfig] = None) -> None:
        self.config = config or CharacterConfig()
        self.skip_words = set(self.config.skip_words)
        self.pronouns = {p.lower() for p in self.config.pronouns}
        self.location_words = set(self.config.location_words)
        self.location_keywords = set(self.config.location_keywords)

        self.attribution_patterns = self._compile_attribution_patterns(self.config.verbs)
        self.action_patterns = self._compile_action_patterns(self.config.action_verbs)
        self.marker_patterns = [
            re.compile(rf"\b(?i:{re.escape(marker)})\s+({NAME})")
            for marker in self.config.name_markers
        ]
        self._bare_fragment_re = re.compile(
            rf"^[\"']?\s*[A-Z][a-z]+\s+{alternation(self.config.verbs)}\s*[\"']?$",
            re.IGNORECASE,
        )

        logger.info(
            f"Initialized CharacterExtractor ({len(self.config.verbs)} attribution verbs, "
            f"{len(self.config.action_verbs)} action verbs)"
        )

    @staticmethod
    def _compile_attribution_patterns(verbs: List[str]) -> List[Tuple[str, List[re.Pattern[str]]]]:
        table = []
        for verb in verbs:
            word = rf"(?i:{re.escape(verb)})"
            table.append(
                (
                    verb,
                    [
                        re.compile(rf"\b{word}\s+({NAME})"),
                        re.compile(rf"\b({NAME})\s+{word}\b"),
                        re.compile(rf"\b({NAME})\s*,\s*{word}\b"),
                    ],
                )
            )
        return table

    @staticmethod
    def _compile_action_patterns(verbs: List[str]) -> List[Tuple[str, List[re.Pattern[str]]]]:
        table = []
        for verb in verbs:
            word = rf"(?i:{re.escape(verb)})"
            table.append(
                (
                    verb,
                    [
                        re.compile(rf"\b({NAME})\s+{word}\b"),
                        re.compile(rf"\b({NAME})\s*,\s*{word}\b"),
                    ],
                )
            )
        return table

    def is_valid_name(self, name: str) -> bool:
        """Proper noun, sane length, not a skip word, pronoun or lowercase phrase."""
        if not name or not name[0].isupper():
            return False
        if not self.config.min_name_length <= len(name) <= self.config.max_name_length:
            return False
        if name in self.skip_words:
            return False
        if name.lower() in self.pronouns:
            return False
        return not has_lowercase_word(name)

    def looks_like_location(self, name: str) -> bool:
        """Single location word, or a compound carrying a location keyword."""
        if name in self.location_words:
            return True
        return any(word in self.location_keywords for word in name.split())

    def extract(self, text: str | None) -> List[CharacterCandidate]:
        """Return candidates sorted by count, most frequent first."""
        clean_text = strip_html(text)
        sentences = split_sentences(clean_text)
        candidates: Dict[str, CharacterCandidate] = {}

        for sentence in sentences:
            for _verb, patterns in self.attribution_patterns:
                for regex in patterns:
                    for match in regex.finditer(sentence):
                        name = match.group(1).strip()
                        if self.is_valid_name(name):
                            self._record_attribution(candidates, name, sentence)

        for match in _QUOTE_THEN_NAME_RE.finditer(clean_text):
            name = match.group("name").strip()
            if not self.is_valid_name(name):
                continue
            candidate = self._bump(candidates, name)
            quote_context = match.group(0).strip()
            if (
                len(candidate.context) < self.config.max_context
                and len(quote_context) >= self.config.min_quote_context_length
            ):
                candidate.context.append(quote_context)

        if self.config.enable_action_verbs:
            for sentence in sentences:
                for _verb, patterns in self.action_patterns:
                    for regex in patterns:
                        for match in regex.finditer(sentence):
                            name = match.group(1).strip()
                            if not self.is_valid_name(name):
                                continue
                            candidate = self._bump(candidates, name)
                            trimmed = sentence.strip()
                            if (
                                len(candidate.context) < self.config.max_context
                                and len(trimmed) >= self.config.min_context_length
                            ):
                                candidate.context.append(trimmed)

        if self.config.enable_name_markers:
            marker_counts: Counter[str] = Counter()
            for sentence in sentences:
                for regex in self.marker_patterns:
                    for match in regex.finditer(sentence):
                        name = match.group(1).strip()
                        if self.is_valid_name(name):
                            marker_counts[name] += 1
            for name, count in marker_counts.items():
                if count >= self.config.min_marker_mentions and name not in candidates:
                    candidates[name] = CharacterCandidate(name=name, count=count)

        filtered = [
            candidate
            for candidate in candidates.values()
            if self.is_valid_name(candidate.name) and not self.looks_like_location(candidate.name)
        ]
        return sorted(filtered, key=lambda c: c.count, reverse=True)

    @staticmethod
    def _bump(candidates: Dict[str, CharacterCandidate], name: str) -> CharacterCandidate:
        candidate = candidates.get(name)
        if candidate is None:
            candidate = candidates[name] = CharacterCandidate(name=name)
        candidate.count += 1
        return candidate

    def _record_attribution(
        self, candidates: Dict[str, CharacterCandidate], name: str, sentence: str
    ) -> None:
        candidate = self._bump(candidates, name)
        trimmed = sentence.strip()
        if len(candidate.context) >= self.config.max_context:
            return
        if len(trimmed) < self.config.min_context_length or self._bare_fragment_re.match(trimmed):
            return

        before = _QUOTE_BEFORE_ATTRIBUTION_RE.search(sentence)
        if before is None:
            candidate.context.append(trimmed)
            return

        # Widen the window to include the quote leading up to the attribution.
        window = sentence[max(0, before.start() - 50):].strip()
        if len(window) >= self.config.min_quote_context_length:
            candidate.context.append(window)


_default_extractor: CharacterExtractor | None = None


def get_character_extractor() -> CharacterExtractor:
    """Shared extractor for the active global configuration."""
    global _default_extractor
    config = get_config().characters
    if _default_extractor is None or _default_extractor.config is not config:
        _default_extractor = CharacterExtractor(config)
    return _default_extractor


def extract_characters(text: str | None) -> List[CharacterCandidate]:
    """Extract candidate character names from ``text`` using the shared extractor."""
    return get_character_extractor().extract(text)
