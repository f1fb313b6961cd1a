"""Regex-based dialogue extractor with speaker attribution.

Seven sentence shapes are recognized for every attribution verb:

- P1 ``"quote," Speaker said``
- P2 ``Speaker said, "quote"``
- P3 ``"quote," said Speaker``
- P4 ``Speaker said: "quote"``
- P5 ``"quote." Speaker said``
- P6 ``Speaker said "quote"``
- P7 ``"quote" Speaker said``

Every (shape, verb) pair is an independent, exhaustive scan. The union of all
matches is returned, so a line matched by two shapes is reported twice.
"""

from __future__ import annotations

import re
from typing import List, NamedTuple, Optional

from loguru import logger

from storylens.extraction.models import DialogueEntry
from storylens.utils.config import DialogueConfig, get_config
from storylens.utils.text import strip_html

SPEAKER = r"\b(?P<speaker>[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)"

# Double quotes: straight or curly, body may hold apostrophes freely.
_DQ = r'["“](?P<dq>[^"“”]+?){tail}'
_DQ_CLOSE = r'["”]'
# Single quotes: may not open or close inside a word, so "It's" and "can't"
# never terminate the span.
_SQ = r"(?<![A-Za-z])['‘](?P<sq>(?:[^'‘’\"“”]|(?<=[A-Za-z])['’](?=[A-Za-z]))+?){tail}"
_SQ_CLOSE = r"['’](?![A-Za-z])"

_COMMA_TAIL = r"(?:,{close}|{close}\s*,)"
_PERIOD_TAIL = r"(?:\.{close}|{close}\.)"
_BARE_TAIL = r"{close}"

# (shape id, regex template, tail applied to the quote)
_SHAPES = (
    ("P1", r"{quote}\s*{speaker}\s+{verb}\b", _COMMA_TAIL),
    ("P2", r"{speaker}\s+{verb}\s*,\s*{quote}", _BARE_TAIL),
    ("P3", r"{quote}\s*{verb}\s+{speaker}", _COMMA_TAIL),
    ("P4", r"{speaker}\s+{verb}\s*:\s*{quote}", _BARE_TAIL),
    ("P5", r"{quote}\s+{speaker}\s+{verb}\b", _PERIOD_TAIL),
    ("P6", r"{speaker}\s+{verb}\s+{quote}", _BARE_TAIL),
    ("P7", r"{quote}\s+{speaker}\s+{verb}\b", _BARE_TAIL),
)


def _quote(tail: str) -> str:
    dq = _DQ.format(tail=tail.format(close=_DQ_CLOSE))
    sq = _SQ.format(tail=tail.format(close=_SQ_CLOSE))
    return f"(?:{dq}|{sq})"


class DialoguePattern(NamedTuple):
    """One compiled (shape, verb) scanner."""

    shape: str
    verb: str
    regex: re.Pattern[str]


def build_dialogue_patterns(verbs: List[str]) -> List[DialoguePattern]:
    """Compile the shape x verb table, shape-major."""
    patterns: List[DialoguePattern] = []
    for shape, template, tail in _SHAPES:
        quote = _quote(tail)
        for verb in verbs:
            source = template.format(
                quote=quote,
                speaker=SPEAKER,
                verb=rf"\b(?i:{re.escape(verb)})",
            )
            patterns.append(DialoguePattern(shape, verb, re.compile(source)))
    return patterns


class DialogueExtractor:
    """Extracts attributed dialogue from prose using a static pattern table."""

    def __init__(self, config: Optional[DialogueConfig] = None) -> None:
        self.config = config or DialogueConfig()
        self.patterns = build_dialogue_patterns(self.config.verbs)
        logger.info(
            f"Initialized DialogueExtractor with {len(self.patterns)} patterns "
            f"({len(self.config.verbs)} verbs)"
        )

    def extract(self, text: str | None, file_label: str = "") -> List[DialogueEntry]:
        """Return every dialogue span found by any shape, in table order."""
        clean_text = strip_html(text, collapse_whitespace=True)
        if not clean_text.strip():
            return []

        entries: List[DialogueEntry] = []
        for pattern in self.patterns:
            for match in pattern.regex.finditer(clean_text):
                quoted = match.group("dq")
                if quoted is None:
                    quoted = match.group("sq")
                entries.append(
                    DialogueEntry(
                        speaker=match.group("speaker").strip(),
                        dialogue=(quoted or "").strip(),
                        context=match.group(0),
                        file=file_label,
                    )
                )

        if not entries:
            logger.debug(
                "No dialogue found in {}. Sample text: {}", file_label or "<text>", clean_text[:200]
            )
        return entries


_default_extractor: DialogueExtractor | None = None


def get_dialogue_extractor() -> DialogueExtractor:
    """Shared extractor for the active global configuration."""
    global _default_extractor
    config = get_config().dialogue
    if _default_extractor is None or _default_extractor.config is not config:
        _default_extractor = DialogueExtractor(config)
    return _default_extractor


def extract_dialogue(text: str | None, file_label: str = "") -> List[DialogueEntry]:
    """Extract attributed dialogue from ``text`` using the shared extractor."""
    return get_dialogue_extractor().extract(text, file_label)
