"""Shared text helpers for the heuristic extractors.

All extractors see the same cleaned text: HTML tags become spaces and sentences
are split on runs of terminal punctuation. Keep this logic centralized so the
dialogue, name and mention passes agree on sentence boundaries.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, List

_HTML_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_LOWERCASE_WORD_RE = re.compile(r"\b[a-z]+\b")

# Straight and curly quote characters that may open a quoted span.
QUOTE_CHARS = "\"'“”‘’`"


def strip_html(text: str | None, *, collapse_whitespace: bool = False) -> str:
    """Replace HTML tags with spaces; optionally collapse whitespace runs.

    ``None`` is treated as an empty document.
    """
    if not text:
        return ""
    cleaned = _HTML_TAG_RE.sub(" ", text)
    if collapse_whitespace:
        cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    return cleaned


def split_sentences(text: str) -> List[str]:
    """Split on ``[.!?]+`` and drop blank fragments.

    Fragments are returned untrimmed; callers trim when they record context.
    """
    if not text:
        return []
    return [sentence for sentence in _SENTENCE_SPLIT_RE.split(text) if sentence.strip()]


def has_lowercase_word(name: str) -> bool:
    """True when any standalone word is all lowercase ("their expression")."""
    return bool(_LOWERCASE_WORD_RE.search(name))


@lru_cache(maxsize=1024)
def whole_word_pattern(name: str, *, ignore_case: bool = True) -> re.Pattern[str]:
    """Compile a ``\\bname\\b`` matcher for an arbitrary entity name."""
    flags = re.IGNORECASE if ignore_case else 0
    return re.compile(rf"\b{re.escape(name)}\b", flags)


def contains_word(text: str, name: str) -> bool:
    """Case-insensitive whole-word containment test."""
    if not text or not name:
        return False
    return whole_word_pattern(name).search(text) is not None


def alternation(words: Iterable[str]) -> str:
    """Build a non-capturing, escaped alternation; longest words first."""
    unique = sorted({w for w in words if w}, key=lambda w: (-len(w), w))
    return "(?:" + "|".join(re.escape(w) for w in unique) + ")"
