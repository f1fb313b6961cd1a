"""Shared data models for extraction modules."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Document(BaseModel):
    """A story file handed to the extractors by the caller."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = ""
    text: str = ""
    is_image: bool = False

    @field_validator("text", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        # Partially loaded files arrive with no content.
        return "" if value is None else value

    @classmethod
    def coerce(cls, item: Any) -> "Document":
        """Accept a Document or a ``{path|name, text|content}`` mapping."""
        if isinstance(item, Document):
            return item
        if isinstance(item, Mapping):
            path = item.get("path")
            if path is None:
                path = item.get("name", "")
            text = item.get("text")
            if text is None:
                text = item.get("content")
            return cls(
                path=str(path or ""),
                text=text,
                is_image=bool(item.get("is_image") or item.get("isImage") or False),
            )
        raise TypeError(
            f"Expected a Document or a mapping with path/text keys, got {type(item).__name__}"
        )


def coerce_documents(files: Any) -> List[Document]:
    """Normalize a caller-supplied file collection.

    Raises:
        TypeError: If ``files`` is not an iterable collection of documents
    """
    if files is None:
        raise TypeError("files must be a sequence of documents, got None")
    if isinstance(files, (str, bytes, Mapping, Document)) or not isinstance(files, Iterable):
        raise TypeError(f"files must be a sequence of documents, got {type(files).__name__}")
    return [Document.coerce(item) for item in files]


class DialogueEntry(BaseModel):
    """A quoted utterance attributed to a speaker."""

    model_config = ConfigDict(extra="forbid")

    speaker: str
    dialogue: str
    context: str
    file: str = ""


class CharacterCandidate(BaseModel):
    """Candidate character name with supporting context sentences."""

    model_config = ConfigDict(extra="forbid")

    name: str
    count: int = Field(default=0, ge=0)
    context: List[str] = Field(default_factory=list)


class LocationCandidate(BaseModel):
    """Candidate location name with its mention frequency."""

    model_config = ConfigDict(extra="forbid")

    name: str
    count: int = Field(default=0, ge=0)


class Relationship(BaseModel):
    """Sentence-level co-occurrence of two characters."""

    model_config = ConfigDict(extra="forbid")

    char1: str
    char2: str
    strength: int = Field(default=0, ge=0)
    context: List[str] = Field(default_factory=list)

    @property
    def key(self) -> Tuple[str, str]:
        """Order-independent identity of the pair."""
        return tuple(sorted((self.char1, self.char2)))  # type: ignore[return-value]


class Confidence(str, Enum):
    """Coarse evidence tier for an auto-detected entity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return {"low": 1, "medium": 2, "high": 3}[self.value]


class SuggestedEntity(BaseModel):
    """Auto-detected entity not yet known to the caller."""

    model_config = ConfigDict(extra="forbid", use_enum_values=False)

    name: str
    count: int = Field(default=0, ge=0)
    confidence: Confidence = Confidence.LOW


class Mention(BaseModel):
    """Non-dialogue sentence referencing an entity."""

    model_config = ConfigDict(extra="forbid")

    context: str
    file: str = ""
    characters: Optional[List[str]] = None


class CharacterSighting(BaseModel):
    """A character named in the same sentence as a location."""

    model_config = ConfigDict(extra="forbid")

    character: str
    context: str
    file: str = ""


class EntityStats(BaseModel):
    """Dialogue and mention totals for one entity across a file set."""

    model_config = ConfigDict(extra="forbid")

    name: str
    dialogue_count: int = 0
    mention_count: int = 0


class ParseResult(BaseModel):
    """Full enrichment of a file set."""

    characters: List[CharacterCandidate] = Field(default_factory=list)
    locations: List[LocationCandidate] = Field(default_factory=list)
    relationships: List[Relationship] = Field(default_factory=list)
    dialogue: List[DialogueEntry] = Field(default_factory=list)


class DetectionResult(BaseModel):
    """Incremental "what's new" view of a file set."""

    characters: List[SuggestedEntity] = Field(default_factory=list)
    locations: List[SuggestedEntity] = Field(default_factory=list)
