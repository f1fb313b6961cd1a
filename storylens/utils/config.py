"""Configuration management using Pydantic for validation."""

from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from storylens import lexicon


class DialogueConfig(BaseSettings):
    """Dialogue extraction configuration."""

    verbs: List[str] = list(lexicon.DIALOGUE_VERBS)

    @field_validator("verbs")
    @classmethod
    def validate_verbs(cls, v: List[str]) -> List[str]:
        """Reject an empty verb table; nothing could ever match."""
        cleaned = [verb.strip() for verb in v if verb and verb.strip()]
        if not cleaned:
            raise ValueError("At least one dialogue verb is required")
        return cleaned


class CharacterConfig(BaseSettings):
    """Character name extraction configuration."""

    verbs: List[str] = list(lexicon.DIALOGUE_VERBS)
    action_verbs: List[str] = list(lexicon.ACTION_VERBS)
    name_markers: List[str] = list(lexicon.NAME_MARKERS)
    skip_words: List[str] = list(lexicon.CHARACTER_SKIP_WORDS)
    pronouns: List[str] = list(lexicon.PRONOUNS)
    location_words: List[str] = list(lexicon.LOCATION_WORDS)
    location_keywords: List[str] = list(lexicon.CHARACTER_LOCATION_KEYWORDS)
    min_name_length: int = Field(default=2, ge=1)
    max_name_length: int = Field(default=30, ge=1)
    max_context: int = Field(default=5, ge=0)
    min_context_length: int = Field(default=15, ge=0)
    min_quote_context_length: int = Field(default=20, ge=0)
    enable_action_verbs: bool = True
    enable_name_markers: bool = True
    min_marker_mentions: int = Field(default=2, ge=1)

    @model_validator(mode="after")
    def validate_name_bounds(self) -> "CharacterConfig":
        if self.min_name_length > self.max_name_length:
            raise ValueError("min_name_length must not exceed max_name_length")
        return self


class LocationConfig(BaseSettings):
    """Location name extraction configuration."""

    prepositions: List[str] = list(lexicon.LOCATION_PREPOSITIONS)
    movement_verbs: List[str] = list(lexicon.MOVEMENT_VERBS)
    action_verbs: List[str] = list(lexicon.LOCATION_ACTION_VERBS)
    skip_words: List[str] = list(lexicon.LOCATION_SKIP_WORDS)
    keywords: List[str] = list(lexicon.LOCATION_KEYWORDS)
    min_mentions: int = Field(default=2, ge=1)
    min_multiword_mentions: int = Field(default=3, ge=1)
    min_single_word_length: int = Field(default=5, ge=1)
    max_name_length: int = Field(default=50, ge=1)


class RelationshipConfig(BaseSettings):
    """Character co-occurrence configuration."""

    min_strength: int = Field(default=2, ge=1)
    max_context: int = Field(default=5, ge=0)


class ConfidenceConfig(BaseSettings):
    """Thresholds for the low/medium/high confidence tiers."""

    character_high_count: int = Field(default=5, ge=1)
    character_high_context: int = Field(default=3, ge=1)
    character_medium_count: int = Field(default=2, ge=1)
    character_medium_context: int = Field(default=1, ge=1)
    location_high_count: int = Field(default=5, ge=1)
    location_medium_count: int = Field(default=3, ge=1)


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    max_size_mb: int = 10
    backup_count: int = 3


class Config(BaseSettings):
    """Main configuration class."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STORYLENS_",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )

    dialogue: DialogueConfig = Field(default_factory=DialogueConfig)
    characters: CharacterConfig = Field(default_factory=CharacterConfig)
    locations: LocationConfig = Field(default_factory=LocationConfig)
    relationships: RelationshipConfig = Field(default_factory=RelationshipConfig)
    confidence: ConfidenceConfig = Field(default_factory=ConfidenceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Default suffixes picked up by the text file loader
    story_suffixes: List[str] = Field(default=[".md", ".markdown", ".txt", ".html"])

    @staticmethod
    def _deep_merge_dict(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """Deep-merge two dicts (overrides win).

        This is used to apply environment-derived overrides on top of YAML defaults.
        """
        merged: Dict[str, Any] = dict(base)
        for key, value in overrides.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge_dict(merged[key], value)
            else:
                merged[key] = value
        return merged

    @classmethod
    def from_yaml(cls, yaml_path: str | Path = "config/config.yaml") -> "Config":
        """Load configuration from YAML file and environment variables.

        Precedence (highest to lowest):
        1) Environment variables / .env
        2) YAML file
        3) Model defaults

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance with loaded settings

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML file is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        if not isinstance(yaml_config, dict):
            raise ValueError(f"YAML config root must be a mapping/dict: {yaml_path}")

        # Only non-default env values are layered on top of the YAML file.
        env_overrides = cls().model_dump(exclude_defaults=True)
        merged = cls._deep_merge_dict(yaml_config, env_overrides)

        return cls(**merged)


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Falls back to model defaults when nothing has been loaded, so the
    extractors stay usable as a plain library.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_config(yaml_path: str | Path = "config/config.yaml") -> Config:
    """Load configuration from YAML and install it as the global instance.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        Loaded Config instance
    """
    global _config
    _config = Config.from_yaml(yaml_path)
    return _config


def reset_config() -> None:
    """Reset global configuration (mainly for testing)."""
    global _config
    _config = None
