"""Heuristic story text analysis: dialogue, characters, locations and relationships."""

__version__ = "0.1.0"
