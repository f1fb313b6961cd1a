"""Ingestion package exports."""

from storylens.ingestion.text_file_loader import TextFileLoader

__all__ = ["TextFileLoader"]
