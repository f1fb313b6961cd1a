"""Utility helpers (configuration, logging, text)."""
