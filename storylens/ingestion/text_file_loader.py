"""Load story files from a local folder into :class:`Document` objects.

This is the local-filesystem counterpart of fetching a repository's markdown
files: `.md`/`.markdown`/`.txt` are read as-is and `.html` fragments are kept
verbatim (the extractors strip tags themselves).
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from loguru import logger

from storylens.extraction.models import Document

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg"}


class TextFileLoader:
    """Read text-based story files into Documents labelled by relative path."""

    DEFAULT_SUFFIXES = (".md", ".markdown", ".txt", ".html")

    def __init__(self, suffixes: Iterable[str] | None = None) -> None:
        self.suffixes = {s.lower() for s in (suffixes or self.DEFAULT_SUFFIXES)}

    def load_file(self, path: Path | str, *, root: Path | str | None = None) -> Document:
        file_path = Path(path)
        suffix = file_path.suffix.lower()

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if suffix in IMAGE_SUFFIXES:
            return Document(path=self._label(file_path, root), text="", is_image=True)

        if suffix not in self.suffixes:
            raise ValueError(f"Unsupported story file type: {suffix}")

        try:
            raw_text = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            raw_text = file_path.read_text(encoding="utf-8", errors="replace")

        return Document(path=self._label(file_path, root), text=raw_text)

    def load_directory(self, directory: Path | str, *, recursive: bool = True) -> List[Document]:
        """Load every supported file under ``directory``, sorted by path."""
        root = Path(directory)
        if not root.is_dir():
            raise FileNotFoundError(f"Story directory not found: {root}")

        candidates = root.rglob("*") if recursive else root.glob("*")
        # Images are kept as text-less documents.
        wanted = self.suffixes | IMAGE_SUFFIXES
        documents = [
            self.load_file(path, root=root)
            for path in sorted(candidates)
            if path.is_file() and path.suffix.lower() in wanted
        ]

        if not documents:
            logger.warning("No story files with suffixes {} found in {}", sorted(self.suffixes), root)
        else:
            logger.info("Loaded {} story files from {}", len(documents), root)
        return documents

    @staticmethod
    def _label(file_path: Path, root: Path | str | None) -> str:
        if root is None:
            return file_path.name
        try:
            return file_path.relative_to(Path(root)).as_posix()
        except ValueError:
            return file_path.as_posix()
