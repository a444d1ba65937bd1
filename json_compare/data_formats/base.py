"""
Abstract base class for document loaders.

This module defines the DocumentLoader interface that all format-specific
loaders implement. Every failure a loader can hit (missing file, unreadable
file, oversized file, invalid syntax) is reported as InvalidInputError so
callers can tell bad input apart from comparison results.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Any

from json_compare.engine.errors import InvalidInputError


# Documents larger than this are refused rather than parsed (50 MB)
MAX_DOCUMENT_BYTES = 50 * 1024 * 1024


class DocumentLoader(ABC):
    """Abstract base class for loading a document to compare.

    Subclasses implement parse_document(); file handling and the size cap
    are shared.

    Attributes:
        max_bytes: Size limit for documents read from disk.
    """

    def __init__(self, max_bytes: int = MAX_DOCUMENT_BYTES) -> None:
        self.max_bytes = max_bytes

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the format name (e.g., 'json', 'jsonl')."""
        pass

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions (e.g., ['.json'])."""
        pass

    @abstractmethod
    def parse_document(self, text: str, source: str = "<text>") -> Any:
        """Parse document text into a JSON value.

        Args:
            text: The document text.
            source: Label used in error messages (usually the file path).

        Returns:
            The parsed JSON value.

        Raises:
            InvalidInputError: If the text is not a valid document.
        """
        pass

    def read_text(self, filename: str) -> str:
        """Read a document file as UTF-8 text, enforcing the size cap.

        Args:
            filename: Path to the file.

        Returns:
            The file contents.

        Raises:
            InvalidInputError: If the file is missing, unreadable, too
                large, or not valid UTF-8.
        """
        if not os.path.exists(filename):
            raise InvalidInputError(filename, "File not found")
        if os.path.isdir(filename):
            raise InvalidInputError(filename, "Path is a directory")

        try:
            size = os.path.getsize(filename)
        except OSError as e:
            raise InvalidInputError(filename, f"Cannot read file ({e.strerror})") from e

        if size > self.max_bytes:
            raise InvalidInputError(
                filename,
                f"File too large ({size:,} bytes, limit {self.max_bytes:,})",
            )

        try:
            with open(filename, "r", encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise InvalidInputError(filename, "File is not valid UTF-8") from e
        except OSError as e:
            raise InvalidInputError(filename, f"Cannot read file ({e.strerror})") from e

    def load_document(self, filename: str) -> Any:
        """Read and parse a document file.

        Args:
            filename: Path to the file.

        Returns:
            The parsed JSON value.

        Raises:
            InvalidInputError: If the file cannot be read or parsed.
        """
        return self.parse_document(self.read_text(filename), source=filename)
