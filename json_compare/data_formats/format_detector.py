"""
Format detection utilities for document files.

This module provides functions to detect file formats and get appropriate loaders.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from json_compare.data_formats.base import DocumentLoader


# Mapping of file extensions to format names
EXTENSION_MAP: dict[str, str] = {
    ".json": "json",
    ".jsonl": "jsonl",
    ".ndjson": "jsonl",
}

# Supported format names
SUPPORTED_FORMATS = frozenset(["json", "jsonl"])


def detect_format(filename: str) -> str:
    """Detect document format from the file extension.

    Files with an unknown or missing extension are treated as plain JSON,
    since any JSON document is a valid input.

    Args:
        filename: Path to the file.

    Returns:
        Format name: "json" or "jsonl".

    Examples:
        >>> detect_format("data.jsonl")
        'jsonl'
        >>> detect_format("config")
        'json'
    """
    extension = Path(filename).suffix.lower()
    return EXTENSION_MAP.get(extension, "json")


def get_loader_for_format(format_name: str) -> "DocumentLoader":
    """Get a loader for a specific format name.

    Args:
        format_name: The format name ("json" or "jsonl").

    Returns:
        A DocumentLoader instance for the specified format.

    Raises:
        ValueError: If the format name is not supported.
    """
    # Import loaders here to avoid circular imports
    from json_compare.data_formats.json_loader import JSONLoader
    from json_compare.data_formats.jsonl_loader import JSONLLoader

    if format_name not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported format '{format_name}'. "
            f"Supported formats: {', '.join(sorted(SUPPORTED_FORMATS))}"
        )

    loaders: dict[str, DocumentLoader] = {
        "json": JSONLoader(),
        "jsonl": JSONLLoader(),
    }

    return loaders[format_name]


def get_loader(filename: str, input_format: str = "auto") -> "DocumentLoader":
    """Factory function to get the appropriate loader for a file.

    Args:
        filename: Path to the file.
        input_format: Format hint ('auto', 'json', 'jsonl').

    Returns:
        A DocumentLoader instance appropriate for the file format.

    Raises:
        ValueError: If an explicit format is not supported.
    """
    if input_format == "auto":
        input_format = detect_format(filename)
    return get_loader_for_format(input_format)
