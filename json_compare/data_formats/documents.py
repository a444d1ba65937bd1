"""Convenience functions for loading the two documents of a comparison."""

from __future__ import annotations

from typing import Any

from json_compare.data_formats.format_detector import get_loader


def load_document(filename: str, input_format: str = "auto") -> Any:
    """Load one document with format detection.

    Args:
        filename: Path to the document.
        input_format: Format hint ('auto', 'json', 'jsonl').

    Returns:
        The parsed JSON value.

    Raises:
        InvalidInputError: If the file cannot be read or parsed.
    """
    return get_loader(filename, input_format).load_document(filename)


def load_pair(
    left_filename: str,
    right_filename: str,
    input_format: str = "auto",
) -> tuple[Any, Any]:
    """Load the left and right documents, left first.

    Raises:
        InvalidInputError: For the first document that cannot be loaded.
    """
    left = load_document(left_filename, input_format)
    right = load_document(right_filename, input_format)
    return left, right
