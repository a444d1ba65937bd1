"""
JSON format document loader.

This module provides the JSONLoader class for JSON documents. Any JSON value
is accepted at the top level (object, array or primitive).
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

from json_compare.data_formats.base import DocumentLoader
from json_compare.engine.errors import InvalidInputError


def _reject_constant(name: str) -> NoReturn:
    # NaN / Infinity / -Infinity are accepted by json.loads but are not JSON
    raise ValueError(f"{name} is not valid JSON")


def parse_json_text(text: str, source: str = "<text>") -> Any:
    """Parse JSON text strictly.

    Args:
        text: The JSON text.
        source: Label used in error messages.

    Returns:
        The parsed JSON value.

    Raises:
        InvalidInputError: If the text is empty or not valid JSON.
    """
    if not text.strip():
        raise InvalidInputError(source, "Empty document")

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise InvalidInputError(
            source, f"Invalid JSON (line {e.lineno}, column {e.colno}: {e.msg})"
        ) from e
    except (ValueError, RecursionError) as e:
        raise InvalidInputError(source, f"Invalid JSON ({e})") from e


class JSONLoader(DocumentLoader):
    """Document loader for JSON format.

    Attributes:
        format_name: Returns 'json'.
        supported_extensions: Returns ['.json'].
    """

    @property
    def format_name(self) -> str:
        """Return the format name."""
        return "json"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return [".json"]

    def parse_document(self, text: str, source: str = "<text>") -> Any:
        """Parse a JSON document.

        Examples:
            >>> JSONLoader().parse_document('{"a": [1, 2]}')
            {'a': [1, 2]}
        """
        return parse_json_text(text, source)

    def format_document(self, text: str) -> str:
        """Pretty-print JSON text with 2-space indentation.

        Text that does not parse is returned unchanged, so a half-edited
        document is never lost.

        Args:
            text: JSON text.

        Returns:
            The formatted text, or the original text if it is not valid JSON.
        """
        try:
            value = parse_json_text(text)
        except InvalidInputError:
            return text
        return json.dumps(value, indent=2, ensure_ascii=False)
