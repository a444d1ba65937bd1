"""
JSONL format document loader.

A JSONL file holds one JSON value per line. The loader turns the file into a
JSON array so that two datasets are compared record by record, by position.
"""

from __future__ import annotations

from typing import Any

from json_compare.data_formats.base import DocumentLoader
from json_compare.data_formats.json_loader import parse_json_text
from json_compare.engine.errors import InvalidInputError


class JSONLLoader(DocumentLoader):
    """Document loader for JSONL (JSON Lines) format.

    Blank lines are skipped.

    Attributes:
        format_name: Returns 'jsonl'.
        supported_extensions: Returns ['.jsonl', '.ndjson'].
    """

    @property
    def format_name(self) -> str:
        """Return the format name."""
        return "jsonl"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return [".jsonl", ".ndjson"]

    def parse_document(self, text: str, source: str = "<text>") -> list[Any]:
        """Parse JSONL text into a list of records.

        Args:
            text: The JSONL text.
            source: Label used in error messages.

        Returns:
            One element per non-blank line.

        Raises:
            InvalidInputError: If a line is not valid JSON. The message
                carries the 1-based line number.
        """
        records: list[Any] = []
        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                records.append(parse_json_text(line, source))
            except InvalidInputError as e:
                raise InvalidInputError(
                    source, f"Line {line_number}: {e.reason}"
                ) from e
        return records
