"""Tests for format detection and loader selection."""

from __future__ import annotations

import pytest

from json_compare.data_formats import (
    EXTENSION_MAP,
    SUPPORTED_FORMATS,
    JSONLLoader,
    JSONLoader,
    detect_format,
    get_loader,
    get_loader_for_format,
)


class TestDetectFormat:
    """Tests for detect_format function."""

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("data.json", "json"),
            ("data.jsonl", "jsonl"),
            ("data.ndjson", "jsonl"),
            ("DATA.JSON", "json"),
            ("Data.JsonL", "jsonl"),
            ("config", "json"),
            ("notes.txt", "json"),
            ("dir.v2/file", "json"),
        ],
    )
    def test_detect(self, filename, expected):
        """Extension decides the format, JSON being the fallback."""
        assert detect_format(filename) == expected


class TestGetLoader:
    """Tests for get_loader and get_loader_for_format."""

    def test_auto_jsonl(self):
        """.jsonl files get the JSONL loader."""
        assert isinstance(get_loader("a.jsonl"), JSONLLoader)

    def test_auto_json(self):
        """.json files get the JSON loader."""
        assert isinstance(get_loader("a.json"), JSONLoader)

    def test_explicit_format_wins(self):
        """An explicit format ignores the extension."""
        assert isinstance(get_loader("a.jsonl", input_format="json"), JSONLoader)

    def test_unknown_format_raises(self):
        """Unknown format names are rejected."""
        with pytest.raises(ValueError, match="Unsupported format 'parquet'"):
            get_loader_for_format("parquet")


class TestFormatTables:
    """Tests for the extension and format tables."""

    def test_extension_map(self):
        """Every mapped extension names a supported format."""
        assert set(EXTENSION_MAP.values()) <= SUPPORTED_FORMATS

    def test_supported_formats(self):
        """Only JSON and JSONL are supported."""
        assert SUPPORTED_FORMATS == {"json", "jsonl"}
