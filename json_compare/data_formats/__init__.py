"""
Data formats module for loading the documents to compare.

Usage:
    from json_compare.data_formats import load_pair

    left, right = load_pair("old.json", "new.json")

    # Or pick a loader explicitly
    from json_compare.data_formats import get_loader
    loader = get_loader("records.jsonl")
    records = loader.load_document("records.jsonl")
"""

from json_compare.data_formats.base import MAX_DOCUMENT_BYTES, DocumentLoader
from json_compare.data_formats.documents import load_document, load_pair
from json_compare.data_formats.format_detector import (
    EXTENSION_MAP,
    SUPPORTED_FORMATS,
    detect_format,
    get_loader,
    get_loader_for_format,
)
from json_compare.data_formats.json_loader import JSONLoader, parse_json_text
from json_compare.data_formats.jsonl_loader import JSONLLoader

__all__ = [
    # Base class
    "DocumentLoader",
    "MAX_DOCUMENT_BYTES",
    # Format detection
    "detect_format",
    "get_loader",
    "get_loader_for_format",
    "EXTENSION_MAP",
    "SUPPORTED_FORMATS",
    # Loading
    "load_document",
    "load_pair",
    "parse_json_text",
    # Loaders
    "JSONLoader",
    "JSONLLoader",
]
