"""
JSON Compare: structural and line-level differences between JSON documents.

Components:
    - engine: StructuralComparator, summaries and the LCS line aligner
    - data_formats: loading JSON / JSONL documents
    - formatters: text, JSON and Markdown reports, side-by-side view
    - main: command line interface
    - tui: Textual side-by-side viewer
"""

from json_compare.engine import (
    AlignedRow,
    CompareOptions,
    CompareResult,
    Difference,
    DiffKind,
    DiffSummary,
    InvalidInputError,
    JsonKind,
    MalformedInputError,
    RowKind,
    StructuralComparator,
    align,
    align_documents,
    compare,
    summarize,
)

__version__ = "1.0.0"

__all__ = [
    "AlignedRow",
    "CompareOptions",
    "CompareResult",
    "Difference",
    "DiffKind",
    "DiffSummary",
    "InvalidInputError",
    "JsonKind",
    "MalformedInputError",
    "RowKind",
    "StructuralComparator",
    "align",
    "align_documents",
    "compare",
    "summarize",
]
