"""
Diff engine: structural comparison, summaries and line alignment.

Usage:
    from json_compare.engine import compare, summarize, align_documents

    result = compare(left_doc, right_doc)
    for diff in result:
        print(diff.path, diff.kind.label)
    print(summarize(result.differences).to_dict())

    rows = align_documents(left_doc, right_doc)
"""

from json_compare.engine.aligner import align, align_documents, compute_lcs, pretty_lines
from json_compare.engine.comparator import (
    StructuralComparator,
    compare,
    compare_documents,
    json_kind,
    validate_json_value,
)
from json_compare.engine.errors import InvalidInputError, MalformedInputError
from json_compare.engine.summary import IDENTICAL_HEADLINE, headline, summarize, summary_line
from json_compare.engine.types import (
    ABSENT,
    DEFAULT_MAX_DIFFERENCES,
    DEFAULT_MAX_VALUE_LENGTH,
    ROOT_PATH,
    AlignedRow,
    CompareOptions,
    CompareResult,
    Difference,
    DiffKind,
    DiffSummary,
    JsonKind,
    RowKind,
    TypedValue,
)

__all__ = [
    # Types
    "ABSENT",
    "AlignedRow",
    "CompareOptions",
    "CompareResult",
    "Difference",
    "DiffKind",
    "DiffSummary",
    "JsonKind",
    "RowKind",
    "TypedValue",
    # Constants
    "DEFAULT_MAX_DIFFERENCES",
    "DEFAULT_MAX_VALUE_LENGTH",
    "IDENTICAL_HEADLINE",
    "ROOT_PATH",
    # Errors
    "InvalidInputError",
    "MalformedInputError",
    # Structural comparison
    "StructuralComparator",
    "compare",
    "compare_documents",
    "json_kind",
    "validate_json_value",
    # Summaries
    "summarize",
    "headline",
    "summary_line",
    # Line alignment
    "align",
    "align_documents",
    "compute_lcs",
    "pretty_lines",
]
