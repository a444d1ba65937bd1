"""
Tallying of differences into per-category counts and headlines.
"""

from __future__ import annotations

from typing import Iterable

from json_compare.engine.types import DiffKind, DiffSummary, Difference


IDENTICAL_HEADLINE = "No differences found - JSON documents are identical"


def summarize(differences: Iterable[Difference]) -> DiffSummary:
    """Count differences per category.

    Args:
        differences: Differences from a comparison.

    Returns:
        A DiffSummary with one counter per category and the total.

    Examples:
        >>> summary = summarize(result.differences)
        >>> summary.to_dict()  # {"changed": 2, "added": 1, ..., "total": 4}
    """
    counts = {kind: 0 for kind in DiffKind}
    for diff in differences:
        counts[diff.kind] += 1

    return DiffSummary(
        changed=counts[DiffKind.VALUE_CHANGED],
        added=counts[DiffKind.ADDED],
        removed=counts[DiffKind.REMOVED],
        type_changed=counts[DiffKind.TYPE_CHANGED],
    )


def headline(summary: DiffSummary) -> str:
    """One-line headline for a summary."""
    if summary.total == 0:
        return IDENTICAL_HEADLINE
    return f"Found {summary.total} difference(s)"


def summary_line(summary: DiffSummary) -> str:
    """Per-category breakdown, e.g. ``2 changed, 1 added, 0 removed, 1 type changes``."""
    return (
        f"{summary.changed} changed, {summary.added} added, "
        f"{summary.removed} removed, {summary.type_changed} type changes"
    )
