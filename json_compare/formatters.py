"""
Report formatters for comparison results.

Supported Output Formats:
    - text: Numbered list of differences with per-kind labels
    - json: Machine readable report (summary, flags, differences)
    - markdown: Headline, summary bullets and a table of differences

The side-by-side view of aligned lines is rendered with rich and is used by
the CLI on top of any of the formats above.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from json_compare.engine import (
    ABSENT,
    DEFAULT_MAX_VALUE_LENGTH,
    AlignedRow,
    CompareResult,
    Difference,
    DiffKind,
    RowKind,
    TypedValue,
    headline,
    summary_line,
)


TRUNCATION_MARKER = "... (truncated)"

# Row kind -> rich style for the side-by-side view
ROW_STYLES: dict[RowKind, str] = {
    RowKind.UNCHANGED: "",
    RowKind.ADDED: "green",
    RowKind.REMOVED: "red",
    RowKind.CHANGED: "yellow",
}

# Gutter marker shown next to each row kind
ROW_MARKERS: dict[RowKind, str] = {
    RowKind.UNCHANGED: " ",
    RowKind.ADDED: "+",
    RowKind.REMOVED: "-",
    RowKind.CHANGED: "~",
}


def stringify_value(value: Any, max_length: int | None = DEFAULT_MAX_VALUE_LENGTH) -> str:
    """Render a payload as compact JSON, truncating long output.

    Args:
        value: The payload. ABSENT renders as ``undefined``.
        max_length: Length above which the text is cut and a truncation
            marker appended. None or 0 disables truncation.

    Returns:
        The rendered payload.

    Examples:
        >>> stringify_value("x" * 300, 10)
        '"xxxxxxxxx... (truncated)'
    """
    if value is ABSENT:
        return "undefined"
    if isinstance(value, TypedValue):
        value = value.value

    text = json.dumps(value, ensure_ascii=False)
    if max_length and len(text) > max_length:
        return text[:max_length] + TRUNCATION_MARKER
    return text


def _typed(value: Any, max_length: int | None) -> str:
    if isinstance(value, TypedValue):
        return f"{value.kind.value} ({stringify_value(value.value, max_length)})"
    return stringify_value(value, max_length)


def result_warnings(result: CompareResult) -> list[str]:
    """Warnings that must accompany a partial or approximate result."""
    warnings: list[str] = []
    if result.truncated:
        warnings.append(
            f"Difference limit of {result.max_differences:,} reached - "
            "results are incomplete"
        )
    if result.sampled:
        warnings.append(
            "Large arrays/objects were sampled - comparison is not exhaustive"
        )
    return warnings


def _difference_lines(
    number: int, diff: Difference, max_value_length: int | None
) -> list[str]:
    lines = [f"{number}. Path: {diff.path}", f"   Type: {diff.kind.label}"]

    if diff.kind is DiffKind.ADDED:
        lines.append(f"   Value: {stringify_value(diff.right, max_value_length)}")
    elif diff.kind is DiffKind.REMOVED:
        lines.append(f"   Value: {stringify_value(diff.left, max_value_length)}")
    else:
        lines.append(f"   Left:  {_typed(diff.left, max_value_length)}")
        lines.append(f"   Right: {_typed(diff.right, max_value_length)}")
    return lines


def format_text(
    result: CompareResult, max_value_length: int | None = DEFAULT_MAX_VALUE_LENGTH
) -> str:
    """Format a result as a numbered plain-text report."""
    summary = result.summary()
    lines: list[str] = []

    if not result.differences:
        lines.append(headline(summary))
    else:
        lines.append(f"{headline(summary)}:")
        lines.append(summary_line(summary))
        lines.append("")
        for number, diff in enumerate(result.differences, start=1):
            lines.extend(_difference_lines(number, diff, max_value_length))
            lines.append("")

    for warning in result_warnings(result):
        lines.append(f"Warning: {warning}")

    return "\n".join(lines).rstrip("\n")


def format_json(result: CompareResult, pretty: bool = True) -> str:
    """Format a result as a JSON report."""
    data = result.to_dict()
    data["headline"] = headline(result.summary())
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False)


def _md_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def format_markdown(
    result: CompareResult, max_value_length: int | None = DEFAULT_MAX_VALUE_LENGTH
) -> str:
    """Format a result as human-readable Markdown."""
    summary = result.summary()
    lines: list[str] = ["# JSON Comparison", "", f"**{headline(summary)}**", ""]

    lines.append("## Summary")
    lines.append(f"- **Changed:** {summary.changed}")
    lines.append(f"- **Added:** {summary.added}")
    lines.append(f"- **Removed:** {summary.removed}")
    lines.append(f"- **Type changes:** {summary.type_changed}")
    lines.append("")

    warnings = result_warnings(result)
    if warnings:
        for warning in warnings:
            lines.append(f"> **Warning:** {warning}")
        lines.append("")

    if result.differences:
        lines.append("## Differences")
        lines.append("| # | Path | Type | Left | Right |")
        lines.append("|---|------|------|------|-------|")
        for number, diff in enumerate(result.differences, start=1):
            left = _typed(diff.left, max_value_length) if diff.has_left else ""
            right = _typed(diff.right, max_value_length) if diff.has_right else ""
            lines.append(
                f"| {number} | `{_md_cell(diff.path)}` | {diff.kind.label} "
                f"| {_md_cell(left)} | {_md_cell(right)} |"
            )
        lines.append("")

    return "\n".join(lines).rstrip("\n")


def build_side_by_side_table(rows: Sequence[AlignedRow], title: str | None = None) -> Table:
    """Build a two-column rich table from aligned rows.

    Args:
        rows: Aligned rows from the line aligner.
        title: Optional table title.

    Returns:
        A Table with left/right line numbers and text, one row per
        aligned row, styled by row kind.
    """
    table = Table(title=title, show_header=True, header_style="bold", expand=False)
    table.add_column("", no_wrap=True, width=1)
    table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("Left", no_wrap=True, overflow="ellipsis")
    table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("Right", no_wrap=True, overflow="ellipsis")

    for row in rows:
        table.add_row(
            ROW_MARKERS[row.kind],
            "" if row.left_line_number is None else str(row.left_line_number),
            Text(row.left_text),
            "" if row.right_line_number is None else str(row.right_line_number),
            Text(row.right_text),
            style=ROW_STYLES[row.kind] or None,
        )
    return table


def side_by_side_width(rows: Sequence[AlignedRow]) -> int:
    """Console width needed to show the rows without cutting text."""
    text_width = max(
        (max(len(row.left_text), len(row.right_text)) for row in rows), default=0
    )
    number_width = len(str(len(rows))) + 1
    # marker + two number columns + two text columns + borders and padding
    return 1 + 2 * number_width + 2 * text_width + 16


def render_side_by_side(
    rows: Sequence[AlignedRow],
    console: Console | None = None,
    title: str | None = None,
) -> None:
    """Print aligned rows as a side-by-side table.

    Args:
        rows: Aligned rows from the line aligner.
        console: Console to print to (a default stdout console if None).
        title: Optional table title.
    """
    console = console or Console()
    console.print(build_side_by_side_table(rows, title=title))
