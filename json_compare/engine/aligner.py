"""
Line alignment for the side-by-side visual diff.

Both documents are pretty-printed and split into lines; the lines are then
aligned with a classic dynamic-programming Longest Common Subsequence. Lines
are compared in trimmed form so that indentation and the surrounding
whitespace produced by the serializer do not count as changes. Punctuation
is kept, so a line that only gains a trailing comma is a changed line.

Time and memory are O(m * n) in the number of lines. That is fine for
interactively sized documents (up to the tens of thousands of lines) but is a
known scaling limit for anything larger.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from json_compare.engine.types import AlignedRow, RowKind


def pretty_lines(value: Any) -> list[str]:
    """Serialize a JSON value with 2-space indentation and split into lines.

    Object keys keep their insertion order.

    Args:
        value: A JSON value.

    Returns:
        The lines of the pretty-printed document, without line endings.
    """
    return json.dumps(value, indent=2, ensure_ascii=False).split("\n")


def _lcs_table(left: Sequence[str], right: Sequence[str]) -> list[list[int]]:
    """Build the (m+1) x (n+1) table of LCS lengths for two key sequences."""
    m = len(left)
    n = len(right)
    table = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(1, m + 1):
        row = table[i]
        prev_row = table[i - 1]
        left_key = left[i - 1]
        for j in range(1, n + 1):
            if left_key == right[j - 1]:
                row[j] = prev_row[j - 1] + 1
            else:
                row[j] = max(prev_row[j], row[j - 1])
    return table


def compute_lcs(left_lines: Sequence[str], right_lines: Sequence[str]) -> list[str]:
    """Compute the longest common subsequence of two line sequences.

    Lines are compared after stripping leading/trailing whitespace, and the
    returned elements are in that trimmed form.

    Back-tracking starts at (m, n). When the two neighbouring cells tie, the
    right-hand line is skipped (treated as an insertion) rather than the
    left-hand one, which keeps the alignment deterministic.

    Args:
        left_lines: Lines of the left document.
        right_lines: Lines of the right document.

    Returns:
        The trimmed lines of the LCS in order.
    """
    left_keys = [line.strip() for line in left_lines]
    right_keys = [line.strip() for line in right_lines]
    table = _lcs_table(left_keys, right_keys)

    lcs: list[str] = []
    i = len(left_keys)
    j = len(right_keys)
    while i > 0 and j > 0:
        if left_keys[i - 1] == right_keys[j - 1]:
            lcs.append(left_keys[i - 1])
            i -= 1
            j -= 1
        elif table[i - 1][j] > table[i][j - 1]:
            i -= 1
        else:
            j -= 1

    lcs.reverse()
    return lcs


def align(left_lines: Sequence[str], right_lines: Sequence[str]) -> list[AlignedRow]:
    """Align two line sequences into side-by-side rows.

    Rows are produced by replaying both sequences against their LCS:
        - both lines equal the next LCS element: unchanged, consume both
        - only the left line does: the right line was added
        - only the right line does: the left line was removed
        - neither does: the pair changed, consume both
        - one side exhausted: the rest of the other side is added/removed

    Every input line appears in exactly one row, in its original order.

    Args:
        left_lines: Lines of the left document.
        right_lines: Lines of the right document.

    Returns:
        The aligned rows with 1-based line numbers.
    """
    lcs = compute_lcs(left_lines, right_lines)
    left_keys = [line.strip() for line in left_lines]
    right_keys = [line.strip() for line in right_lines]
    m = len(left_lines)
    n = len(right_lines)

    rows: list[AlignedRow] = []
    li = ri = k = 0

    while li < m or ri < n:
        target = lcs[k] if k < len(lcs) else None
        left_hit = target is not None and li < m and left_keys[li] == target
        right_hit = target is not None and ri < n and right_keys[ri] == target

        if left_hit and right_hit:
            rows.append(
                AlignedRow(li + 1, left_lines[li], ri + 1, right_lines[ri], RowKind.UNCHANGED)
            )
            li += 1
            ri += 1
            k += 1
        elif left_hit and ri < n:
            rows.append(AlignedRow(None, "", ri + 1, right_lines[ri], RowKind.ADDED))
            ri += 1
        elif right_hit and li < m:
            rows.append(AlignedRow(li + 1, left_lines[li], None, "", RowKind.REMOVED))
            li += 1
        elif li < m and ri < n:
            rows.append(
                AlignedRow(li + 1, left_lines[li], ri + 1, right_lines[ri], RowKind.CHANGED)
            )
            li += 1
            ri += 1
        elif li < m:
            rows.append(AlignedRow(li + 1, left_lines[li], None, "", RowKind.REMOVED))
            li += 1
        else:
            rows.append(AlignedRow(None, "", ri + 1, right_lines[ri], RowKind.ADDED))
            ri += 1

    return rows


def align_documents(left: Any, right: Any) -> list[AlignedRow]:
    """Pretty-print two JSON values and align their lines."""
    return align(pretty_lines(left), pretty_lines(right))
