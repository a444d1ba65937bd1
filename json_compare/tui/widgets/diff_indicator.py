"""
Diff Indicator utilities for highlighting differences in the JSON trees.

Turns the Difference records of a comparison into a map from tree paths to
diff categories. The tree panels use the map to colour their nodes.

Diff Categories:
    - changed: Value or type differs between left and right
    - removed: Key/index exists in left but not in right
    - added: Key/index exists in right but not in left
    - unchanged: Anything not in the map
"""

from __future__ import annotations

from typing import Any, Iterable

from json_compare.engine import ROOT_PATH, Difference, DiffKind


# Maximum recursion depth when marking nested values to prevent stack overflow
MAX_DIFF_DEPTH = 100

DIFF_CATEGORIES: dict[DiffKind, str] = {
    DiffKind.VALUE_CHANGED: "changed",
    DiffKind.TYPE_CHANGED: "changed",
    DiffKind.ADDED: "added",
    DiffKind.REMOVED: "removed",
}

# Rich styles applied to tree node labels per category
DIFF_STYLES: dict[str, str] = {
    "unchanged": "",
    "changed": "bold yellow",
    "added": "bold green",
    "removed": "bold red",
}


# Tree path of the document root node
TREE_ROOT_PATH = ""


def root_path_is_key(left: Any, right: Any) -> bool:
    """Whether a difference path of ``root`` names a top-level key of both documents."""
    return (isinstance(left, dict) and isinstance(right, dict)) or (
        isinstance(left, list) and isinstance(right, list)
    )


def build_diff_map(
    differences: Iterable[Difference],
    left: Any = None,
    right: Any = None,
) -> dict[str, str]:
    """
    Build a mapping of tree paths to diff categories.

    Paths use the same notation as the comparator (``a.b[1]``). The
    comparator reports a difference at the document root as ``root``, which
    is also the path of a top-level key named ``root``. The two documents
    settle it: when both are objects (or both arrays) the root itself is
    never reported, so ``root`` is a key; otherwise it is the document root
    and is stored under TREE_ROOT_PATH only.

    Added and removed values are marked together with everything nested in
    them, so an added object highlights all of its members.

    Args:
        differences: Differences from a comparison.
        left: The left document.
        right: The right document.

    Returns:
        A dictionary mapping JSON paths to "changed", "added" or "removed".

    Examples:
        >>> diff_map = build_diff_map(result.differences, left, right)
        >>> diff_map.get("address.country")  # "added"
    """
    root_is_key = root_path_is_key(left, right)
    diff_map: dict[str, str] = {}

    for diff in differences:
        category = DIFF_CATEGORIES[diff.kind]
        if diff.path == ROOT_PATH and not root_is_key:
            diff_map[TREE_ROOT_PATH] = category
            continue

        diff_map[diff.path] = category
        if diff.kind is DiffKind.ADDED:
            _mark_all(diff.right, diff.path, category, diff_map)
        elif diff.kind is DiffKind.REMOVED:
            _mark_all(diff.left, diff.path, category, diff_map)

    return diff_map


def _mark_all(
    value: Any,
    path: str,
    category: str,
    diff_map: dict[str, str],
    depth: int = 0,
) -> None:
    """
    Mark all nested paths of a value with the same category.

    Args:
        value: The value whose nested paths should be marked.
        path: The JSON path of the value.
        category: The category to apply.
        diff_map: The diff map to populate.
        depth: Current recursion depth.
    """
    if depth >= MAX_DIFF_DEPTH:
        return  # Stop recursion at max depth

    if isinstance(value, dict):
        for key, nested_value in value.items():
            nested_path = f"{path}.{key}" if path else key
            diff_map[nested_path] = category
            _mark_all(nested_value, nested_path, category, diff_map, depth + 1)
    elif isinstance(value, list):
        for idx, item in enumerate(value):
            item_path = f"{path}[{idx}]"
            diff_map[item_path] = category
            _mark_all(item, item_path, category, diff_map, depth + 1)


def get_node_diff_category(path: str, diff_map: dict[str, str]) -> str:
    """Return the diff category for a tree path ("unchanged" if not in the map)."""
    return diff_map.get(path, "unchanged")


def get_node_diff_style(path: str, diff_map: dict[str, str]) -> str:
    """
    Return the rich style for a node based on its diff category.

    Args:
        path: The JSON path of the node.
        diff_map: The diff map from build_diff_map().

    Returns:
        A rich style string, empty for unchanged nodes.
    """
    return DIFF_STYLES[get_node_diff_category(path, diff_map)]
