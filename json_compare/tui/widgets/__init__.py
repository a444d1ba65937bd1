"""TUI widgets for the JSON comparison viewer."""

from json_compare.tui.widgets.diff_indicator import (
    build_diff_map,
    get_node_diff_category,
    get_node_diff_style,
    root_path_is_key,
)
from json_compare.tui.widgets.field_detail_modal import FieldDetailModal
from json_compare.tui.widgets.json_tree_panel import JsonTreePanel

__all__ = [
    # JSON tree panel
    "JsonTreePanel",
    # Field detail modal
    "FieldDetailModal",
    # Diff indicator functions
    "build_diff_map",
    "get_node_diff_category",
    "get_node_diff_style",
    "root_path_is_key",
]
