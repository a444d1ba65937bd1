"""TUI views for the JSON comparison viewer."""

from json_compare.tui.views.comparison_screen import ComparisonScreen
from json_compare.tui.views.difference_list import DifferenceListScreen
from json_compare.tui.views.line_diff_screen import LineDiffScreen

__all__ = ["ComparisonScreen", "DifferenceListScreen", "LineDiffScreen"]
