"""Mixins for the TUI application."""

from json_compare.tui.mixins.background_task import BackgroundTaskMixin
from json_compare.tui.mixins.data_table import DataTableMixin
from json_compare.tui.mixins.dual_pane import DualPaneMixin
from json_compare.tui.mixins.vim_navigation import VimNavigationMixin

__all__ = [
    "BackgroundTaskMixin",
    "DataTableMixin",
    "DualPaneMixin",
    "VimNavigationMixin",
]
