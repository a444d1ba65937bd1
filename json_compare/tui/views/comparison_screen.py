"""
Comparison Screen for side-by-side JSON comparison.

Displays the left and right documents as trees in a split-screen view with
synchronized navigation and highlighting of the differences found by the
structural comparator.
"""

from __future__ import annotations

import os
from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from json_compare.engine import (
    ROOT_PATH,
    AlignedRow,
    CompareOptions,
    CompareResult,
    Difference,
    DiffKind,
    headline,
    summary_line,
)
from json_compare.formatters import result_warnings
from json_compare.tui.mixins import BackgroundTaskMixin, DualPaneMixin, VimNavigationMixin
from json_compare.tui.views.difference_list import DifferenceListScreen
from json_compare.tui.views.line_diff_screen import LineDiffScreen
from json_compare.tui.widgets.diff_indicator import (
    TREE_ROOT_PATH,
    build_diff_map,
    root_path_is_key,
)
from json_compare.tui.widgets.json_tree_panel import JsonTreePanel


class ComparisonScreen(BackgroundTaskMixin, DualPaneMixin, VimNavigationMixin, Screen):
    """Side-by-side JSON comparison view.

    The left document is shown in the left tree and the right document in
    the right tree; differences are coloured in both.
    """

    CSS = """
    ComparisonScreen {
        layout: vertical;
    }

    #comparison-container {
        height: 1fr;
    }

    #left-panel, #right-panel {
        width: 50%;
        border: solid $primary-darken-2;
        padding: 0 1;
    }

    #left-panel.active, #right-panel.active {
        border: solid $secondary;
    }

    .panel-header {
        height: 1;
        text-align: center;
        text-style: bold;
    }

    #left-tree, #right-tree {
        height: 1fr;
    }

    #summary-bar {
        dock: bottom;
        height: auto;
        padding: 0 1;
        background: $primary-darken-1;
    }
    """

    BINDINGS = DualPaneMixin.DUAL_PANE_BINDINGS + [
        Binding("s", "toggle_sync", "Sync Scroll"),
        Binding("d", "toggle_diff", "Show Diff"),
        Binding("e", "expand_all", "Expand All"),
        Binding("c", "collapse_all", "Collapse All"),
        Binding("n", "next_difference", "Next Diff"),
        Binding("N", "previous_difference", "Prev Diff", show=False),
        Binding("D", "show_differences", "Differences"),
        Binding("v", "show_line_diff", "Line Diff"),
        Binding("w", "swap_sides", "Swap"),
    ]

    def __init__(
        self,
        left_path: str,
        right_path: str,
        left: Any,
        right: Any,
        result: CompareResult,
        options: CompareOptions | None = None,
        input_format: str = "auto",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the ComparisonScreen.

        Args:
            left_path: Path of the left document.
            right_path: Path of the right document.
            left: The parsed left document.
            right: The parsed right document.
            result: The comparison of left and right.
            options: The options the comparison ran with.
            input_format: Format hint used to load the documents.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._left_path = left_path
        self._right_path = right_path
        self._left = left
        self._right = right
        self.result = result
        self.options = options or CompareOptions()
        self.input_format = input_format
        self._sync_enabled: bool = True
        self._diff_enabled: bool = True
        self._difference_index: int = -1
        self._rows: list[AlignedRow] | None = None

    @property
    def left_name(self) -> str:
        return os.path.basename(self._left_path)

    @property
    def right_name(self) -> str:
        return os.path.basename(self._right_path)

    def compose(self) -> ComposeResult:
        """Compose the screen layout with side-by-side panels."""
        yield Header()
        with Horizontal(id="comparison-container"):
            with Vertical(id="left-panel", classes="active"):
                yield Static(self.left_name, classes="panel-header", markup=False)
                yield JsonTreePanel(label=self.left_name, id="left-tree")
            with Vertical(id="right-panel", classes="inactive"):
                yield Static(self.right_name, classes="panel-header", markup=False)
                yield JsonTreePanel(label=self.right_name, id="right-tree")
        yield Static(self._summary_text(), id="summary-bar", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        """Fill both trees and apply the diff highlighting."""
        self.title = f"{self.left_name} vs {self.right_name}"

        diff_map = build_diff_map(self.result.differences, self._left, self._right)
        for side, document in (("left", self._left), ("right", self._right)):
            tree = self._tree(side)
            tree.load_json(document, label=self.left_name if side == "left" else self.right_name)
            tree.set_diff_map(diff_map)
            tree.diff_mode = self._diff_enabled

        for warning in result_warnings(self.result):
            self.notify(warning, severity="warning", timeout=8)

        self._tree("left").focus()
        self._update_panel_styles()

    def _summary_text(self) -> str:
        summary = self.result.summary()
        parts = [headline(summary)]
        if not self.result.identical:
            parts.append(summary_line(summary))
        parts.append(f"{self.result.items_processed:,} items compared")
        parts.extend(result_warnings(self.result))
        return " | ".join(parts)

    # ------------------------------------------------------------------
    # Toggles
    # ------------------------------------------------------------------

    def action_toggle_sync(self) -> None:
        """Toggle synchronized scrolling and expansion between panels."""
        self._sync_enabled = not self._sync_enabled
        for side in ("left", "right"):
            self._tree(side).sync_enabled = self._sync_enabled

        status = "enabled" if self._sync_enabled else "disabled"
        self.notify(f"Sync scroll {status}")

    def action_toggle_diff(self) -> None:
        """Toggle diff highlighting."""
        self._diff_enabled = not self._diff_enabled
        for side in ("left", "right"):
            self._tree(side).diff_mode = self._diff_enabled

        status = "enabled" if self._diff_enabled else "disabled"
        self.notify(f"Diff highlighting {status}")

    def action_expand_all(self) -> None:
        """Expand all nodes in both trees."""
        for side in ("left", "right"):
            self._tree(side).root.expand_all()
        self.notify("Expanded all nodes")

    def action_collapse_all(self) -> None:
        """Collapse all nodes in both trees, keeping the roots open."""
        for side in ("left", "right"):
            root = self._tree(side).root
            root.collapse_all()
            root.expand()
        self.notify("Collapsed all nodes")

    # ------------------------------------------------------------------
    # Difference navigation
    # ------------------------------------------------------------------

    def _select_in_tree(self, tree: JsonTreePanel, path: str) -> bool:
        if path == ROOT_PATH and not root_path_is_key(self._left, self._right):
            # A difference of the documents themselves is shown on the tree root
            return tree.select_path(TREE_ROOT_PATH)
        return tree.select_path(path)

    def select_difference_path(self, path: str | None) -> None:
        """Move both tree cursors to a difference path.

        Args:
            path: Path of a difference, or None to do nothing.
        """
        if path is None:
            return
        found_left = self._select_in_tree(self._tree("left"), path)
        found_right = self._select_in_tree(self._tree("right"), path)
        if not (found_left or found_right):
            self.notify(f"Path not shown in tree: {path}", severity="warning")
            return
        self.active_tree.focus()

    def _step_difference(self, step: int) -> None:
        differences = self.result.differences
        if not differences:
            self.notify("No differences")
            return

        self._difference_index = (self._difference_index + step) % len(differences)
        diff: Difference = differences[self._difference_index]
        self.select_difference_path(diff.path)

        # Put the focus on the side that actually holds the value
        if diff.kind is DiffKind.ADDED:
            self.action_vim_right()
        elif diff.kind is DiffKind.REMOVED:
            self.action_vim_left()

        self.notify(
            f"{self._difference_index + 1}/{len(differences)}: {diff.path} ({diff.kind.label})"
        )

    def action_next_difference(self) -> None:
        """Jump to the next difference."""
        self._step_difference(1)

    def action_previous_difference(self) -> None:
        """Jump to the previous difference."""
        self._step_difference(-1)

    def action_show_differences(self) -> None:
        """Show all differences in a table."""
        self.app.push_screen(
            DifferenceListScreen(self.result), callback=self.select_difference_path
        )

    # ------------------------------------------------------------------
    # Line diff and swapping
    # ------------------------------------------------------------------

    def action_show_line_diff(self) -> None:
        """Show the side-by-side line diff, aligning the lines on first use."""
        if self._rows is not None:
            self._push_line_diff(self._rows)
            return
        self._run_alignment_task(self._left, self._right, on_complete=self._on_aligned)

    def _on_aligned(self, rows: list[AlignedRow]) -> None:
        self._rows = rows
        self._push_line_diff(rows)

    def _push_line_diff(self, rows: list[AlignedRow]) -> None:
        self.app.push_screen(LineDiffScreen(rows, self.left_name, self.right_name))

    def action_swap_sides(self) -> None:
        """Swap the left and right documents and compare again."""
        self.app.pop_screen()
        self.app.start_comparison(self._right_path, self._left_path)

    # ------------------------------------------------------------------
    # Synchronization between the panels
    # ------------------------------------------------------------------

    def on_json_tree_panel_scroll_changed(self, message: JsonTreePanel.ScrollChanged) -> None:
        """Mirror a scroll of one panel in the other panel."""
        if not self._sync_enabled:
            return

        if message.panel_id == "left-tree":
            self._tree("right").sync_scroll_to(message.scroll_y)
        elif message.panel_id == "right-tree":
            self._tree("left").sync_scroll_to(message.scroll_y)

    def on_json_tree_panel_node_toggled(self, message: JsonTreePanel.NodeToggled) -> None:
        """Mirror an expand/collapse of one panel in the other panel."""
        if not self._sync_enabled:
            return

        if message.panel_id == "left-tree":
            self._tree("right").sync_node_toggle(message.json_path, message.expanded)
        elif message.panel_id == "right-tree":
            self._tree("left").sync_node_toggle(message.json_path, message.expanded)

    @property
    def sync_enabled(self) -> bool:
        """Check if sync scrolling is enabled."""
        return self._sync_enabled

    @property
    def diff_enabled(self) -> bool:
        """Check if diff highlighting is enabled."""
        return self._diff_enabled
