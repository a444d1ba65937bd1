"""
Dual Pane Mixin for left/right panel switching functionality.

Provides consistent panel switching behavior for the side-by-side tree view:
- action_switch_panel(): Toggle between left and right panels
- action_vim_left(): Switch focus to left panel (vim h key)
- action_vim_right(): Switch focus to right panel (vim l key)
- action_show_field_detail(): Show the full value under the cursor
- _update_panel_styles(): Update active/inactive CSS classes on panels

Usage:
    # DualPaneMixin MUST come before VimNavigationMixin in the MRO
    # so that action_vim_left/right (panel switching) takes precedence.
    class MyDualPaneScreen(DualPaneMixin, VimNavigationMixin, Screen):
        BINDINGS = DualPaneMixin.DUAL_PANE_BINDINGS + [...]
"""

from __future__ import annotations

from textual.binding import Binding
from textual.css.query import NoMatches

from json_compare.tui.widgets.field_detail_modal import FieldDetailModal
from json_compare.tui.widgets.json_tree_panel import JsonTreePanel


class DualPaneMixin:
    """Mixin for screens with a left and a right JsonTreePanel.

    Expects the panels to be wrapped in ``#left-panel``/``#right-panel``
    containers and the trees to have the IDs ``#left-tree``/``#right-tree``.

    Class Attributes:
        DUAL_PANE_BINDINGS: All bindings for dual-pane screens (includes
            vim j/k/g/G navigation plus panel switching).
    """

    DUAL_PANE_BINDINGS = [
        # Vim navigation (j/k/g/G from VimNavigationMixin)
        Binding("j", "vim_down", "Down", show=False),
        Binding("k", "vim_up", "Up", show=False),
        Binding("g", "vim_top", "Top", show=False),
        Binding("G", "vim_bottom", "Bottom", show=False),
        # Panel switching (h/l vim-style + arrow keys + tab)
        Binding("h", "vim_left", "Left Panel", show=False),
        Binding("l", "vim_right", "Right Panel", show=False),
        Binding("left", "vim_left", "Left Panel", show=False),
        Binding("right", "vim_right", "Right Panel", show=False),
        Binding("tab", "switch_panel", "Switch Panel", show=True),
        # Common actions
        Binding("q", "quit", "Quit", show=True),
        Binding("m", "show_field_detail", "View Value", show=True),
    ]

    _active_panel: str = "left"
    """Currently active panel identifier ('left' or 'right')."""

    @property
    def is_left_active(self) -> bool:
        """Check if the left panel is currently active."""
        return self._active_panel == "left"

    def _tree(self, side: str) -> JsonTreePanel:
        """Return the tree panel for 'left' or 'right'."""
        return self.query_one(f"#{side}-tree", JsonTreePanel)

    @property
    def active_tree(self) -> JsonTreePanel:
        """The tree panel that currently has the focus."""
        return self._tree(self._active_panel)

    @property
    def other_tree(self) -> JsonTreePanel:
        """The tree panel that does not have the focus."""
        return self._tree("right" if self._active_panel == "left" else "left")

    def action_switch_panel(self) -> None:
        """Toggle between left and right panels."""
        self._activate("right" if self._active_panel == "left" else "left")

    def action_vim_left(self) -> None:
        """Switch to left panel (vim h key)."""
        if self._active_panel != "left":
            self._activate("left")

    def action_vim_right(self) -> None:
        """Switch to right panel (vim l key)."""
        if self._active_panel != "right":
            self._activate("right")

    def _activate(self, side: str) -> None:
        self._active_panel = side
        self._update_panel_styles()
        self.active_tree.focus()

    def action_quit(self) -> None:
        """Exit the application."""
        self.app.exit()

    def action_show_field_detail(self) -> None:
        """Show the full value of the node under the cursor in the active tree."""
        self.active_tree.emit_value_requested()

    def on_json_tree_panel_value_requested(self, message: JsonTreePanel.ValueRequested) -> None:
        """Show the field detail modal for a requested node value."""
        panel_label = "Left" if message.panel_id == "left-tree" else "Right"
        self.app.push_screen(
            FieldDetailModal(
                field_key=message.json_path or message.node_key,
                field_value=message.node_value,
                panel_label=panel_label,
            )
        )

    def _update_panel_styles(self) -> None:
        """Update active/inactive CSS classes on #left-panel and #right-panel."""
        try:
            left = self.query_one("#left-panel")
            right = self.query_one("#right-panel")
        except NoMatches:
            return

        for panel, side in ((left, "left"), (right, "right")):
            is_active = self._active_panel == side
            panel.set_class(is_active, "active")
            panel.set_class(not is_active, "inactive")
