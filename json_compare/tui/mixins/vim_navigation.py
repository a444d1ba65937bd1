"""
Vim Navigation Mixin for global vim-style keybindings.

Provides j/k/g/G navigation that works across all screens by delegating
to the currently focused DataTable or Tree.

Note: h/l bindings for panel switching are defined in DualPaneMixin.
"""

from __future__ import annotations

from textual.binding import Binding
from textual.widgets import DataTable, Tree


class VimNavigationMixin:
    """Mixin providing global vim-style navigation keybindings.

    - j/k: Move cursor down/up
    - g: Jump to first item
    - G: Jump to last item

    Usage:
        class MyScreen(VimNavigationMixin, Screen):
            BINDINGS = VimNavigationMixin.VIM_BINDINGS + [...]
    """

    VIM_BINDINGS = [
        Binding("j", "vim_down", "Down", show=False),
        Binding("k", "vim_up", "Up", show=False),
        Binding("g", "vim_top", "Top", show=False),
        Binding("G", "vim_bottom", "Bottom", show=False),
    ]

    def _get_navigable_widget(self) -> DataTable | Tree | None:
        """Get the focused widget if it is a DataTable or Tree."""
        focused = self.focused
        if isinstance(focused, (DataTable, Tree)):
            return focused
        return None

    def action_vim_down(self) -> None:
        """Move cursor down (vim j key)."""
        widget = self._get_navigable_widget()
        if widget is not None:
            widget.action_cursor_down()

    def action_vim_up(self) -> None:
        """Move cursor up (vim k key)."""
        widget = self._get_navigable_widget()
        if widget is not None:
            widget.action_cursor_up()

    def action_vim_top(self) -> None:
        """Jump to first item (vim g)."""
        widget = self._get_navigable_widget()
        if isinstance(widget, DataTable):
            if widget.row_count > 0:
                widget.move_cursor(row=0)
        elif isinstance(widget, Tree):
            widget.move_cursor(widget.root)
            widget.scroll_home()

    def action_vim_bottom(self) -> None:
        """Jump to last item (vim G)."""
        widget = self._get_navigable_widget()
        if isinstance(widget, DataTable):
            if widget.row_count > 0:
                widget.move_cursor(row=widget.row_count - 1)
        elif isinstance(widget, Tree):
            if widget.last_line >= 0:
                widget.cursor_line = widget.last_line
            widget.scroll_end()
