"""
Difference List Screen showing every difference of a comparison in a table.

Enter opens the full left/right payloads; t returns to the tree view with
the selected path highlighted.
"""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static

from json_compare.engine import CompareResult, Difference, DiffKind, TypedValue
from json_compare.formatters import result_warnings, stringify_value
from json_compare.tui.mixins import DataTableMixin, VimNavigationMixin
from json_compare.tui.widgets import FieldDetailModal
from json_compare.tui.widgets.diff_indicator import DIFF_CATEGORIES, DIFF_STYLES

# Payload cells are cut to this many characters
CELL_VALUE_LENGTH = 60


def _cell(value: object) -> str:
    if isinstance(value, TypedValue):
        return f"{value.kind.value} ({stringify_value(value.value, CELL_VALUE_LENGTH)})"
    return stringify_value(value, CELL_VALUE_LENGTH)


class DifferenceListScreen(DataTableMixin, VimNavigationMixin, Screen[str | None]):
    """Table of all differences.

    Dismisses with the path of the selected difference when the user asks
    to see it in the tree view, or None when going back.
    """

    CSS = """
    #difference-table {
        height: 1fr;
    }

    #difference-status {
        dock: bottom;
        height: auto;
        padding: 0 1;
        background: $primary-darken-1;
    }
    """

    BINDINGS = VimNavigationMixin.VIM_BINDINGS + [
        Binding("t", "show_in_tree", "Show in Tree"),
        Binding("escape", "go_back", "Back"),
        Binding("q", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        result: CompareResult,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.result = result
        self.differences: list[Difference] = list(result.differences)

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable(id="difference-table")
        status = " | ".join([f"{len(self.differences):,} differences"] + result_warnings(self.result))
        yield Static(status, id="difference-status", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.title = "Differences"
        table = self._setup_table(
            "difference-table",
            [
                ("#", 6),
                ("Path", 40),
                ("Type", 18),
                ("Left", None),
                ("Right", None),
            ],
        )

        for index, diff in enumerate(self.differences):
            style = DIFF_STYLES[DIFF_CATEGORIES[diff.kind]]
            table.add_row(
                str(index + 1),
                Text(diff.path),
                Text(diff.kind.label, style=style),
                _cell(diff.left) if diff.kind is not DiffKind.ADDED else "",
                _cell(diff.right) if diff.kind is not DiffKind.REMOVED else "",
                key=str(index),
            )
        table.focus()

    def _current_difference(self) -> Difference | None:
        table = self.query_one("#difference-table", DataTable)
        if table.row_count == 0:
            return None
        return self.differences[table.cursor_row]

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Open the payloads of the selected difference."""
        index = self._get_selected_row_index(event)
        if index is None:
            return
        self.app.push_screen(FieldDetailModal.for_difference(self.differences[index]))

    def action_show_in_tree(self) -> None:
        """Return to the tree view at the selected difference."""
        diff = self._current_difference()
        if diff is not None:
            self.dismiss(diff.path)

    def action_go_back(self) -> None:
        self.dismiss(None)

    def action_quit(self) -> None:
        self.app.exit()
