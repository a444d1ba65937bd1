"""
Line Diff Screen for the side-by-side view of the pretty-printed documents.

Each row of the aligned line diff becomes a table row coloured by its kind
(unchanged, added, removed, changed). n/p jump between changed rows.
"""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static

from json_compare.engine import AlignedRow, RowKind
from json_compare.formatters import ROW_MARKERS, ROW_STYLES
from json_compare.tui.mixins import DataTableMixin, VimNavigationMixin


def count_row_kinds(rows: list[AlignedRow]) -> dict[RowKind, int]:
    """Count aligned rows per kind."""
    counts = {kind: 0 for kind in RowKind}
    for row in rows:
        counts[row.kind] += 1
    return counts


class LineDiffScreen(DataTableMixin, VimNavigationMixin, Screen):
    """Side-by-side line diff of the two documents."""

    CSS = """
    #line-diff-table {
        height: 1fr;
    }

    #line-diff-status {
        dock: bottom;
        height: 1;
        padding: 0 1;
        background: $primary-darken-1;
    }
    """

    BINDINGS = VimNavigationMixin.VIM_BINDINGS + [
        Binding("n", "next_change", "Next Change"),
        Binding("p", "previous_change", "Prev Change"),
        Binding("escape", "go_back", "Back"),
        Binding("q", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        rows: list[AlignedRow],
        left_name: str = "left",
        right_name: str = "right",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the line diff screen.

        Args:
            rows: Aligned rows from the line aligner.
            left_name: Column title for the left document.
            right_name: Column title for the right document.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.rows = rows
        self._left_name = left_name
        self._right_name = right_name

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable(id="line-diff-table")
        yield Static(self._status_text(), id="line-diff-status", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.title = f"Line diff: {self._left_name} vs {self._right_name}"
        table = self._setup_table(
            "line-diff-table",
            [
                ("", 1),
                ("#", None),
                (self._left_name, None),
                ("#", None),
                (self._right_name, None),
            ],
            zebra_stripes=False,
        )

        for index, row in enumerate(self.rows):
            style = ROW_STYLES[row.kind]
            table.add_row(
                Text(ROW_MARKERS[row.kind], style=style),
                "" if row.left_line_number is None else str(row.left_line_number),
                Text(row.left_text, style=style),
                "" if row.right_line_number is None else str(row.right_line_number),
                Text(row.right_text, style=style),
                key=str(index),
            )
        table.focus()

    def _status_text(self) -> str:
        counts = count_row_kinds(self.rows)
        return (
            f"{len(self.rows):,} rows: {counts[RowKind.CHANGED]} changed, "
            f"{counts[RowKind.ADDED]} added, {counts[RowKind.REMOVED]} removed"
        )

    def _is_change(self, index: int) -> bool:
        return self.rows[index].kind is not RowKind.UNCHANGED

    def action_next_change(self) -> None:
        """Move to the next row that is not unchanged."""
        table = self.query_one("#line-diff-table", DataTable)
        if not self._jump_to_row(table, self._is_change):
            self.notify("No changed lines")

    def action_previous_change(self) -> None:
        """Move to the previous row that is not unchanged."""
        table = self.query_one("#line-diff-table", DataTable)
        if not self._jump_to_row(table, self._is_change, forward=False):
            self.notify("No changed lines")

    def action_go_back(self) -> None:
        self.app.pop_screen()

    def action_quit(self) -> None:
        self.app.exit()
