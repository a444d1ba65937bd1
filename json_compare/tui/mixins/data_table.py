"""
DataTable Mixin for consistent table setup and row selection handling.

Provides reusable methods for:
- _setup_table(): Configure a DataTable with columns and common settings
- _get_selected_row_index(): Safely extract the row index from RowSelected events
- _jump_to_row(): Move the cursor to the next/previous row matching a predicate

Usage:
    class MyScreen(DataTableMixin, Screen):
        def compose(self):
            yield DataTable(id="my-table")

        def on_mount(self):
            self._setup_table("my-table", [
                ("Path", 40),
                ("Type", 20),
            ])
"""

from __future__ import annotations

from typing import Callable

from textual.widgets import DataTable


class DataTableMixin:
    """Mixin providing consistent DataTable setup and row selection handling.

    Row keys are the string form of the row's index in the backing list.
    """

    def _setup_table(
        self,
        table_id: str,
        columns: list[tuple[str, int | None]],
        *,
        cursor_type: str = "row",
        zebra_stripes: bool = True,
    ) -> DataTable:
        """Set up a DataTable with consistent configuration.

        Args:
            table_id: The ID of the DataTable widget to configure.
            columns: List of (column_name, width) tuples. Width can be None.
            cursor_type: Cursor type ('row', 'cell', or 'none').
            zebra_stripes: Whether to enable zebra striping.

        Returns:
            The configured DataTable instance.
        """
        table = self.query_one(f"#{table_id}", DataTable)
        table.cursor_type = cursor_type
        table.zebra_stripes = zebra_stripes
        for name, width in columns:
            table.add_column(name, width=width)
        return table

    def _get_selected_row_index(self, event: DataTable.RowSelected) -> int | None:
        """Extract the row index from a RowSelected event.

        Args:
            event: The RowSelected event from the DataTable.

        Returns:
            The index stored in the row key, or None if no row is selected.
        """
        row_key = event.row_key
        if row_key is None or row_key.value is None:
            return None
        return int(row_key.value)

    def _jump_to_row(
        self,
        table: DataTable,
        matches: Callable[[int], bool],
        *,
        forward: bool = True,
    ) -> bool:
        """Move the cursor to the next (or previous) row that matches.

        The search starts after the current cursor row and wraps around.

        Args:
            table: The table to move in.
            matches: Predicate over row indices.
            forward: Search downwards if True, upwards otherwise.

        Returns:
            True if a matching row was found.
        """
        count = table.row_count
        if count == 0:
            return False

        step = 1 if forward else -1
        start = table.cursor_row
        for offset in range(1, count + 1):
            index = (start + step * offset) % count
            if matches(index):
                table.move_cursor(row=index)
                return True
        return False
