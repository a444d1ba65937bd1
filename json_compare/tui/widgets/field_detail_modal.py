"""Modal screen for displaying the full value of a node or difference."""

from __future__ import annotations

import json
from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, ScrollableContainer, Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from json_compare.engine import ABSENT, Difference, TypedValue
from json_compare.tui.widgets.diff_indicator import DIFF_CATEGORIES


def format_detail_value(value: Any) -> str:
    """Format a value for display in the modal.

    Strings are shown as-is, containers are pretty-printed as JSON and a
    missing side is shown as ``(absent)``.

    Args:
        value: The value to format.

    Returns:
        A formatted string representation.
    """
    if value is ABSENT:
        return "(absent)"
    if isinstance(value, TypedValue):
        return f"[{value.kind.value}]\n{format_detail_value(value.value)}"
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, ensure_ascii=False)


class FieldDetailModal(ModalScreen[None]):
    """A modal screen that displays a full JSON value.

    Shows either a single value (a tree node) or both sides of a
    Difference next to each other.
    """

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("enter", "close", "Close"),
        Binding("q", "quit", "Quit App"),
    ]

    CSS = """
    FieldDetailModal {
        align: center middle;
    }

    #detail-box {
        width: 85%;
        height: 85%;
        background: $surface;
        border: thick $primary;
    }

    #detail-header {
        width: 100%;
        padding: 0 2;
        background: $primary;
        text-style: bold;
    }

    #detail-box.-added #detail-header {
        background: $success;
    }

    #detail-box.-removed #detail-header {
        background: $error;
    }

    #detail-box.-changed #detail-header {
        background: $warning;
        color: $background;
    }

    #detail-path {
        padding: 0 2;
        color: $secondary;
    }

    .detail-pane {
        height: 1fr;
        padding: 0 1;
        background: $surface-darken-1;
    }

    #detail-sides .detail-pane {
        width: 1fr;
        margin: 0 1;
    }

    .detail-side {
        text-style: bold underline;
    }

    #detail-hint {
        dock: bottom;
        color: $text-muted;
        padding: 0 2;
    }
    """

    def __init__(
        self,
        field_key: str,
        field_value: Any = ABSENT,
        panel_label: str = "",
        *,
        difference: Difference | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the field detail modal.

        Args:
            field_key: The JSON path or key being shown.
            field_value: The full value when showing a single node.
            panel_label: Header text, e.g. "Left" or "Right".
            difference: When given, both payloads of this difference are
                shown instead of field_value.
            name: Optional name for the widget.
            id: Optional ID for the widget.
            classes: Optional CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.field_key = field_key
        self.field_value = field_value
        self.panel_label = panel_label
        self.difference = difference

    @classmethod
    def for_difference(cls, difference: Difference) -> FieldDetailModal:
        """Build a modal showing both sides of a difference."""
        return cls(
            field_key=difference.path,
            panel_label=difference.kind.label,
            difference=difference,
        )

    def compose(self) -> ComposeResult:
        box_classes = ""
        if self.difference is not None:
            box_classes = f"-{DIFF_CATEGORIES[self.difference.kind]}"

        with Vertical(id="detail-box", classes=box_classes):
            yield Label(self.panel_label, id="detail-header", markup=False)
            yield Label(f"Path: {self.field_key}", id="detail-path", markup=False)
            if self.difference is None:
                with ScrollableContainer(classes="detail-pane"):
                    yield Static(format_detail_value(self.field_value), markup=False)
            else:
                with Horizontal(id="detail-sides"):
                    for side, value in (
                        ("Left", self.difference.left),
                        ("Right", self.difference.right),
                    ):
                        with ScrollableContainer(classes="detail-pane"):
                            yield Static(side, classes="detail-side")
                            yield Static(format_detail_value(value), markup=False)
            yield Label("esc/enter: close", id="detail-hint")

    def action_close(self) -> None:
        """Close the modal."""
        self.dismiss(None)

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()
