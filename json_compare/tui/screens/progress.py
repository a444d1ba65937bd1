"""
Progress screens shown while a background comparison or alignment runs.

The base ProgressScreen keeps a title, a status line and a detail line, and
times the task from the moment the screen is mounted so the final message
can say how long it took.
"""

from __future__ import annotations

import time

from textual.app import ComposeResult
from textual.containers import Center, Middle
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, Static


class ProgressScreen(Screen):
    """Base screen for displaying progress of background tasks.

    Usage:
        screen = ProgressScreen(title="Working...")
        screen.update_status("Loading documents...")
        screen.set_complete("Found 3 difference(s)")
    """

    CSS = """
    #progress-box {
        width: 64;
        height: auto;
        border: round $primary;
        padding: 1 2;
        background: $surface;
    }

    #progress-title {
        text-align: center;
        text-style: bold;
    }

    #progress-status, #progress-detail {
        text-align: center;
        color: $text-muted;
    }

    ProgressScreen.-failed #progress-title {
        color: $error;
    }
    """

    TITLE_DEFAULT: str = "Working..."

    def __init__(
        self,
        title: str | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._title_text = title or self.TITLE_DEFAULT
        self._started: float | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Center():
            with Middle(id="progress-box"):
                yield Static(self._title_text, id="progress-title", markup=False)
                yield Static("Starting...", id="progress-status", markup=False)
                yield Static("", id="progress-detail", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self._started = time.monotonic()

    @property
    def elapsed(self) -> float:
        """Seconds since the screen was mounted (0.0 before that)."""
        if self._started is None:
            return 0.0
        return time.monotonic() - self._started

    def _set_text(self, widget_id: str, text: str) -> None:
        # Worker updates can arrive before compose has run
        try:
            self.query_one(f"#{widget_id}", Static).update(text)
        except NoMatches:
            pass

    def update_status(self, status: str) -> None:
        """Replace the status line."""
        self._set_text("progress-status", status)

    def update_detail(self, detail: str) -> None:
        """Replace the detail line under the status."""
        self._set_text("progress-detail", detail)

    def set_complete(self, message: str) -> None:
        """Show the final message and how long the task took."""
        self._set_text("progress-title", "Done")
        self.update_status(message)
        self.update_detail(f"Finished in {self.elapsed:.1f}s")

    def set_error(self, message: str) -> None:
        """Show a failure message in place of the progress."""
        self.add_class("-failed")
        self._set_text("progress-title", "Failed")
        self.update_status(message)
        self.update_detail("")


class ComparingScreen(ProgressScreen):
    """Shown while two documents are loaded and compared."""

    TITLE_DEFAULT = "Comparing..."

    def __init__(
        self,
        left_name: str = "",
        right_name: str = "",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize comparing screen.

        Args:
            left_name: Name of the left file (for display).
            right_name: Name of the right file (for display).
            name: Optional screen name.
            id: Optional screen ID.
            classes: Optional CSS classes.
        """
        title = f"Comparing {left_name} and {right_name}" if left_name and right_name else None
        super().__init__(title=title, name=name, id=id, classes=classes)

    def update_items_processed(self, count: int) -> None:
        """Show how many value pairs have been compared so far."""
        self.update_status("Comparing documents...")
        self.update_detail(f"{count:,} items compared")


class AligningScreen(ProgressScreen):
    """Shown while the pretty-printed lines of both documents are aligned."""

    TITLE_DEFAULT = "Aligning lines..."
