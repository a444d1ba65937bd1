"""
Background Task Mixin for running comparisons with progress feedback.

Provides a reusable pattern for:
- Pushing a progress screen
- Running the comparison or line alignment in a background thread
- Updating progress from the background thread
- Handling completion and errors
- Dismissing the progress screen
"""

from __future__ import annotations

import os
import time
from typing import TYPE_CHECKING, Any, Callable

from textual import work

from json_compare.data_formats import load_pair
from json_compare.engine import (
    AlignedRow,
    CompareOptions,
    CompareResult,
    InvalidInputError,
    MalformedInputError,
    StructuralComparator,
    align_documents,
    headline,
)

if TYPE_CHECKING:
    from json_compare.tui.screens.progress import ComparingScreen, ProgressScreen


class BackgroundTaskMixin:
    """Mixin providing background comparison and alignment with progress UI.

    Works on both App and Screen subclasses (it only relies on ``self.app``).

    Usage:
        class MyScreen(BackgroundTaskMixin, Screen):
            def action_compare(self):
                self._run_comparison_task(
                    "old.json",
                    "new.json",
                    CompareOptions(),
                    on_complete=self._show_result,
                )

            def _show_result(self, left, right, result):
                ...
    """

    # Configurable delays
    TASK_COMPLETION_DELAY: float = 0.5
    TASK_ERROR_DELAY: float = 2.0

    # Progress update frequency (every N compared items)
    PROGRESS_UPDATE_FREQUENCY: int = 1000

    def _run_comparison_task(
        self,
        left_path: str,
        right_path: str,
        options: CompareOptions,
        on_complete: Callable[[Any, Any, CompareResult], None],
        on_error: Callable[[str], None] | None = None,
        *,
        input_format: str = "auto",
    ) -> None:
        """Load two files and compare them behind a ComparingScreen.

        Args:
            left_path: Path to the left document.
            right_path: Path to the right document.
            options: Comparison settings.
            on_complete: Called with (left, right, result) on success.
            on_error: Called with the error message on failure.
            input_format: Format hint ('auto', 'json', 'jsonl').
        """
        from json_compare.tui.screens.progress import ComparingScreen

        screen = ComparingScreen(
            left_name=os.path.basename(left_path),
            right_name=os.path.basename(right_path),
        )
        self.app.push_screen(screen)
        self._run_comparison_worker(
            screen, left_path, right_path, options, input_format, on_complete, on_error
        )

    @work(thread=True, exclusive=True, group="comparison")
    def _run_comparison_worker(
        self,
        screen: "ComparingScreen",
        left_path: str,
        right_path: str,
        options: CompareOptions,
        input_format: str,
        on_complete: Callable[[Any, Any, CompareResult], None],
        on_error: Callable[[str], None] | None,
    ) -> None:
        """Background worker for comparison tasks."""

        def report_progress(count: int) -> None:
            self.app.call_from_thread(screen.update_items_processed, count)

        try:
            self.app.call_from_thread(screen.update_status, "Loading documents...")
            left, right = load_pair(left_path, right_path, input_format)

            comparator = StructuralComparator(
                max_differences=options.max_differences,
                sample_threshold=options.sample_threshold,
                progress_callback=report_progress,
                progress_interval=self.PROGRESS_UPDATE_FREQUENCY,
            )
            result = comparator.compare(left, right)
        except (InvalidInputError, MalformedInputError) as e:
            self._fail_task(screen, str(e), on_error)
            return

        self._finish_task(
            screen, headline(result.summary()), on_complete, left, right, result
        )

    def _run_alignment_task(
        self,
        left: Any,
        right: Any,
        on_complete: Callable[[list[AlignedRow]], None],
    ) -> None:
        """Align the pretty-printed lines of two documents behind an AligningScreen.

        Args:
            left: The left document.
            right: The right document.
            on_complete: Called with the aligned rows.
        """
        from json_compare.tui.screens.progress import AligningScreen

        screen = AligningScreen()
        self.app.push_screen(screen)
        self._run_alignment_worker(screen, left, right, on_complete)

    @work(thread=True, exclusive=True, group="alignment")
    def _run_alignment_worker(
        self,
        screen: "ProgressScreen",
        left: Any,
        right: Any,
        on_complete: Callable[[list[AlignedRow]], None],
    ) -> None:
        """Background worker for alignment tasks."""
        self.app.call_from_thread(screen.update_status, "Computing longest common subsequence...")
        rows = align_documents(left, right)
        self._finish_task(screen, f"Aligned {len(rows):,} rows", on_complete, rows)

    def _finish_task(
        self,
        screen: "ProgressScreen",
        message: str,
        on_complete: Callable[..., None],
        *args: Any,
    ) -> None:
        """Show completion, dismiss the progress screen and hand over results."""
        self.app.call_from_thread(screen.set_complete, message)
        time.sleep(self.TASK_COMPLETION_DELAY)
        self.app.call_from_thread(self.app.pop_screen)
        self.app.call_from_thread(on_complete, *args)

    def _fail_task(
        self,
        screen: "ProgressScreen",
        error_msg: str,
        on_error: Callable[[str], None] | None,
    ) -> None:
        """Show an error, dismiss the progress screen and report the failure."""
        self.app.call_from_thread(screen.set_error, f"Error: {error_msg}")
        time.sleep(self.TASK_ERROR_DELAY)
        self.app.call_from_thread(self.app.pop_screen)

        if on_error:
            self.app.call_from_thread(on_error, error_msg)
