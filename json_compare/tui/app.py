"""
Main Textual application for the JSON comparison viewer.

Loads two JSON documents, compares them in a background thread and shows
the result as two synchronized trees with the differences highlighted.

Usage:
    python -m json_compare.tui.app old.json new.json
    python -m json_compare.tui.app old.jsonl new.jsonl --max-differences 500
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any

from textual.app import App
from textual.binding import Binding
from textual.logging import TextualHandler

from json_compare.engine import DEFAULT_MAX_DIFFERENCES, CompareOptions, CompareResult
from json_compare.tui.mixins import BackgroundTaskMixin
from json_compare.tui.views.comparison_screen import ComparisonScreen


class JsonDiffApp(BackgroundTaskMixin, App):
    """A Textual app for comparing two JSON documents side by side."""

    TITLE = "JSON Compare"

    CSS = """
    Screen {
        background: $surface;
    }

    DataTable {
        height: 100%;
        background: $surface;
    }

    DataTable > .datatable--header {
        background: $primary-darken-1;
        color: $text;
        text-style: bold;
    }

    Tree {
        background: $surface;
        padding: 0 1;
    }

    Tree > .tree--guides {
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        left_path: str,
        right_path: str,
        options: CompareOptions | None = None,
        input_format: str = "auto",
    ):
        """Initialize the app with the two documents to compare.

        Args:
            left_path: Path to the left (original) document.
            right_path: Path to the right (new) document.
            options: Comparison settings.
            input_format: Format hint ('auto', 'json', 'jsonl').
        """
        super().__init__()
        self.left_path = left_path
        self.right_path = right_path
        self.options = options or CompareOptions()
        self.input_format = input_format

    def on_mount(self) -> None:
        """Start comparing as soon as the app is up."""
        self.start_comparison(self.left_path, self.right_path)

    def start_comparison(self, left_path: str, right_path: str) -> None:
        """Load and compare two documents, then show the comparison screen.

        Args:
            left_path: Path to the left document.
            right_path: Path to the right document.
        """
        self.left_path = left_path
        self.right_path = right_path
        self._run_comparison_task(
            left_path,
            right_path,
            self.options,
            on_complete=self._on_comparison_complete,
            on_error=self._on_comparison_error,
            input_format=self.input_format,
        )

    def _on_comparison_complete(self, left: Any, right: Any, result: CompareResult) -> None:
        self.push_screen(
            ComparisonScreen(
                self.left_path,
                self.right_path,
                left,
                right,
                result,
                options=self.options,
                input_format=self.input_format,
            )
        )

    def _on_comparison_error(self, error_msg: str) -> None:
        self.exit(return_code=1, message=f"Error: {error_msg}")


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be > 0: {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser for the viewer."""
    parser = argparse.ArgumentParser(
        prog="json-compare-tui",
        description="Compare two JSON documents side by side in a terminal UI.",
    )
    parser.add_argument("left", help="Path to the left (original) JSON file")
    parser.add_argument("right", help="Path to the right (new) JSON file")
    parser.add_argument(
        "--input-format",
        choices=["auto", "json", "jsonl"],
        default="auto",
        help="Input file format (default: auto-detect from extension)",
    )
    parser.add_argument(
        "--max-differences",
        type=_positive_int,
        default=DEFAULT_MAX_DIFFERENCES,
        help=f"Stop after this many differences (default: {DEFAULT_MAX_DIFFERENCES})",
    )
    parser.add_argument(
        "--sample-threshold",
        type=_positive_int,
        default=None,
        help="Sample arrays/objects larger than this (not exhaustive; default: off)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the application."""
    args = build_parser().parse_args(argv)

    for path in (args.left, args.right):
        if not os.path.exists(path):
            print(f"Error: Path not found: {path}", file=sys.stderr)
            sys.exit(1)

        if not os.access(path, os.R_OK):
            print(f"Error: Permission denied: {path}", file=sys.stderr)
            sys.exit(1)

    # Engine log records go to the Textual devtools console, not the terminal
    logging.basicConfig(level=logging.INFO, handlers=[TextualHandler()])

    options = CompareOptions(
        max_differences=args.max_differences,
        sample_threshold=args.sample_threshold,
    )
    app = JsonDiffApp(args.left, args.right, options=options, input_format=args.input_format)
    app.run()
    sys.exit(app.return_code or 0)


if __name__ == "__main__":
    main()
