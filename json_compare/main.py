#!/usr/bin/env python3
"""
JSON Compare

Compare two JSON documents and report their structural differences.

Usage:
    python -m json_compare.main <left-file> <right-file>
    python -m json_compare.main old.json new.json -f markdown -o report.md
    python -m json_compare.main old.json new.json --side-by-side
    python -m json_compare.main big1.json big2.json --max-differences 500
    python -m json_compare.main old.json new.json --format-only

Supported Input Formats:
    - JSON (.json, or any other extension): a single JSON document
    - JSONL (.jsonl, .ndjson): one JSON value per line, compared by position

Exit Codes:
    0: Comparison completed (identical or not)
    1: Invalid input (missing file, invalid JSON, file too large)
    2: Usage error
    3: Difference limit reached - the report is incomplete
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from rich.console import Console

from json_compare.data_formats import JSONLoader, load_pair
from json_compare.engine import (
    DEFAULT_MAX_DIFFERENCES,
    DEFAULT_MAX_VALUE_LENGTH,
    CompareOptions,
    CompareResult,
    InvalidInputError,
    MalformedInputError,
    align_documents,
    compare_documents,
)
from json_compare.formatters import (
    format_json,
    format_markdown,
    format_text,
    render_side_by_side,
    result_warnings,
    side_by_side_width,
)

EXIT_OK = 0
EXIT_INVALID_INPUT = 1
EXIT_USAGE = 2
EXIT_TRUNCATED = 3


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {value}")
    return value


def _positive_int(text: str) -> int:
    value = _non_negative_int(text)
    if value == 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="json-compare",
        description="Compare two JSON documents and show the differences.",
        epilog="Examples:\n"
        "  json-compare data1.json data2.json\n"
        "  json-compare ../config/old.json ../config/new.json --side-by-side",
        formatter_class=argparse.RawDescriptionHelpFormatter,
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
        "-f", "--format", "--output-format",
        dest="output_format",
        choices=["text", "json", "markdown"],
        default="text",
        help="Report format (default: text)",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--side-by-side",
        action="store_true",
        help="Also print a side-by-side line diff of the pretty-printed documents",
    )
    parser.add_argument(
        "--max-differences",
        type=_non_negative_int,
        default=DEFAULT_MAX_DIFFERENCES,
        help=f"Stop after this many differences, 0 for no limit "
        f"(default: {DEFAULT_MAX_DIFFERENCES})",
    )
    parser.add_argument(
        "--max-value-length",
        type=_non_negative_int,
        default=DEFAULT_MAX_VALUE_LENGTH,
        help=f"Truncate values longer than this in the report, 0 to disable "
        f"(default: {DEFAULT_MAX_VALUE_LENGTH})",
    )
    parser.add_argument(
        "--sample-threshold",
        type=_positive_int,
        default=None,
        help="Sample arrays/objects larger than this instead of comparing "
        "every entry (not exhaustive; default: off)",
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        help="Compact JSON report (no indentation)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colors in the side-by-side view",
    )
    parser.add_argument(
        "--format-only",
        action="store_true",
        help="Pretty-print both input files instead of comparing them "
        "(text that is not valid JSON is printed unchanged)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log comparison details to stderr",
    )
    return parser


def options_from_args(args: argparse.Namespace) -> CompareOptions:
    """Translate parsed arguments into CompareOptions."""
    return CompareOptions(
        max_differences=args.max_differences or None,
        sample_threshold=args.sample_threshold,
        max_value_length=args.max_value_length or None,
    )


def render_report(result: CompareResult, args: argparse.Namespace) -> str:
    """Render the report in the requested output format."""
    max_value_length = args.max_value_length or None
    if args.output_format == "json":
        return format_json(result, pretty=not args.compact)
    if args.output_format == "markdown":
        return format_markdown(result, max_value_length)
    return format_text(result, max_value_length)


def write_side_by_side(left: object, right: object, output: TextIO, no_color: bool) -> None:
    """Print the aligned line diff of both documents to output."""
    rows = align_documents(left, right)
    to_terminal = output.isatty()
    console = Console(
        file=output,
        no_color=no_color or not to_terminal,
        width=None if to_terminal else side_by_side_width(rows),
    )
    render_side_by_side(rows, console)


def write_formatted(paths: list[str], output: TextIO) -> None:
    """Write each file in 2-space indented form, preceded by a header line.

    Raises:
        InvalidInputError: If a file cannot be read.
    """
    loader = JSONLoader()
    for index, path in enumerate(paths):
        if index:
            print("", file=output)
        print(f"==> {path} <==", file=output)
        print(loader.format_document(loader.read_text(path)), file=output)


def format_files(paths: list[str], output_path: str | None) -> int:
    """Pretty-print files to output_path (stdout if None).

    Returns:
        The process exit code.
    """
    try:
        if output_path is None:
            write_formatted(paths, sys.stdout)
        else:
            with open(output_path, "w", encoding="utf-8") as output:
                write_formatted(paths, output)
    except InvalidInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except OSError as e:
        print(f"Error: Cannot write output file: {output_path} ({e.strerror})", file=sys.stderr)
        return EXIT_INVALID_INPUT
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point for json-compare.

    Returns:
        The process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    options = options_from_args(args)

    # Warnings reach the user through the report; the log is for --verbose
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.format_only:
        return format_files([args.left, args.right], args.output)

    try:
        left, right = load_pair(args.left, args.right, args.input_format)
        result = compare_documents(left, right, options)
    except (InvalidInputError, MalformedInputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    output_file = None
    output: TextIO = sys.stdout
    if args.output:
        try:
            output_file = open(args.output, "w", encoding="utf-8")
        except OSError as e:
            print(f"Error: Cannot write output file: {args.output} ({e.strerror})", file=sys.stderr)
            return EXIT_INVALID_INPUT
        output = output_file

    try:
        print(render_report(result, args), file=output)
        if args.side_by_side:
            print("", file=output)
            write_side_by_side(left, right, output, args.no_color)
    finally:
        if output_file:
            output_file.close()

    if args.output:
        print(f"Wrote report to {args.output}", file=sys.stderr)

    for warning in result_warnings(result):
        print(f"Warning: {warning}", file=sys.stderr)

    if result.truncated:
        return EXIT_TRUNCATED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
