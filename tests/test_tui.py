"""Tests for the terminal UI: diff highlighting helpers and the comparison screens."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from textual.app import App
from textual.widgets import DataTable

from json_compare.engine import (
    ABSENT,
    AlignedRow,
    Difference,
    DiffKind,
    JsonKind,
    RowKind,
    TypedValue,
    compare,
)
from json_compare.tui.app import build_parser
from json_compare.tui.views.comparison_screen import ComparisonScreen
from json_compare.tui.views.difference_list import DifferenceListScreen
from json_compare.tui.views.line_diff_screen import LineDiffScreen, count_row_kinds
from json_compare.tui.widgets.diff_indicator import (
    build_diff_map,
    get_node_diff_category,
    get_node_diff_style,
    root_path_is_key,
)
from json_compare.tui.widgets.field_detail_modal import FieldDetailModal, format_detail_value
from json_compare.tui.widgets.json_tree_panel import JsonTreePanel, format_primitive


class TestBuildDiffMap:
    """Tests for build_diff_map function."""

    def test_categories(self, left_person, right_person):
        """Each difference path gets its category."""
        diff_map = build_diff_map(compare(left_person, right_person).differences)

        assert diff_map["age"] == "changed"
        assert diff_map["hobbies[2]"] == "added"
        assert diff_map["address.country"] == "added"
        assert "name" not in diff_map

    def test_type_change_is_changed(self):
        """Type changes are highlighted like value changes."""
        diff_map = build_diff_map(compare({"v": 1}, {"v": "1"}).differences)
        assert diff_map == {"v": "changed"}

    def test_added_descendants_marked(self):
        """Everything inside an added value is marked added."""
        diff_map = build_diff_map(compare({}, {"a": {"b": [1, {"c": 2}]}}).differences)

        assert diff_map["a"] == "added"
        assert diff_map["a.b"] == "added"
        assert diff_map["a.b[1].c"] == "added"

    def test_removed_descendants_marked(self):
        """Everything inside a removed value is marked removed."""
        diff_map = build_diff_map(compare([[1, 2]], []).differences)
        assert diff_map == {"[0]": "removed", "[0][0]": "removed", "[0][1]": "removed"}

    def test_root_difference(self):
        """A root difference highlights only the tree root."""
        diff_map = build_diff_map(compare(1, 2).differences, 1, 2)
        assert diff_map == {"": "changed"}

    def test_root_type_change_with_root_key(self):
        """A key named root is left alone when the documents themselves differ."""
        left = {"root": {"x": 1}}
        diff_map = build_diff_map(compare(left, [1]).differences, left, [1])
        assert diff_map == {"": "changed"}

    def test_added_key_named_root(self):
        """A top-level key named root is not confused with the document root."""
        left: dict = {}
        right = {"root": {"x": 1}}
        diff_map = build_diff_map(compare(left, right).differences, left, right)

        assert diff_map == {"root": "added", "root.x": "added"}

    def test_root_path_is_key(self):
        """Only two objects or two arrays can hold a key at the root path."""
        assert root_path_is_key({}, {})
        assert root_path_is_key([], [1])
        assert not root_path_is_key({}, [])
        assert not root_path_is_key(1, 1)

    def test_lookup_helpers(self):
        """Missing paths are unchanged and unstyled."""
        diff_map = {"a": "removed"}

        assert get_node_diff_category("a", diff_map) == "removed"
        assert get_node_diff_category("b", diff_map) == "unchanged"
        assert get_node_diff_style("a", diff_map) == "bold red"
        assert get_node_diff_style("b", diff_map) == ""


class TestLabels:
    """Tests for node and modal value formatting."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (3, "3"),
            (2.5, "2.5"),
            ("a\nb", '"a\\nb"'),
            ('say "hi"', '"say \\"hi\\""'),
        ],
    )
    def test_format_primitive(self, value, expected):
        """Primitives render like JSON literals."""
        assert format_primitive(value) == expected

    def test_long_string_shortened(self):
        """Long strings are cut in labels."""
        label = format_primitive("x" * 100)
        assert label.endswith('..."')
        assert len(label) == 52

    def test_format_detail_value(self):
        """Modal values are shown in full."""
        assert format_detail_value("plain text") == "plain text"
        assert format_detail_value({"a": [1]}) == '{\n  "a": [\n    1\n  ]\n}'
        assert format_detail_value(None) == "null"
        assert format_detail_value(ABSENT) == "(absent)"
        assert format_detail_value(TypedValue(JsonKind.NUMBER, 30)) == "[number]\n30"

    def test_modal_for_difference(self):
        """The difference modal is titled with the kind and path."""
        modal = FieldDetailModal.for_difference(Difference("a.b", DiffKind.ADDED, right=1))

        assert modal.field_key == "a.b"
        assert modal.panel_label == "Added in right"
        assert modal.difference is not None

    def test_count_row_kinds(self):
        """Rows are counted per kind."""
        rows = [
            AlignedRow(1, "a", 1, "a", RowKind.UNCHANGED),
            AlignedRow(2, "b", None, "", RowKind.REMOVED),
            AlignedRow(3, "c", 2, "d", RowKind.CHANGED),
        ]
        counts = count_row_kinds(rows)

        assert counts[RowKind.UNCHANGED] == 1
        assert counts[RowKind.REMOVED] == 1
        assert counts[RowKind.CHANGED] == 1
        assert counts[RowKind.ADDED] == 0


class TestTuiArguments:
    """Tests for the viewer's argument parser."""

    def test_defaults(self):
        """Limits default to the engine defaults."""
        args = build_parser().parse_args(["a.json", "b.json"])

        assert args.max_differences == 10_000
        assert args.sample_threshold is None
        assert args.input_format == "auto"

    def test_zero_limit_rejected(self):
        """The viewer needs a positive cap."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["a.json", "b.json", "--max-differences", "0"])


class ScreenHarness(App):
    """Minimal app that shows a single screen."""

    def __init__(self, screen: Any) -> None:
        super().__init__()
        self._initial_screen = screen

    def on_mount(self) -> None:
        self.push_screen(self._initial_screen)


def make_comparison_screen(left: Any, right: Any) -> ComparisonScreen:
    return ComparisonScreen("left.json", "right.json", left, right, compare(left, right))


def run_app(app: App, scenario) -> None:
    """Run an async scenario against a headless app."""

    async def _run() -> None:
        async with app.run_test(size=(140, 40)) as pilot:
            await pilot.pause()
            await scenario(app, pilot)

    asyncio.run(_run())


class TestComparisonScreen:
    """Headless tests of the side-by-side tree view."""

    def test_trees_loaded(self, left_person, right_person):
        """Both trees hold every path of their document."""

        async def scenario(app, pilot):
            screen = app.screen
            left_tree = screen.query_one("#left-tree", JsonTreePanel)
            right_tree = screen.query_one("#right-tree", JsonTreePanel)

            assert left_tree.has_path("address.zip")
            assert not left_tree.has_path("address.country")
            assert right_tree.has_path("address.country")
            assert right_tree.has_path("hobbies[2]")

        run_app(ScreenHarness(make_comparison_screen(left_person, right_person)), scenario)

    def test_highlighting(self, left_person, right_person):
        """Changed nodes and their ancestors are styled, others are not."""

        async def scenario(app, pilot):
            tree = app.screen.query_one("#right-tree", JsonTreePanel)

            assert tree._path_nodes["age"].label.style == "bold yellow"
            assert tree._path_nodes["address.country"].label.style == "bold green"
            assert tree._path_nodes["address"].label.style == "bold yellow"
            assert tree._path_nodes["name"].label.style == ""

        run_app(ScreenHarness(make_comparison_screen(left_person, right_person)), scenario)

    def test_toggle_diff(self, left_person, right_person):
        """d turns the highlighting off."""

        async def scenario(app, pilot):
            screen = app.screen
            assert screen.diff_enabled

            await pilot.press("d")

            tree = screen.query_one("#left-tree", JsonTreePanel)
            assert not screen.diff_enabled
            assert tree._path_nodes["age"].label.style == ""

        run_app(ScreenHarness(make_comparison_screen(left_person, right_person)), scenario)

    def test_toggle_sync(self, left_person, right_person):
        """s turns synchronization off in both trees."""

        async def scenario(app, pilot):
            await pilot.press("s")

            screen = app.screen
            assert not screen.sync_enabled
            assert not screen.query_one("#left-tree", JsonTreePanel).sync_enabled
            assert not screen.query_one("#right-tree", JsonTreePanel).sync_enabled

        run_app(ScreenHarness(make_comparison_screen(left_person, right_person)), scenario)

    def test_next_difference(self, left_person, right_person):
        """n moves both cursors to the first difference."""

        async def scenario(app, pilot):
            await pilot.press("n")
            await pilot.pause()

            screen = app.screen
            left_tree = screen.query_one("#left-tree", JsonTreePanel)
            right_tree = screen.query_one("#right-tree", JsonTreePanel)
            assert left_tree.cursor_node is left_tree._path_nodes["age"]
            assert right_tree.cursor_node is right_tree._path_nodes["age"]

        run_app(ScreenHarness(make_comparison_screen(left_person, right_person)), scenario)

    def test_collapse_keeps_root_open(self, left_person, right_person):
        """c collapses everything below the roots."""

        async def scenario(app, pilot):
            await pilot.press("e")
            await pilot.press("c")
            await pilot.pause()

            tree = app.screen.query_one("#left-tree", JsonTreePanel)
            assert tree.root.is_expanded
            assert not tree._path_nodes["address"].is_expanded

        run_app(ScreenHarness(make_comparison_screen(left_person, right_person)), scenario)

    def test_difference_list(self, left_person, right_person):
        """D opens the table of differences."""

        async def scenario(app, pilot):
            await pilot.press("D")
            await pilot.pause()

            assert isinstance(app.screen, DifferenceListScreen)
            table = app.screen.query_one("#difference-table", DataTable)
            assert table.row_count == 8

            await pilot.press("escape")
            await pilot.pause()
            assert isinstance(app.screen, ComparisonScreen)

        run_app(ScreenHarness(make_comparison_screen(left_person, right_person)), scenario)

    def test_line_diff(self, left_person, right_person):
        """v aligns the lines in the background and shows them."""

        async def scenario(app, pilot):
            screen = app.screen
            screen.TASK_COMPLETION_DELAY = 0
            await pilot.press("v")
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert isinstance(app.screen, LineDiffScreen)
            table = app.screen.query_one("#line-diff-table", DataTable)
            assert table.row_count == len(app.screen.rows)

        run_app(ScreenHarness(make_comparison_screen(left_person, right_person)), scenario)

    def test_primitive_documents(self):
        """Primitive documents are shown on the tree root."""

        async def scenario(app, pilot):
            tree = app.screen.query_one("#left-tree", JsonTreePanel)
            assert str(tree.root.label) == "left.json: 1"
            assert tree.root.label.style == "bold yellow"

        run_app(ScreenHarness(make_comparison_screen(1, 2)), scenario)

    def test_key_named_root(self):
        """An added key named root is green; the tree root only holds a change."""

        async def scenario(app, pilot):
            tree = app.screen.query_one("#right-tree", JsonTreePanel)
            assert tree._path_nodes["root"].label.style == "bold green"
            assert tree.root.label.style == "bold yellow"

        run_app(ScreenHarness(make_comparison_screen({}, {"root": {"x": 1}})), scenario)
