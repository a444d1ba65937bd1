"""Tests for the structural comparator."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from json_compare.engine import (
    ABSENT,
    ROOT_PATH,
    CompareOptions,
    Difference,
    DiffKind,
    JsonKind,
    MalformedInputError,
    StructuralComparator,
    TypedValue,
    compare,
    compare_documents,
    json_kind,
    validate_json_value,
)


def paths(result) -> list[str]:
    return [diff.path for diff in result]


class TestIdentity:
    """Comparing a value with itself finds nothing."""

    @pytest.mark.parametrize(
        "value",
        [
            None,
            True,
            0,
            -2.5,
            "",
            "text",
            [],
            {},
            [1, [2, [3, {"a": None}]]],
            {"a": {"b": [1, 2, {"c": "d"}]}, "e": False},
        ],
    )
    def test_identical_values(self, value):
        result = compare(value, value)
        assert result.differences == ()
        assert result.identical
        assert not result.truncated
        assert not result.sampled

    def test_equal_copies(self, left_person):
        copy = {**left_person, "hobbies": list(left_person["hobbies"])}
        assert compare(left_person, copy).identical

    def test_int_and_float_with_same_value_are_equal(self):
        """1 and 1.0 are the same JSON number."""
        assert compare({"n": 1}, {"n": 1.0}).identical


class TestPathFormat:
    """Paths use dotted members and bracketed indices."""

    def test_nested_path(self):
        result = compare({"a": {"b": [1, 2]}}, {"a": {"b": [1, 3]}})

        assert result.differences == (
            Difference("a.b[1]", DiffKind.VALUE_CHANGED, 2, 3),
        )

    def test_top_level_key_has_no_prefix(self):
        result = compare({"x": 1}, {"x": 2})
        assert paths(result) == ["x"]

    def test_top_level_index_has_no_prefix(self):
        result = compare([1, 2], [1, 5])
        assert paths(result) == ["[1]"]

    def test_array_in_array(self):
        result = compare([[1, 2]], [[1, 9]])
        assert paths(result) == ["[0][1]"]

    def test_member_of_array_item(self):
        result = compare({"items": [{"id": 1}]}, {"items": [{"id": 2}]})
        assert paths(result) == ["items[0].id"]

    def test_root_primitive_change_uses_root_path(self):
        """A changed primitive document reports the root path."""
        result = compare(1, 2)
        assert result.differences == (Difference(ROOT_PATH, DiffKind.VALUE_CHANGED, 1, 2),)

    def test_root_type_change_uses_root_path(self):
        result = compare([1], {"a": 1})

        assert len(result) == 1
        diff = result.differences[0]
        assert diff.path == "root"
        assert diff.kind is DiffKind.TYPE_CHANGED
        assert diff.left == TypedValue(JsonKind.ARRAY, [1])
        assert diff.right == TypedValue(JsonKind.OBJECT, {"a": 1})


class TestAddedRemoved:
    """Keys and indices present on one side only."""

    def test_added_key(self):
        result = compare({"x": 1}, {"x": 1, "y": 2})

        assert result.differences == (Difference("y", DiffKind.ADDED, right=2),)
        assert result.differences[0].left is ABSENT

    def test_removed_key(self):
        result = compare({"x": 1, "y": 2}, {"x": 1})

        assert result.differences == (Difference("y", DiffKind.REMOVED, left=2),)
        assert result.differences[0].right is ABSENT

    def test_array_grows(self):
        result = compare([1, 2], [1, 2, 3])
        assert result.differences == (Difference("[2]", DiffKind.ADDED, right=3),)

    def test_array_shrinks(self):
        result = compare([1, 2, 3, 4], [1, 2])
        assert result.differences == (
            Difference("[2]", DiffKind.REMOVED, left=3),
            Difference("[3]", DiffKind.REMOVED, left=4),
        )

    def test_added_container_is_reported_once(self):
        """An added object is one difference, not one per member."""
        result = compare({}, {"a": {"b": {"c": 1}}})

        assert len(result) == 1
        assert result.differences[0].right == {"b": {"c": 1}}

    def test_added_null_value(self):
        result = compare({}, {"a": None})
        assert result.differences == (Difference("a", DiffKind.ADDED, right=None),)

    def test_arrays_are_compared_by_position(self):
        """Arrays are not reordered before comparing."""
        result = compare(["a", "b"], ["b", "a"])
        assert paths(result) == ["[0]", "[1]"]


class TestTypeChanges:
    """Kind mismatches between non-null values."""

    def test_number_vs_string(self):
        result = compare({"v": 30}, {"v": "30"})

        assert result.differences == (
            Difference(
                "v",
                DiffKind.TYPE_CHANGED,
                TypedValue(JsonKind.NUMBER, 30),
                TypedValue(JsonKind.STRING, "30"),
            ),
        )

    def test_boolean_is_not_a_number(self):
        result = compare({"v": True}, {"v": 1})

        diff = result.differences[0]
        assert diff.kind is DiffKind.TYPE_CHANGED
        assert diff.left.kind is JsonKind.BOOLEAN
        assert diff.right.kind is JsonKind.NUMBER

    def test_array_vs_object_stops_descending(self):
        """A container type change is reported once, without children."""
        result = compare({"v": [1, 2]}, {"v": {"0": 1}})

        assert len(result) == 1
        assert result.differences[0].kind is DiffKind.TYPE_CHANGED


class TestNullHandling:
    """Null on either side is a value change, never a type change."""

    def test_null_to_number(self):
        result = compare({"salary": None}, {"salary": 75000})
        assert result.differences == (
            Difference("salary", DiffKind.VALUE_CHANGED, None, 75000),
        )

    def test_object_to_null(self):
        result = compare({"a": {"b": 1}}, {"a": None})
        assert result.differences == (
            Difference("a", DiffKind.VALUE_CHANGED, {"b": 1}, None),
        )

    def test_both_null(self):
        assert compare({"a": None}, {"a": None}).identical

    def test_root_null(self):
        result = compare(None, [])
        assert result.differences == (Difference("root", DiffKind.VALUE_CHANGED, None, []),)


class TestPersonExample:
    """The person example from the viewer's demo data."""

    def test_differences_in_traversal_order(self, left_person, right_person):
        """Differences come out in depth-first key order."""
        result = compare(left_person, right_person)

        assert paths(result) == [
            "age",
            "city",
            "hobbies[1]",
            "hobbies[2]",
            "address.street",
            "address.country",
            "isEmployed",
            "salary",
        ]

    def test_kinds(self, left_person, right_person):
        result = compare(left_person, right_person)
        kinds = {diff.path: diff.kind for diff in result}

        assert kinds["hobbies[2]"] is DiffKind.ADDED
        assert kinds["address.country"] is DiffKind.ADDED
        assert kinds["isEmployed"] is DiffKind.VALUE_CHANGED
        assert kinds["salary"] is DiffKind.VALUE_CHANGED

    def test_items_processed(self, left_person, right_person):
        # root + 7 members + 3 hobbies + 3 address members
        assert compare(left_person, right_person).items_processed == 14

    def test_right_only_keys_come_after_left_keys(self):
        """Keys only in the right object follow the shared keys."""
        result = compare({"b": 1, "a": 1}, {"z": 1, "a": 2, "b": 2})
        assert paths(result) == ["b", "a", "z"]


class TestSymmetry:
    """Swapping the arguments swaps the payloads but keeps the paths."""

    KIND_SWAP = {
        DiffKind.ADDED: DiffKind.REMOVED,
        DiffKind.REMOVED: DiffKind.ADDED,
        DiffKind.VALUE_CHANGED: DiffKind.VALUE_CHANGED,
        DiffKind.TYPE_CHANGED: DiffKind.TYPE_CHANGED,
    }

    @pytest.mark.parametrize(
        "left,right",
        [
            ({"x": 1}, {"x": 1, "y": 2}),
            ({"v": 30}, {"v": "30"}),
            ([1, 2], [1, 2, 3]),
            ({"a": [1, {"b": None}]}, {"a": [2, {"b": "x"}, 3], "c": True}),
        ],
    )
    def test_reversed_comparison(self, left: Any, right: Any):
        """Swapping the inputs swaps added and removed."""
        forward = {diff.path: diff for diff in compare(left, right)}
        backward = {diff.path: diff for diff in compare(right, left)}

        assert forward.keys() == backward.keys()
        for path, diff in forward.items():
            reverse = backward[path]
            assert reverse.kind is self.KIND_SWAP[diff.kind]
            assert reverse.left == diff.right
            assert reverse.right == diff.left

    def test_person_example(self, left_person, right_person):
        forward = set(paths(compare(left_person, right_person)))
        backward = set(paths(compare(right_person, left_person)))
        assert forward == backward


class TestDifferenceCap:
    """The cap bounds the collected differences and flags truncation."""

    @staticmethod
    def many_keys(count: int, value: int) -> dict[str, int]:
        return {f"k{i}": value for i in range(count)}

    def test_cap_reached(self):
        """The cap keeps exactly max_differences records."""
        result = compare(self.many_keys(25, 0), self.many_keys(25, 1), max_differences=10)

        assert len(result) == 10
        assert result.truncated
        assert not result.identical
        assert paths(result) == [f"k{i}" for i in range(10)]

    def test_exactly_cap_differences_is_not_truncated(self):
        """Reaching the cap without exceeding it is a complete result."""
        result = compare(self.many_keys(10, 0), self.many_keys(10, 1), max_differences=10)

        assert len(result) == 10
        assert not result.truncated

    def test_unlimited(self):
        result = compare(self.many_keys(50, 0), self.many_keys(50, 1), max_differences=None)

        assert len(result) == 50
        assert not result.truncated

    def test_default_cap_is_recorded(self):
        assert compare(1, 1).max_differences == 10_000

    def test_cap_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="json_compare.engine.comparator"):
            compare([1, 2, 3], [4, 5, 6], max_differences=1)

        assert "Difference cap of 1 reached" in caplog.text

    def test_negative_cap_rejected(self):
        with pytest.raises(ValueError):
            StructuralComparator(max_differences=-1)


class TestSampling:
    """Sampling is off by default and flagged when applied."""

    def test_exhaustive_by_default(self):
        """Without a threshold every element is compared."""
        left = list(range(2000))
        right = list(left)
        right[1] = -1

        result = compare(left, right)

        assert paths(result) == ["[1]"]
        assert not result.sampled

    def test_large_array_is_sampled(self):
        """Containers above the threshold are visited with a stride."""
        left = list(range(10))
        right = list(left)
        right[1] = -1  # not on the stride
        right[4] = -1  # on the stride

        result = compare(left, right, sample_threshold=5)

        assert result.sampled
        assert paths(result) == ["[4]"]
        assert not result.identical

    def test_small_containers_not_sampled(self):
        result = compare({"a": 1, "b": 2}, {"a": 1, "b": 3}, sample_threshold=5)

        assert not result.sampled
        assert paths(result) == ["b"]

    def test_sampling_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="json_compare.engine.comparator"):
            compare(list(range(10)), list(range(10)), sample_threshold=3)

        assert "Sampling applied" in caplog.text

    def test_invalid_threshold_rejected(self):
        with pytest.raises(ValueError):
            StructuralComparator(sample_threshold=0)


class TestProgress:
    """Progress callback receives the running item count."""

    def test_progress_calls(self):
        """The callback fires every progress_interval items."""
        calls: list[int] = []
        comparator = StructuralComparator(progress_callback=calls.append, progress_interval=2)

        comparator.compare({"a": 1, "b": 2, "c": 3}, {"a": 1, "b": 2, "c": 3})

        # every 2 items, then once at the end
        assert calls == [2, 4, 4]
        assert comparator.items_processed == 4

    def test_comparator_is_reusable(self):
        """Each run starts from a fresh accumulator."""
        comparator = StructuralComparator()

        first = comparator.compare({"a": 1}, {"a": 2})
        second = comparator.compare([1], [1])

        assert len(first) == 1
        assert second.identical
        assert comparator.items_processed == 2

    def test_items_processed_before_any_run(self):
        assert StructuralComparator().items_processed == 0

    def test_live_count_during_run(self):
        """items_processed follows the running comparison."""
        seen: list[tuple[int, int]] = []
        comparator = StructuralComparator(progress_interval=1)
        comparator.progress_callback = lambda n: seen.append((n, comparator.items_processed))

        comparator.compare([1, 2, 3], [1, 2, 4])

        assert seen
        assert all(count == live for count, live in seen)

    def test_finished_run_is_released(self):
        """The comparator keeps only the item count once compare returns."""
        comparator = StructuralComparator()

        result = comparator.compare({"k": "x" * 1000}, {})

        assert len(result) == 1
        assert comparator._current_run is None
        assert comparator.items_processed == result.items_processed
        kept = [
            value for value in vars(comparator).values() if isinstance(value, (list, tuple, dict))
        ]
        assert kept == []

    def test_failed_run_is_released(self):
        """A callback error does not leave the run attached."""

        def fail(count: int) -> None:
            raise RuntimeError("stop")

        comparator = StructuralComparator(progress_callback=fail, progress_interval=1)

        with pytest.raises(RuntimeError):
            comparator.compare([1, 2], [1, 3])

        assert comparator._current_run is None
        assert comparator.items_processed >= 1


class TestMalformedInput:
    """Non-JSON values are rejected before comparing."""

    @pytest.mark.parametrize(
        "value",
        [
            {"a": {1, 2}},
            {"a": (1, 2)},
            [float("nan")],
            {"x": float("inf")},
            {"a": object()},
            b"bytes",
        ],
    )
    def test_rejected_values(self, value):
        with pytest.raises(MalformedInputError):
            compare(value, value)

    def test_non_string_key(self):
        with pytest.raises(MalformedInputError) as exc_info:
            compare({"outer": {1: "x"}}, {})

        assert exc_info.value.path == "outer"
        assert "not a string" in str(exc_info.value)

    def test_error_carries_path(self):
        """The error message names where the bad value sits."""
        with pytest.raises(MalformedInputError) as exc_info:
            compare({}, {"a": [1, {2}]})

        assert exc_info.value.path == "a[1]"

    def test_right_side_checked_even_when_unreached(self):
        """Both inputs are validated before comparing."""
        # The bad value sits below a type change that stops descending
        with pytest.raises(MalformedInputError):
            compare({"a": 1}, {"a": [set()]})

    def test_is_value_error(self):
        assert issubclass(MalformedInputError, ValueError)


class TestJsonKind:
    """Classification of Python values."""

    @pytest.mark.parametrize(
        "value,kind",
        [
            (None, JsonKind.NULL),
            (False, JsonKind.BOOLEAN),
            (0, JsonKind.NUMBER),
            (1.5, JsonKind.NUMBER),
            ("", JsonKind.STRING),
            ([], JsonKind.ARRAY),
            ({}, JsonKind.OBJECT),
        ],
    )
    def test_kinds(self, value, kind):
        assert json_kind(value) is kind

    def test_container_flag(self):
        assert JsonKind.ARRAY.is_container
        assert JsonKind.OBJECT.is_container
        assert not JsonKind.STRING.is_container

    def test_validate_deeply_nested(self):
        """Validation walks very deep documents."""
        value: Any = "leaf"
        for _ in range(5000):
            value = [value]
        validate_json_value(value)


class TestDeepNesting:
    """Traversal does not depend on the recursion limit."""

    def test_deep_difference(self):
        """Differences far below the root are found without recursion errors."""
        left: Any = 1
        right: Any = 2
        for _ in range(3000):
            left = {"n": left}
            right = {"n": right}

        result = compare(left, right)

        assert len(result) == 1
        assert result.differences[0].path == ".".join(["n"] * 3000)


class TestSerialization:
    """Dictionary forms used by the JSON report."""

    def test_result_to_dict(self):
        result = compare({"v": 30, "x": 1}, {"v": "30", "y": 2})
        data = result.to_dict()

        assert data["summary"] == {
            "changed": 0,
            "added": 1,
            "removed": 1,
            "typeChanged": 1,
            "total": 3,
        }
        assert data["truncated"] is False
        assert data["sampled"] is False
        assert data["differences"] == [
            {
                "path": "v",
                "type": "type_change",
                "left": {"type": "number", "value": 30},
                "right": {"type": "string", "value": "30"},
            },
            {"path": "x", "type": "removed", "left": 1},
            {"path": "y", "type": "added", "right": 2},
        ]

    def test_null_payload_is_kept(self):
        data = Difference("a", DiffKind.VALUE_CHANGED, None, 1).to_dict()
        assert data == {"path": "a", "type": "value_change", "left": None, "right": 1}


class TestCompareDocuments:
    """compare_documents applies CompareOptions."""

    def test_options_are_applied(self):
        """Options from the CLI reach the comparator."""
        options = CompareOptions(max_differences=1)
        result = compare_documents([1, 2], [3, 4], options)

        assert len(result) == 1
        assert result.truncated

    def test_default_options(self, left_person, right_person):
        """Module-level compare_documents uses engine defaults."""
        assert len(compare_documents(left_person, right_person)) == 8
