"""
Structural comparison of two JSON values.

The comparator walks both values in lock-step and records every point where
they diverge. Comparison stops descending at the first divergence on a
branch: a changed value, a kind mismatch, or a key/index that exists on one
side only is reported once and its children are not inspected.

Difference categories:
    - value_change: same kind (or a null on either side), different value
    - type_change: both non-null but of different JSON kinds
    - added: key/index only present in the right value
    - removed: key/index only present in the left value

Path format:
    - object members: ``parent.key`` (bare ``key`` at the top level)
    - array elements: ``parent[3]`` (bare ``[3]`` at the top level)
    - the document root itself: ``root``

Traversal uses an explicit work stack instead of Python recursion so that
deeply nested documents cannot hit the interpreter recursion limit. Work items
are pushed in reverse so they pop in document order, which keeps the output
identical to a depth-first recursive walk.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Iterable

from json_compare.engine.errors import MalformedInputError
from json_compare.engine.types import (
    DEFAULT_MAX_DIFFERENCES,
    ROOT_PATH,
    CompareOptions,
    CompareResult,
    Difference,
    DiffKind,
    JsonKind,
    TypedValue,
)

logger = logging.getLogger(__name__)

# How often (in visited items) the progress callback fires by default
DEFAULT_PROGRESS_INTERVAL = 1000

# Work item tags
_VISIT = 0
_ADDED = 1
_REMOVED = 2


def json_kind(value: Any, path: str = ROOT_PATH) -> JsonKind:
    """Classify a Python value as one of the JSON kinds.

    ``bool`` is checked before numbers because it subclasses ``int``.

    Args:
        value: The value to classify.
        path: Location of the value, used in the error message.

    Returns:
        The JSON kind of the value.

    Raises:
        MalformedInputError: If the value is not JSON-representable.
    """
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise MalformedInputError(path, value, f"non-finite number {value!r}")
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise MalformedInputError(path, value)


def validate_json_value(value: Any, path: str = "") -> None:
    """Check that a whole tree consists of JSON values only.

    Args:
        value: Root of the tree to check.
        path: Path prefix of the root ("" for a document root).

    Raises:
        MalformedInputError: On the first value that is not JSON, or on an
            object key that is not a string.
    """
    stack: list[tuple[Any, str]] = [(value, path)]
    while stack:
        current, current_path = stack.pop()
        kind = json_kind(current, current_path or ROOT_PATH)
        if kind is JsonKind.OBJECT:
            for key, item in current.items():
                if not isinstance(key, str):
                    raise MalformedInputError(
                        current_path or ROOT_PATH,
                        current,
                        f"object key {key!r} is not a string",
                    )
                stack.append((item, _member_path(current_path, key)))
        elif kind is JsonKind.ARRAY:
            for idx, item in enumerate(current):
                stack.append((item, _index_path(current_path, idx)))


def _member_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _index_path(path: str, idx: int) -> str:
    return f"{path}[{idx}]"


class _ComparisonRun:
    """Accumulator owned by a single top-level comparison."""

    def __init__(self, comparator: StructuralComparator) -> None:
        self._max_differences = comparator.max_differences
        self._sample_threshold = comparator.sample_threshold
        self._progress_callback = comparator.progress_callback
        self._progress_interval = comparator.progress_interval
        self.differences: list[Difference] = []
        self.truncated = False
        self.sampled = False
        self.items_processed = 0

    def run(self, left: Any, right: Any) -> None:
        stack: list[tuple[int, str, Any, Any]] = [(_VISIT, "", left, right)]

        while stack and not self.truncated:
            tag, path, left_value, right_value = stack.pop()
            self._tick()

            if tag == _ADDED:
                self._emit(Difference(path, DiffKind.ADDED, right=right_value))
            elif tag == _REMOVED:
                self._emit(Difference(path, DiffKind.REMOVED, left=left_value))
            else:
                children = self._visit(path, left_value, right_value)
                if children:
                    stack.extend(reversed(children))

        if self._progress_callback is not None:
            self._progress_callback(self.items_processed)

    def _visit(
        self, path: str, left: Any, right: Any
    ) -> list[tuple[int, str, Any, Any]] | None:
        """Compare one pair and return child work items, if any."""
        # Null on either side: only identical nulls match
        if left is None or right is None:
            if not (left is None and right is None):
                self._emit(
                    Difference(path or ROOT_PATH, DiffKind.VALUE_CHANGED, left, right)
                )
            return None

        left_kind = json_kind(left, path or ROOT_PATH)
        right_kind = json_kind(right, path or ROOT_PATH)

        if left_kind is not right_kind:
            self._emit(
                Difference(
                    path or ROOT_PATH,
                    DiffKind.TYPE_CHANGED,
                    TypedValue(left_kind, left),
                    TypedValue(right_kind, right),
                )
            )
            return None

        if left_kind is JsonKind.ARRAY:
            return self._array_children(path, left, right)
        if left_kind is JsonKind.OBJECT:
            return self._object_children(path, left, right)

        if left != right:
            self._emit(Difference(path or ROOT_PATH, DiffKind.VALUE_CHANGED, left, right))
        return None

    def _array_children(
        self, path: str, left: list[Any], right: list[Any]
    ) -> list[tuple[int, str, Any, Any]]:
        left_len = len(left)
        right_len = len(right)
        children: list[tuple[int, str, Any, Any]] = []

        for idx in self._sample(range(max(left_len, right_len)), path):
            item_path = _index_path(path, idx)
            if idx >= left_len:
                children.append((_ADDED, item_path, None, right[idx]))
            elif idx >= right_len:
                children.append((_REMOVED, item_path, left[idx], None))
            else:
                children.append((_VISIT, item_path, left[idx], right[idx]))
        return children

    def _object_children(
        self, path: str, left: dict[str, Any], right: dict[str, Any]
    ) -> list[tuple[int, str, Any, Any]]:
        # Left keys in their order, then keys only present on the right
        keys = list(left)
        keys.extend(key for key in right if key not in left)
        children: list[tuple[int, str, Any, Any]] = []

        for key in self._sample(keys, path):
            key_path = _member_path(path, key)
            if key not in left:
                children.append((_ADDED, key_path, None, right[key]))
            elif key not in right:
                children.append((_REMOVED, key_path, left[key], None))
            else:
                children.append((_VISIT, key_path, left[key], right[key]))
        return children

    def _sample(self, items: range | list[str], path: str) -> Iterable[Any]:
        """Thin out a large container when sampling is enabled."""
        threshold = self._sample_threshold
        size = len(items)
        if threshold is None or size <= threshold:
            return items

        stride = math.ceil(size / threshold)
        if not self.sampled:
            logger.warning(
                "Sampling applied at %s: %d entries compared every %d, "
                "comparison is not exhaustive",
                path or ROOT_PATH,
                size,
                stride,
            )
        self.sampled = True
        return items[::stride]

    def _emit(self, difference: Difference) -> None:
        if (
            self._max_differences is not None
            and len(self.differences) >= self._max_differences
        ):
            self.truncated = True
            logger.warning(
                "Difference cap of %d reached, remaining differences dropped",
                self._max_differences,
            )
            return
        self.differences.append(difference)

    def _tick(self) -> None:
        self.items_processed += 1
        if (
            self._progress_callback is not None
            and self.items_processed % self._progress_interval == 0
        ):
            self._progress_callback(self.items_processed)


class StructuralComparator:
    """Recursive structural comparator for JSON values.

    One instance can be reused for many comparisons; each call to
    ``compare()`` owns a fresh accumulator that is discarded once the result
    has been built.

    Attributes:
        max_differences: Stop collecting after this many differences
            (None = unlimited). The result is flagged as truncated when
            further differences were found.
        sample_threshold: When set, arrays and objects larger than this are
            compared at a stride instead of exhaustively.
        progress_callback: Optional callable receiving the number of items
            processed so far, invoked every ``progress_interval`` items and
            once at the end.
        progress_interval: Items between progress callbacks.

    Examples:
        >>> comparator = StructuralComparator()
        >>> result = comparator.compare({"a": {"b": [1, 2]}}, {"a": {"b": [1, 3]}})
        >>> result.differences[0].path
        'a.b[1]'
    """

    def __init__(
        self,
        max_differences: int | None = DEFAULT_MAX_DIFFERENCES,
        sample_threshold: int | None = None,
        progress_callback: Callable[[int], None] | None = None,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    ) -> None:
        if max_differences is not None and max_differences < 0:
            raise ValueError("max_differences must be >= 0 or None")
        if sample_threshold is not None and sample_threshold < 1:
            raise ValueError("sample_threshold must be >= 1 or None")
        if progress_interval < 1:
            raise ValueError("progress_interval must be >= 1")

        self.max_differences = max_differences
        self.sample_threshold = sample_threshold
        self.progress_callback = progress_callback
        self.progress_interval = progress_interval
        self._current_run: _ComparisonRun | None = None
        self._last_items_processed = 0

    @classmethod
    def from_options(
        cls,
        options: CompareOptions,
        progress_callback: Callable[[int], None] | None = None,
    ) -> StructuralComparator:
        """Build a comparator from CLI/TUI options."""
        return cls(
            max_differences=options.max_differences,
            sample_threshold=options.sample_threshold,
            progress_callback=progress_callback,
        )

    @property
    def items_processed(self) -> int:
        """Items processed by the running (or last finished) comparison."""
        run = self._current_run
        if run is None:
            return self._last_items_processed
        return run.items_processed

    def compare(self, left: Any, right: Any) -> CompareResult:
        """Compare two JSON values.

        Args:
            left: The left (original) value.
            right: The right (new) value.

        Returns:
            A CompareResult holding the differences in traversal order and
            the truncation/sampling flags.

        Raises:
            MalformedInputError: If either value is not a JSON value.
        """
        validate_json_value(left)
        validate_json_value(right)

        run = _ComparisonRun(self)
        self._current_run = run
        try:
            run.run(left, right)
        finally:
            # Only the count is kept once the run is over
            self._last_items_processed = run.items_processed
            self._current_run = None

        logger.debug(
            "Compared %d items, %d differences (truncated=%s, sampled=%s)",
            run.items_processed,
            len(run.differences),
            run.truncated,
            run.sampled,
        )

        return CompareResult(
            differences=tuple(run.differences),
            truncated=run.truncated,
            sampled=run.sampled,
            items_processed=run.items_processed,
            max_differences=self.max_differences,
        )


def compare(
    left: Any,
    right: Any,
    *,
    max_differences: int | None = DEFAULT_MAX_DIFFERENCES,
    sample_threshold: int | None = None,
    progress_callback: Callable[[int], None] | None = None,
) -> CompareResult:
    """Compare two JSON values with a throwaway comparator.

    See StructuralComparator for the meaning of the keyword arguments.
    """
    comparator = StructuralComparator(
        max_differences=max_differences,
        sample_threshold=sample_threshold,
        progress_callback=progress_callback,
    )
    return comparator.compare(left, right)


def compare_documents(
    left: Any, right: Any, options: CompareOptions | None = None
) -> CompareResult:
    """Compare two parsed documents using CompareOptions."""
    return StructuralComparator.from_options(options or CompareOptions()).compare(
        left, right
    )
