"""
Data types shared by the diff engine, reporters and the TUI.

JSON values themselves are plain Python objects as produced by ``json.loads``
(``None``, ``bool``, ``int``/``float``, ``str``, ``list``, ``dict``). The
records defined here describe what the engine finds out about them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator


DEFAULT_MAX_DIFFERENCES = 10_000
"""Default cap on the number of differences collected in one comparison."""

DEFAULT_MAX_VALUE_LENGTH = 200
"""Default length above which reporters truncate stringified payloads."""

ROOT_PATH = "root"
"""Path token used for a difference found at the document root."""


class JsonKind(Enum):
    """The closed set of JSON value kinds."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def is_container(self) -> bool:
        return self in (JsonKind.ARRAY, JsonKind.OBJECT)


class DiffKind(Enum):
    """Category of a single structural difference.

    The enum values are the wire names used in JSON reports.
    """

    VALUE_CHANGED = "value_change"
    TYPE_CHANGED = "type_change"
    ADDED = "added"
    REMOVED = "removed"

    @property
    def label(self) -> str:
        """Human readable label used by text reports."""
        return DIFF_KIND_LABELS[self]


DIFF_KIND_LABELS: dict[DiffKind, str] = {
    DiffKind.VALUE_CHANGED: "Value changed",
    DiffKind.TYPE_CHANGED: "Type changed",
    DiffKind.ADDED: "Added in right",
    DiffKind.REMOVED: "Removed from right",
}


class RowKind(Enum):
    """Classification of one row of the side-by-side line diff."""

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


class _Absent:
    """Marker for a payload side that does not exist.

    ``None`` cannot be used because it is the JSON ``null`` value.
    """

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()


@dataclass(frozen=True)
class TypedValue:
    """A payload tagged with its JSON kind, used by type changes."""

    kind: JsonKind
    value: Any

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "value": self.value}


@dataclass(frozen=True)
class Difference:
    """One discrepancy between the left and right document.

    Attributes:
        path: Location of the discrepancy, e.g. ``address.zip`` or
            ``hobbies[2]``; ``root`` for the document root.
        kind: What kind of discrepancy this is.
        left: Left payload. ``ABSENT`` for ``ADDED`` differences, a
            ``TypedValue`` for ``TYPE_CHANGED``.
        right: Right payload. ``ABSENT`` for ``REMOVED`` differences, a
            ``TypedValue`` for ``TYPE_CHANGED``.
    """

    path: str
    kind: DiffKind
    left: Any = ABSENT
    right: Any = ABSENT

    @property
    def has_left(self) -> bool:
        return self.left is not ABSENT

    @property
    def has_right(self) -> bool:
        return self.right is not ABSENT

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict, omitting absent sides."""
        data: dict[str, Any] = {"path": self.path, "type": self.kind.value}
        for side in ("left", "right"):
            value = getattr(self, side)
            if value is ABSENT:
                continue
            data[side] = value.to_dict() if isinstance(value, TypedValue) else value
        return data


@dataclass(frozen=True)
class DiffSummary:
    """Counts of differences per category."""

    changed: int = 0
    added: int = 0
    removed: int = 0
    type_changed: int = 0

    @property
    def total(self) -> int:
        return self.changed + self.added + self.removed + self.type_changed

    def to_dict(self) -> dict[str, int]:
        return {
            "changed": self.changed,
            "added": self.added,
            "removed": self.removed,
            "typeChanged": self.type_changed,
            "total": self.total,
        }


@dataclass(frozen=True)
class CompareResult:
    """Outcome of one structural comparison.

    Attributes:
        differences: Differences in traversal order.
        truncated: True when the difference cap was hit and further
            differences were dropped.
        sampled: True when sampling skipped part of a large container, so
            the comparison is not exhaustive.
        items_processed: Number of value pairs visited.
        max_differences: The cap that was in force.
    """

    differences: tuple[Difference, ...] = ()
    truncated: bool = False
    sampled: bool = False
    items_processed: int = 0
    max_differences: int | None = DEFAULT_MAX_DIFFERENCES

    def __iter__(self) -> Iterator[Difference]:
        return iter(self.differences)

    def __len__(self) -> int:
        return len(self.differences)

    def __bool__(self) -> bool:
        return bool(self.differences)

    @property
    def identical(self) -> bool:
        """True when no difference was found and nothing was skipped."""
        return not self.differences and not self.truncated and not self.sampled

    def summary(self) -> DiffSummary:
        from json_compare.engine.summary import summarize

        return summarize(self.differences)

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary().to_dict(),
            "truncated": self.truncated,
            "sampled": self.sampled,
            "itemsProcessed": self.items_processed,
            "differences": [diff.to_dict() for diff in self.differences],
        }


@dataclass(frozen=True)
class AlignedRow:
    """One row of the side-by-side line diff.

    Line numbers are 1-based positions in the pretty-printed text and are
    ``None`` on the side that has no line in this row.
    """

    left_line_number: int | None
    left_text: str
    right_line_number: int | None
    right_text: str
    kind: RowKind

    def to_dict(self) -> dict[str, Any]:
        return {
            "leftLineNumber": self.left_line_number,
            "leftText": self.left_text,
            "rightLineNumber": self.right_line_number,
            "rightText": self.right_text,
            "type": self.kind.value,
        }


@dataclass
class CompareOptions:
    """Settings handed from the CLI or TUI to the engine and reporters.

    Attributes:
        max_differences: Cap on collected differences (None = unlimited).
        sample_threshold: Container size above which sampling kicks in
            (None = always compare exhaustively).
        max_value_length: Payload length above which reports truncate
            (None = never truncate).
    """

    max_differences: int | None = DEFAULT_MAX_DIFFERENCES
    sample_threshold: int | None = None
    max_value_length: int | None = DEFAULT_MAX_VALUE_LENGTH
