"""Exceptions raised by the diff engine and the document loaders."""

from __future__ import annotations


class MalformedInputError(ValueError):
    """Raised when a value handed to the engine is not a JSON value.

    Attributes:
        path: Location of the offending value ("root" for the top level).
        value: The offending value.
    """

    def __init__(self, path: str, value: object, reason: str | None = None) -> None:
        self.path = path
        self.value = value
        detail = reason or f"unsupported type {type(value).__name__}"
        super().__init__(f"Not a JSON value at {path}: {detail}")


class InvalidInputError(ValueError):
    """Raised by loaders when a document cannot be read or parsed.

    Attributes:
        source: File path or label of the document.
        reason: Short human readable reason (e.g. "File not found").
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{reason}: {source}")
