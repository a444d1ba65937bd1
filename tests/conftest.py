"""Pytest configuration and shared fixtures for json_compare tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest


@pytest.fixture
def left_person() -> dict[str, Any]:
    """Return the left side of the person example."""
    return {
        "name": "John Doe",
        "age": 30,
        "city": "New York",
        "hobbies": ["reading", "swimming"],
        "address": {
            "street": "123 Main St",
            "zip": "10001",
        },
        "isEmployed": True,
        "salary": None,
    }


@pytest.fixture
def right_person() -> dict[str, Any]:
    """Return the right side of the person example."""
    return {
        "name": "John Doe",
        "age": 31,
        "city": "San Francisco",
        "hobbies": ["reading", "cycling", "photography"],
        "address": {
            "street": "456 Oak Ave",
            "zip": "10001",
            "country": "USA",
        },
        "isEmployed": False,
        "salary": 75000,
    }


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Return a helper that writes a value as JSON into tmp_path."""

    def _write(name: str, value: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(value, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_text(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes raw text into tmp_path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
