"""Reusable screen components for the TUI application."""

from json_compare.tui.screens.progress import (
    AligningScreen,
    ComparingScreen,
    ProgressScreen,
)

__all__ = [
    "ProgressScreen",
    "ComparingScreen",
    "AligningScreen",
]
