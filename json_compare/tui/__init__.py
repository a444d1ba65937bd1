"""
TUI JSON Comparison Viewer.

A Textual-based terminal UI showing two JSON documents side by side with
their structural differences highlighted.

Usage:
    python -m json_compare.tui.app old.json new.json

Components:
    - JsonDiffApp: Main application class
    - ComparisonScreen: Side-by-side tree view
    - DifferenceListScreen: Table of all differences
    - LineDiffScreen: Aligned line diff of the pretty-printed documents
    - JsonTreePanel: Synchronized JSON tree widget
    - build_diff_map: Difference to tree highlighting map
"""
