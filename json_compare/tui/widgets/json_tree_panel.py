"""
JSON Tree Panel widget for displaying a JSON document as a tree.

Renders objects, arrays and primitive values as tree nodes, colours nodes by
their diff category and keeps two panels in step (scroll position and node
expansion) when synchronisation is enabled.
"""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual.message import Message
from textual.widgets import Tree
from textual.widgets.tree import TreeNode

from json_compare.tui.widgets.diff_indicator import DIFF_STYLES, get_node_diff_category


# Maximum depth for recursive tree operations to prevent stack overflow
MAX_TREE_DEPTH = 100

# Maximum string length to process before truncation (prevents memory issues with huge strings)
MAX_STRING_PROCESS_LENGTH = 10000

# Strings longer than this are shortened in node labels
MAX_LABEL_STRING_LENGTH = 50


def format_primitive(value: Any) -> str:
    """Render a primitive JSON value for a tree label.

    Strings are quoted with control characters escaped and shortened to
    MAX_LABEL_STRING_LENGTH characters.

    Examples:
        >>> format_primitive(None)
        'null'
        >>> format_primitive(True)
        'true'
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        process_str = value[:MAX_STRING_PROCESS_LENGTH]
        display_str = (
            process_str.replace("\\", "\\\\")
            .replace("\n", "\\n")
            .replace("\r", "\\r")
            .replace("\t", "\\t")
            .replace('"', '\\"')
        )
        if len(display_str) > MAX_LABEL_STRING_LENGTH:
            display_str = display_str[: MAX_LABEL_STRING_LENGTH - 3] + "..."
        return f'"{display_str}"'
    return str(value)


class JsonTreePanel(Tree[str]):
    """
    JSON tree widget with diff highlighting and synchronized navigation.

    Node label formats:
        - Objects: `{} key_name` (expandable)
        - Arrays: `[] key_name (N items)` (expandable)
        - Primitives: `"key": value` (leaf)

    Attributes:
        sync_enabled: Whether scroll/expansion synchronization is enabled.
    """

    class ScrollChanged(Message):
        """Posted when the vertical scroll position changes.

        Attributes:
            scroll_y: The vertical scroll position.
            panel_id: The ID of the panel that emitted this message.
        """

        def __init__(self, scroll_y: float, panel_id: str) -> None:
            self.scroll_y = scroll_y
            self.panel_id = panel_id
            super().__init__()

    class NodeToggled(Message):
        """Posted when a node is expanded or collapsed.

        Attributes:
            json_path: The JSON path of the node (e.g., "address.zip").
            expanded: Whether the node is now expanded.
            panel_id: The ID of the panel that emitted this message.
        """

        def __init__(self, json_path: str, expanded: bool, panel_id: str) -> None:
            self.json_path = json_path
            self.expanded = expanded
            self.panel_id = panel_id
            super().__init__()

    class ValueRequested(Message):
        """Posted when the user asks to see the full value of a node.

        Attributes:
            json_path: The JSON path of the node.
            node_key: The key name (e.g., "zip" or "[2]").
            node_value: The full original value (untruncated).
            panel_id: The ID of the panel that emitted this message.
        """

        def __init__(self, json_path: str, node_key: str, node_value: Any, panel_id: str) -> None:
            self.json_path = json_path
            self.node_key = node_key
            self.node_value = node_value
            self.panel_id = panel_id
            super().__init__()

    def __init__(
        self,
        label: str = "root",
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """
        Initialize the JSON tree panel.

        Args:
            label: The label for the root node.
            id: The widget ID.
            classes: CSS classes for the widget.
        """
        super().__init__(label, id=id, classes=classes)
        self.sync_enabled: bool = True
        self._diff_mode: bool = False
        self._diff_map: dict[str, str] = {}
        self._node_paths: dict[TreeNode[str], str] = {}
        self._node_data: dict[TreeNode[str], Any] = {}
        self._path_nodes: dict[str, TreeNode[str]] = {}
        self._base_labels: dict[TreeNode[str], str] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_json(self, data: Any, label: str = "root") -> None:
        """
        Load JSON data into the tree.

        Clears the existing tree and populates it with the provided value.
        The document itself is shown on the root node, named by label.

        Args:
            data: The JSON value to display.
            label: The name shown on the root node.
        """
        self.clear()
        self._node_paths.clear()
        self._node_data.clear()
        self._path_nodes.clear()
        self._base_labels.clear()
        self._add_json_recursive(self.root, data, label, json_path="", depth=0, at_root=True)
        self.root.expand()
        if self._diff_mode:
            self._apply_diff_highlighting()

    def _register(self, node: TreeNode[str], json_path: str, data: Any, label: str) -> None:
        self._node_paths[node] = json_path
        self._node_data[node] = data
        self._base_labels[node] = label
        self._path_nodes.setdefault(json_path, node)

    def _add_json_recursive(
        self,
        node: TreeNode[str],
        data: Any,
        key: str,
        json_path: str = "",
        depth: int = 0,
        at_root: bool = False,
    ) -> None:
        """
        Recursively add JSON data to the tree.

        Args:
            node: The parent tree node to add children to (the root itself
                when at_root is set).
            data: The JSON data to add.
            key: The key name ("[i]" for array items).
            json_path: The JSON path to this node (for diff highlighting).
            depth: Current recursion depth (used to prevent stack overflow).
            at_root: Whether data is the whole document.
        """
        if depth >= MAX_TREE_DEPTH:
            node.add_leaf(f"... (depth limit {MAX_TREE_DEPTH} reached)")
            return

        if isinstance(data, dict):
            self._add_object(node, data, key, json_path, depth, at_root)
        elif isinstance(data, list):
            self._add_array(node, data, key, json_path, depth, at_root)
        else:
            self._add_primitive(node, data, key, json_path, at_root)

    def _container_node(self, node: TreeNode[str], label: str, at_root: bool) -> TreeNode[str]:
        if at_root:
            node.set_label(Text(label))
            return node
        return node.add(Text(label), allow_expand=True)

    def _add_object(
        self,
        node: TreeNode[str],
        data: dict[str, Any],
        key: str,
        json_path: str,
        depth: int,
        at_root: bool,
    ) -> None:
        """Add a JSON object as an expandable `{} key` node."""
        label = f"{{}} {key}"
        child = self._container_node(node, label, at_root)
        self._register(child, json_path, data, label)

        for obj_key, obj_value in data.items():
            child_path = f"{json_path}.{obj_key}" if json_path else obj_key
            self._add_json_recursive(child, obj_value, obj_key, child_path, depth + 1)

    def _add_array(
        self,
        node: TreeNode[str],
        data: list[Any],
        key: str,
        json_path: str,
        depth: int,
        at_root: bool,
    ) -> None:
        """Add a JSON array as an expandable `[] key (N items)` node."""
        count = len(data)
        items_label = "item" if count == 1 else "items"
        label = f"[] {key} ({count} {items_label})"
        child = self._container_node(node, label, at_root)
        self._register(child, json_path, data, label)

        for idx, item in enumerate(data):
            child_path = f"{json_path}[{idx}]"
            self._add_json_recursive(child, item, f"[{idx}]", child_path, depth + 1)

    def _add_primitive(
        self,
        node: TreeNode[str],
        data: Any,
        key: str,
        json_path: str,
        at_root: bool,
    ) -> None:
        """Add a primitive JSON value as a `"key": value` leaf."""
        value_str = format_primitive(data)
        if at_root or key.startswith("["):
            label = f"{key}: {value_str}"
        else:
            label = f'"{key}": {value_str}'

        if at_root:
            node.set_label(Text(label))
            node.allow_expand = False
            self._register(node, json_path, data, label)
            return

        leaf = node.add_leaf(Text(label))
        self._register(leaf, json_path, data, label)

    # ------------------------------------------------------------------
    # Diff highlighting
    # ------------------------------------------------------------------

    @property
    def diff_mode(self) -> bool:
        """Whether diff highlighting is shown."""
        return self._diff_mode

    @diff_mode.setter
    def diff_mode(self, enabled: bool) -> None:
        self._diff_mode = enabled
        if enabled:
            self._apply_diff_highlighting()
        else:
            self.clear_diff_highlighting()

    def set_diff_map(self, diff_map: dict[str, str]) -> None:
        """Set the diff map and re-apply highlighting if it is shown.

        Args:
            diff_map: A dictionary mapping JSON paths to diff categories.
        """
        self._diff_map = diff_map
        if self._diff_mode:
            self._apply_diff_highlighting()

    def _apply_diff_highlighting(self) -> None:
        """Style every node label according to the diff map."""
        self._apply_diff_to_node(self.root, depth=0)

    def _apply_diff_to_node(self, node: TreeNode[str], depth: int = 0) -> bool:
        """Style a node and its children.

        A container that is itself unchanged but holds a difference somewhere
        below it is styled as changed, so collapsed branches still show that
        they contain differences.

        Returns:
            True if the node or any descendant differs.
        """
        if depth >= MAX_TREE_DEPTH:
            return False

        child_differs = False
        for child in node.children:
            if self._apply_diff_to_node(child, depth + 1):
                child_differs = True

        base_label = self._base_labels.get(node)
        if base_label is None:
            return child_differs

        category = get_node_diff_category(self._node_paths.get(node, ""), self._diff_map)
        if category == "unchanged" and child_differs:
            category = "changed"

        style = DIFF_STYLES[category]
        node.set_label(Text(base_label, style=style))
        return category != "unchanged"

    def clear_diff_highlighting(self) -> None:
        """Restore the plain labels of all nodes."""
        for node, base_label in self._base_labels.items():
            node.set_label(Text(base_label))

    # ------------------------------------------------------------------
    # Navigation and synchronization
    # ------------------------------------------------------------------

    def has_path(self, json_path: str) -> bool:
        """Check whether a node exists for a JSON path."""
        return json_path in self._path_nodes

    def select_path(self, json_path: str) -> bool:
        """Move the cursor to the node at a JSON path, expanding its parents.

        Args:
            json_path: Path of the node ("" for the root).

        Returns:
            True if the node was found.
        """
        node = self._path_nodes.get(json_path)
        if node is None:
            return False

        parent = node.parent
        while parent is not None:
            parent.expand()
            parent = parent.parent

        # Line numbers are only known once the expanded tree has been rebuilt
        self.call_after_refresh(self._move_to_node, node)
        return True

    def _move_to_node(self, node: TreeNode[str]) -> None:
        self.move_cursor(node)
        self.scroll_to_node(node, animate=False)

    def watch_scroll_y(self, old_value: float, new_value: float) -> None:
        """Emit ScrollChanged whenever the tree scrolls vertically."""
        super().watch_scroll_y(old_value, new_value)
        if self.sync_enabled and self.id and old_value != new_value:
            self.post_message(self.ScrollChanged(new_value, self.id))

    def sync_scroll_to(self, scroll_y: float) -> None:
        """Match the scroll position of another panel.

        Args:
            scroll_y: The target vertical scroll position.
        """
        if self.sync_enabled and self.scroll_y != scroll_y:
            self.scroll_to(y=scroll_y, animate=False)

    def on_tree_node_expanded(self, event: Tree.NodeExpanded[str]) -> None:
        """Report expansion so the other panel can follow."""
        self._post_toggle(event.node, expanded=True)

    def on_tree_node_collapsed(self, event: Tree.NodeCollapsed[str]) -> None:
        """Report collapse so the other panel can follow."""
        self._post_toggle(event.node, expanded=False)

    def _post_toggle(self, node: TreeNode[str], expanded: bool) -> None:
        if not self.sync_enabled or not self.id or node not in self._node_paths:
            return
        self.post_message(self.NodeToggled(self._node_paths[node], expanded, self.id))

    def sync_node_toggle(self, json_path: str, expanded: bool) -> None:
        """Match the expansion state of a node in another panel.

        Nodes already in the requested state are left alone, which stops
        the two panels from echoing the change back and forth.

        Args:
            json_path: The JSON path of the node to toggle.
            expanded: Whether the node should be expanded.
        """
        if not self.sync_enabled:
            return

        node = self._path_nodes.get(json_path)
        if node is None or node.is_expanded == expanded:
            return
        if expanded:
            node.expand()
        else:
            node.collapse()

    # ------------------------------------------------------------------
    # Node values
    # ------------------------------------------------------------------

    def get_node_data(self, node: TreeNode[str]) -> tuple[str, Any]:
        """Get the key and original value for a node.

        Args:
            node: The tree node to get data for.

        Returns:
            A tuple of (key, value) where the key is the last segment of
            the node's path and the value is the original untruncated data.
        """
        value = self._node_data.get(node)
        json_path = self._node_paths.get(node, "")

        if not json_path:
            key = str(self._base_labels.get(node, node.label))
        elif json_path.endswith("]"):
            key = json_path[json_path.rfind("["):]
        elif "." in json_path:
            key = json_path.rsplit(".", 1)[-1]
        else:
            key = json_path

        return (key, value)

    def emit_value_requested(self) -> None:
        """Emit a ValueRequested message for the node under the cursor."""
        node = self.cursor_node
        if node is None or node not in self._node_paths or not self.id:
            return

        key, value = self.get_node_data(node)
        self.post_message(
            self.ValueRequested(
                json_path=self._node_paths[node],
                node_key=key,
                node_value=value,
                panel_id=self.id,
            )
        )
