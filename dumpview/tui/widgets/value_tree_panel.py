"""
Value Tree Panel widget for displaying a dumped Value as a tree.

Nodes are labelled by kind:
    - Objects: `{} key (N keys)` (expandable)
    - Arrays: `[] key (N items)` (expandable)
    - Strings: `key: "value"` (leaf)
    - Numbers: `key: 1.10` (leaf, original text)
    - Booleans / null: `key: true` / `key: null` (leaf)

Containers shallower than AUTO_EXPAND_DEPTH start expanded. Deeper ones get
their children only when first expanded, so arbitrarily deep or large dumps
cost nothing until the user opens them.
"""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Tree
from textual.widgets.tree import TreeNode

from dumpview.ingest.value_tree import Value, ValueKind

# Containers at a smaller depth are expanded when loaded
AUTO_EXPAND_DEPTH = 2

# Longest string shown inline in a leaf label
MAX_INLINE_STRING = 80

_SCALAR_STYLES = {
    ValueKind.NULL: "dim italic",
    ValueKind.BOOL: "magenta",
    ValueKind.NUMBER: "yellow",
    ValueKind.STRING: "green",
}


def format_scalar(value: Value, max_len: int = MAX_INLINE_STRING) -> str:
    """Render a scalar for a one-line label, escaping control characters."""
    if value.kind is not ValueKind.STRING:
        return value.text
    raw = str(value.scalar)
    shown = (
        raw[: max_len * 2]
        .replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace('"', '\\"')
    )
    if len(shown) > max_len:
        shown = shown[: max_len - 3] + "..."
    return f'"{shown}"'


def format_label(key: str | None, value: Value) -> Text:
    """Build the tree label for one value, dispatching on its kind."""
    if value.kind is ValueKind.OBJECT:
        noun = "key" if value.size == 1 else "keys"
        return Text.assemble(
            ("{} ", "bold"), (key or "", "cyan"), (f" ({value.size} {noun})", "dim")
        )
    if value.kind is ValueKind.ARRAY:
        noun = "item" if value.size == 1 else "items"
        return Text.assemble(
            ("[] ", "bold"), (key or "", "cyan"), (f" ({value.size} {noun})", "dim")
        )

    scalar = Text(format_scalar(value), style=_SCALAR_STYLES[value.kind])
    if key is None:
        return scalar
    return Text.assemble((key, "cyan"), ": ", scalar)


class ValueTreePanel(Tree[Value]):
    """Tree widget showing one dumped Value."""

    DEFAULT_CSS = """
    ValueTreePanel {
        background: $surface;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        label: str = "data",
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(label, id=id, classes=classes)
        self._unpopulated: set = set()

    def load_value(self, value: Value, label: str = "data") -> None:
        """Replace the tree contents with ``value``."""
        self.clear()
        self._unpopulated.clear()
        self.root.data = value

        if value.is_container:
            self.root.set_label(format_label(label, value))
            self._populate(self.root, value, depth=0)
        else:
            self.root.set_label(Text(label, style="cyan"))
            self.root.add_leaf(format_label(None, value), data=value)
        self.root.expand()

    def _populate(self, node: TreeNode[Value], value: Value, depth: int) -> None:
        if value.kind is ValueKind.OBJECT:
            children = value.items
        else:
            children = [(f"[{index}]", item) for index, item in enumerate(value.items)]

        for key, child in children:
            if not child.is_container:
                node.add_leaf(format_label(key, child), data=child)
                continue

            child_node = node.add(format_label(key, child), data=child, allow_expand=child.size > 0)
            if depth + 1 < AUTO_EXPAND_DEPTH:
                self._populate(child_node, child, depth + 1)
                child_node.expand()
            elif child.size:
                self._unpopulated.add(child_node.id)

    def _ensure_populated(self, node: TreeNode[Value]) -> None:
        if node.id in self._unpopulated and node.data is not None:
            self._unpopulated.discard(node.id)
            # Depth only decides auto-expansion, which is over for lazy nodes
            self._populate(node, node.data, depth=AUTO_EXPAND_DEPTH)

    def on_tree_node_expanded(self, event: Tree.NodeExpanded[Value]) -> None:
        """Fill in children the first time a deep node is opened."""
        self._ensure_populated(event.node)

    def expand_everything(self) -> None:
        """Expand every container, populating lazy nodes on the way."""
        pending: list[TreeNode[Value]] = [self.root]
        while pending:
            node = pending.pop()
            self._ensure_populated(node)
            if node.allow_expand:
                node.expand()
            pending.extend(child for child in node.children if child.allow_expand)

    def collapse_everything(self) -> None:
        """Collapse everything below the root."""
        for child in self.root.children:
            child.collapse_all()

    def cursor_value(self) -> tuple[str, Value] | None:
        """Return the label text and Value under the cursor."""
        node = self.cursor_node or self.root
        if node.data is None:
            return None
        return (str(node.label), node.data)
