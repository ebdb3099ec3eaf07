"""Tree widget displaying decoded documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.widgets import Tree

from mpdetail.core.models import DecodedNode, FormatCategory
from mpdetail.output.rich_output import CATEGORY_STYLES

if TYPE_CHECKING:
    from collections.abc import Sequence

    from textual.widgets._tree import TreeNode


def _label(node: DecodedNode, prefix: str = "") -> Text:
    """Short label: format name plus value or length."""
    text = Text()
    if prefix:
        text.append(f"{prefix}: ", style="bold")
    text.append(node.format_name, style=CATEGORY_STYLES[node.category])
    if node.is_container:
        text.append(f" ({node.length})", style="dim")
    else:
        text.append(f" {node.data_text}")
    return text


class NodeTree(Tree[DecodedNode]):
    """Tree widget with one branch per top-level document."""

    DEFAULT_CSS = """
    NodeTree {
        width: 1fr;
        min-width: 20;
        border-right: solid $accent;
    }
    """

    def __init__(self, documents: Sequence[DecodedNode]) -> None:
        super().__init__(f"{len(documents)} documents")
        self._decoded_documents = documents
        self._document_branches: list[TreeNode[DecodedNode]] = []
        self._document_index: int = -1

    def on_mount(self) -> None:
        """Populate the tree from the decoded documents."""
        for index, doc in enumerate(self._decoded_documents):
            branch = self.root.add(_label(doc, f"#{index}"), data=doc)
            self._add_decoded_children(branch, doc)
            self._document_branches.append(branch)
        self.root.expand_all()

    def _add_decoded_children(self, branch: TreeNode[DecodedNode], node: DecodedNode) -> None:
        if node.category == FormatCategory.array:
            for child in node.children:
                self._add_decoded(branch, child)
        elif node.category == FormatCategory.map:
            for index in range(node.length):
                key, value = node.children[index * 2], node.children[index * 2 + 1]
                self._add_decoded(branch, key, "key")
                self._add_decoded(branch, value, "value")

    def _add_decoded(
        self, parent: TreeNode[DecodedNode], node: DecodedNode, prefix: str = ""
    ) -> None:
        if node.is_container:
            branch = parent.add(_label(node, prefix), data=node)
            self._add_decoded_children(branch, node)
        else:
            parent.add_leaf(_label(node, prefix), data=node)

    def select_next_document(self) -> None:
        """Move cursor to the next top-level document."""
        self._move_document(1)

    def select_prev_document(self) -> None:
        """Move cursor to the previous top-level document."""
        self._move_document(-1)

    def _move_document(self, delta: int) -> None:
        if not self._document_branches:
            return
        if self._document_index < 0:
            self._document_index = 0 if delta > 0 else len(self._document_branches) - 1
        else:
            self._document_index = (self._document_index + delta) % len(self._document_branches)
        node = self._document_branches[self._document_index]
        self.select_node(node)
        self.scroll_to_node(node)
