"""Renderer protocol and structural checks shared by renderers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from mpdetail.core.errors import NestingDepthError, SizeMismatchError
from mpdetail.core.models import FormatCategory
from mpdetail.core.tree import iter_nodes

if TYPE_CHECKING:
    from mpdetail.core.diagnostics import Diagnostics
    from mpdetail.core.models import DecodedNode


@runtime_checkable
class Renderer(Protocol):
    """Protocol for rendering decoded documents.

    Implementations receive one top-level node per call and either render
    it completely or raise a RenderError before writing anything.
    """

    def render(self, node: DecodedNode) -> None:
        """Render one top-level document."""
        ...


def check_children(node: DecodedNode) -> None:
    """Raise SizeMismatchError if a container's children disagree with its length."""
    if node.is_container and len(node.children) != node.expected_children():
        raise SizeMismatchError(node)


def check_tree(root: DecodedNode, max_depth: int) -> None:
    """Validate every container in a tree before anything is rendered.

    Raises:
        SizeMismatchError: If any container has the wrong number of children.
        NestingDepthError: If containers nest deeper than ``max_depth``.
    """
    for node, level in iter_nodes(root):
        if not node.is_container:
            continue
        if level >= max_depth:
            raise NestingDepthError(max_depth)
        check_children(node)


def report_reserved(root: DecodedNode, diagnostics: Diagnostics | None) -> None:
    """Report every never-used format node in a rendered tree."""
    if diagnostics is None:
        return
    for node, _ in iter_nodes(root):
        if node.category == FormatCategory.reserved:
            diagnostics.reserved_format(node)
