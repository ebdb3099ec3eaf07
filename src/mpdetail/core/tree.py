"""Iterative walks over decoded trees."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from mpdetail.core.models import DecodedNode


def iter_nodes(root: DecodedNode) -> Iterator[tuple[DecodedNode, int]]:
    """Yield (node, level) pairs in document order.

    The root is level 0 and each enclosing container adds one. Uses an
    explicit stack, so arbitrarily deep trees do not hit the recursion limit.
    """
    stack: list[tuple[DecodedNode, int]] = [(root, 0)]
    while stack:
        node, level = stack.pop()
        yield node, level
        stack.extend((child, level + 1) for child in reversed(node.children))
