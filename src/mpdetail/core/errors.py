"""Exceptions raised while decoding and rendering MessagePack trees."""

from __future__ import annotations

from mpdetail.core.models import DecodedNode, FormatCategory


class DecodeError(Exception):
    """Raised when the next value cannot be decoded from the buffer.

    ``node`` holds whatever could be recovered before the failure (usually a
    container with fewer children than declared), or None when nothing was.
    """

    def __init__(self, message: str, *, node: DecodedNode | None = None) -> None:
        super().__init__(message)
        self.node = node


class RenderError(Exception):
    """Base class for errors that abort rendering of one document."""


class SizeMismatchError(RenderError):
    """Raised when a container's declared length disagrees with its children."""

    def __init__(self, node: DecodedNode) -> None:
        self.node = node
        if node.category == FormatCategory.map:
            got = f"{len(node.children)}(!=length*2)"
        else:
            got = str(len(node.children))
        super().__init__(f"size mismatch. length is {node.length}, got {got} children.")


class NestingDepthError(RenderError):
    """Raised when containers nest deeper than the configured limit."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"nesting depth exceeds {max_depth} containers.")


class DecodeDepthError(DecodeError):
    """Raised when the input nests containers deeper than the decoder allows.

    Never carries a partial node: the rest of the buffer cannot be trusted.
    """

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"nesting depth exceeds {max_depth} containers")
