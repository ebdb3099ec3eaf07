"""Data models for decoded MessagePack trees."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_INDENT_WIDTH = 4
DEFAULT_MAX_DEPTH = 128
# Decoding and rendering recurse once or twice per container level.
MAX_DEPTH_LIMIT = 200


class FormatCategory(StrEnum):
    """Rendering category of a MessagePack format tag."""

    array = "array"
    map = "map"
    string = "string"
    extension = "extension"
    nil = "nil"
    reserved = "reserved"
    scalar = "scalar"


class OutputMode(StrEnum):
    """Output format for rendering decoded streams."""

    verbose = "verbose"
    rich = "rich"
    tui = "tui"


class Status(IntEnum):
    """Status codes returned to the host, matching Fluent Bit's values."""

    error = 0
    ok = 1


class PluginState(StrEnum):
    """Lifecycle state of a DetailPlugin."""

    unregistered = "unregistered"
    registered = "registered"
    initialized = "initialized"
    active = "active"
    shut_down = "shut_down"


@dataclass(frozen=True)
class DecodedNode:
    """One decoded MessagePack value and the bytes it came from."""

    format_tag: int
    format_name: str
    raw: bytes
    data_text: str = ""
    length: int = 0
    ext_type: int | None = None
    children: tuple[DecodedNode, ...] = ()

    @property
    def category(self) -> FormatCategory:
        """Category derived from the tag byte."""
        from mpdetail.core.formats import classify

        return classify(self.format_tag)

    @property
    def is_container(self) -> bool:
        return self.category in (FormatCategory.array, FormatCategory.map)

    def expected_children(self) -> int:
        """Number of children the declared length calls for."""
        if self.category == FormatCategory.map:
            return self.length * 2
        if self.category == FormatCategory.array:
            return self.length
        return 0


def check_max_depth(max_depth: int) -> None:
    """Raise ValueError unless ``max_depth`` is within 1..MAX_DEPTH_LIMIT."""
    if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
        msg = f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}"
        raise ValueError(msg)


@dataclass(frozen=True)
class RenderConfig:
    """Immutable rendering options.

    ``max_depth`` bounds container nesting for both decoding and rendering.
    ``event_time`` enables the Fluentd EventTime extension interpretation.
    """

    indent_width: int = DEFAULT_INDENT_WIDTH
    max_depth: int = DEFAULT_MAX_DEPTH
    event_time: bool = True

    def __post_init__(self) -> None:
        check_max_depth(self.max_depth)


@dataclass(frozen=True)
class NodeStats:
    """Summary statistics for a decoded stream."""

    documents: int
    total_nodes: int
    containers: int
    scalars: int
    extensions: int
    reserved: int
    max_depth: int

    @classmethod
    def from_documents(cls, documents: Iterable[DecodedNode]) -> NodeStats:
        """Compute stats by walking every document."""
        from mpdetail.core.tree import iter_nodes

        docs = tuple(documents)
        counts = dict.fromkeys(FormatCategory, 0)
        deepest = 0
        total = 0
        for doc in docs:
            for node, level in iter_nodes(doc):
                total += 1
                counts[node.category] += 1
                deepest = max(deepest, level)
        containers = counts[FormatCategory.array] + counts[FormatCategory.map]
        return cls(
            documents=len(docs),
            total_nodes=total,
            containers=containers,
            scalars=total - containers,
            extensions=counts[FormatCategory.extension],
            reserved=counts[FormatCategory.reserved],
            max_depth=deepest,
        )
