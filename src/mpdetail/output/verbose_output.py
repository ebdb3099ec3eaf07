"""Verbose renderer: one annotated JSON-like document per top-level value.

Each node is shown with its format name, tag byte, raw payload and value::

    {"format":"fixarray", "header":"0x92", "length":2, "raw":"0x", "value":
        [
            {"format":"positive fixint", "header":"0x00", "raw":"0x00", "value":0},
            {"format":"positive fixint", "header":"0x01", "raw":"0x01", "value":1}
        ]
    }

Documents are built in memory and written only once complete, so a
structural error never leaves half a document on the output stream.
"""

from __future__ import annotations

import dataclasses
import json
import sys
from typing import TYPE_CHECKING

from mpdetail.core.errors import NestingDepthError, SizeMismatchError
from mpdetail.core.models import FormatCategory, RenderConfig
from mpdetail.output.base import report_reserved

if TYPE_CHECKING:
    from typing import TextIO

    from mpdetail.core.diagnostics import Diagnostics
    from mpdetail.core.models import DecodedNode, NodeStats


def _quote(text: str) -> str:
    """Quote and escape a string as a JSON string literal."""
    return json.dumps(text, ensure_ascii=False)


def _header(node: DecodedNode) -> str:
    return f"0x{node.format_tag:02x}"


def _raw(node: DecodedNode) -> str:
    return f"0x{node.raw.hex()}"


class VerboseRenderer:
    """Renders decoded trees as annotated JSON-like documents.

    Documents are written back to back, each terminated by a newline and
    without an enclosing array; readers must parse the output as a stream.
    Output goes to stdout by default. Pass a custom TextIO for file output
    or testing.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        diagnostics: Diagnostics | None = None,
        *,
        config: RenderConfig | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            output: Text stream for documents. Defaults to sys.stdout.
            diagnostics: Side channel for never-used format reports.
            config: Rendering options. Defaults to RenderConfig().
        """
        self._output = output or sys.stdout
        self._diagnostics = diagnostics
        self._config = config or RenderConfig()

    def render(self, node: DecodedNode) -> None:
        """Write one top-level document.

        Raises:
            SizeMismatchError: If a container's length disagrees with its children.
            NestingDepthError: If containers nest deeper than configured.
        """
        document = self.format_document(node)
        self._output.write(document)
        self._output.write("\n")
        report_reserved(node, self._diagnostics)

    def render_stats(self, stats: NodeStats) -> None:
        """Serialize summary statistics as JSON."""
        json.dump(dataclasses.asdict(stats), self._output, indent=self._config.indent_width)
        self._output.write("\n")

    def format_document(self, node: DecodedNode) -> str:
        """Return the complete document text for a top-level node."""
        parts: list[str] = []
        self._format_node(node, parts, nest=0, level=0)
        return "".join(parts)

    def _pad(self, nest: int) -> str:
        return " " * (self._config.indent_width * nest)

    def _format_node(self, node: DecodedNode, parts: list[str], *, nest: int, level: int) -> None:
        category = node.category
        if category == FormatCategory.array:
            self._format_array(node, parts, nest=nest, level=level)
        elif category == FormatCategory.map:
            self._format_map(node, parts, nest=nest, level=level)
        else:
            parts.append(self._format_scalar(node, nest))

    # -- Scalars -----------------------------------------------------------

    def _format_scalar(self, node: DecodedNode, nest: int) -> str:
        """Format a non-container node as one flat record."""
        fields = [("format", _quote(node.format_name)), ("header", _quote(_header(node)))]
        if node.category == FormatCategory.extension:
            fields.append(("type", str(node.ext_type)))
        fields.append(("raw", _quote(_raw(node))))
        fields.append(("value", self._scalar_value(node)))
        body = ", ".join(f'"{key}":{value}' for key, value in fields)
        return f"{self._pad(nest)}{{{body}}}"

    @staticmethod
    def _scalar_value(node: DecodedNode) -> str:
        """Return the JSON text of a scalar node's value."""
        category = node.category
        if category in (FormatCategory.string, FormatCategory.extension):
            return _quote(node.data_text)
        if category == FormatCategory.nil:
            return "null"
        if category == FormatCategory.reserved:
            return node.data_text or "null"
        return node.data_text

    # -- Containers --------------------------------------------------------

    def _open_container(self, node: DecodedNode, parts: list[str], *, nest: int, level: int) -> None:
        """Check a container and append its header record."""
        if level >= self._config.max_depth:
            raise NestingDepthError(self._config.max_depth)
        if len(node.children) != node.expected_children():
            raise SizeMismatchError(node)

        parts.append(
            f'{self._pad(nest)}{{"format":{_quote(node.format_name)}, '
            f'"header":{_quote(_header(node))}, "length":{node.length}, '
            f'"raw":{_quote(_raw(node))}, "value":\n{self._pad(nest + 1)}['
        )

    def _close_container(self, parts: list[str], *, nest: int) -> None:
        parts.append(f"\n{self._pad(nest + 1)}]\n{self._pad(nest)}}}")

    def _format_array(self, node: DecodedNode, parts: list[str], *, nest: int, level: int) -> None:
        self._open_container(node, parts, nest=nest, level=level)
        for index, child in enumerate(node.children):
            parts.append(",\n" if index else "\n")
            self._format_node(child, parts, nest=nest + 2, level=level + 1)
        self._close_container(parts, nest=nest)

    def _format_map(self, node: DecodedNode, parts: list[str], *, nest: int, level: int) -> None:
        self._open_container(node, parts, nest=nest, level=level)
        for index in range(node.length):
            parts.append(",\n" if index else "\n")
            key, value = node.children[index * 2], node.children[index * 2 + 1]
            self._format_pair(key, value, parts, nest=nest + 2, level=level + 1)
        self._close_container(parts, nest=nest)

    def _format_pair(
        self,
        key: DecodedNode,
        value: DecodedNode,
        parts: list[str],
        *,
        nest: int,
        level: int,
    ) -> None:
        """Append a {"key": ..., "value": ...} record for one map entry."""
        pad = self._pad(nest)
        parts.append(f'{pad}{{"key":\n')
        self._format_node(key, parts, nest=nest + 1, level=level)
        parts.append(f',\n{pad} "value":\n')
        self._format_node(value, parts, nest=nest + 1, level=level)
        parts.append(f"\n{pad}}}")
