"""Detail panel widget showing the selected node."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.widgets import Static

from mpdetail.output.rich_output import CATEGORY_STYLES
from mpdetail.output.verbose_output import VerboseRenderer

if TYPE_CHECKING:
    from mpdetail.core.models import DecodedNode, RenderConfig


class NodePanel(Static):
    """Panel that shows the verbose document of the selected node."""

    DEFAULT_CSS = """
    NodePanel {
        width: 2fr;
        display: none;
        overflow-y: auto;
        padding: 1 2;
    }
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        super().__init__()
        self._verbose_renderer = VerboseRenderer(config=config)
        self.last_content: str = ""

    def update_node(self, node: DecodedNode) -> None:
        """Show a summary header followed by the node's verbose document."""
        text = Text()
        text.append(f"{node.format_name}\n", style=CATEGORY_STYLES[node.category])
        text.append(f"Header: 0x{node.format_tag:02x}\n")
        if node.is_container:
            text.append(f"Length: {node.length}\n")
        if node.ext_type is not None:
            text.append(f"Type:   {node.ext_type}\n")
        text.append(f"Raw:    0x{node.raw.hex()}\n\n", style="dim")
        text.append(self._verbose_renderer.format_document(node))
        self.last_content = text.plain
        self.update(text)
