"""Rich console renderer: decoded documents as trees."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from mpdetail.core.models import FormatCategory, RenderConfig
from mpdetail.output.base import check_tree, report_reserved

if TYPE_CHECKING:
    from mpdetail.core.diagnostics import Diagnostics
    from mpdetail.core.models import DecodedNode, NodeStats

CATEGORY_STYLES: dict[FormatCategory, str] = {
    FormatCategory.array: "bold blue",
    FormatCategory.map: "bold magenta",
    FormatCategory.string: "green",
    FormatCategory.extension: "cyan",
    FormatCategory.nil: "dim",
    FormatCategory.reserved: "bold red",
    FormatCategory.scalar: "yellow",
}


def node_label(node: DecodedNode, *, prefix: str = "") -> Text:
    """Build a one-line label: format, header, length/type, raw and value."""
    text = Text()
    if prefix:
        text.append(f"{prefix}: ", style="bold")
    text.append(node.format_name, style=CATEGORY_STYLES[node.category])
    text.append(f" 0x{node.format_tag:02x}", style="dim")
    if node.is_container:
        text.append(f" length={node.length}")
    if node.ext_type is not None:
        text.append(f" type={node.ext_type}")
    text.append(f" raw=0x{node.raw.hex()}", style="dim")
    if not node.is_container:
        text.append(" = ")
        text.append(node.data_text)
    return text


class RichRenderer:
    """Renders each decoded document as a Rich tree.

    Maps show one branch per entry with ``key`` and ``value`` children.
    The whole tree is validated before anything is printed.
    """

    def __init__(
        self,
        console: Console | None = None,
        diagnostics: Diagnostics | None = None,
        *,
        config: RenderConfig | None = None,
    ) -> None:
        """Initialize with an optional Rich console.

        Args:
            console: Rich Console instance. Defaults to Console() if None.
            diagnostics: Side channel for never-used format reports.
            config: Rendering options. Defaults to RenderConfig().
        """
        self._console = console or Console()
        self._diagnostics = diagnostics
        self._config = config or RenderConfig()

    def render(self, node: DecodedNode) -> None:
        """Print one document as a tree."""
        check_tree(node, self._config.max_depth)
        self._console.print(self.build_tree(node))
        report_reserved(node, self._diagnostics)

    def render_stats(self, stats: NodeStats) -> None:
        """Render summary statistics."""
        self._console.print(
            f"[bold]{stats.documents}[/bold] documents, "
            f"[bold]{stats.total_nodes}[/bold] nodes: "
            f"[blue]{stats.containers} containers[/blue], "
            f"[yellow]{stats.scalars} scalars[/yellow], "
            f"[cyan]{stats.extensions} extensions[/cyan], "
            f"[red]{stats.reserved} reserved[/red], "
            f"max depth {stats.max_depth}"
        )

    def build_tree(self, node: DecodedNode) -> Tree:
        """Build a Rich Tree for a validated document."""
        tree = Tree(node_label(node))
        self._add_children(tree, node)
        return tree

    def _add_children(self, branch: Tree, node: DecodedNode) -> None:
        if node.category == FormatCategory.array:
            for child in node.children:
                self._add_node(branch, child)
        elif node.category == FormatCategory.map:
            for index in range(node.length):
                entry = branch.add(Text(f"[{index}]", style="dim"))
                self._add_node(entry, node.children[index * 2], prefix="key")
                self._add_node(entry, node.children[index * 2 + 1], prefix="value")

    def _add_node(self, parent: Tree, node: DecodedNode, *, prefix: str = "") -> None:
        branch = parent.add(node_label(node, prefix=prefix))
        self._add_children(branch, node)
