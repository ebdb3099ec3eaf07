"""Textual TUI application for browsing decoded documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.containers import Horizontal
from textual.widgets import Footer, Header, Static

from mpdetail.core.models import DecodedNode, NodeStats
from mpdetail.tui.widgets.node_panel import NodePanel
from mpdetail.tui.widgets.node_tree import NodeTree
from mpdetail.tui.widgets.status_bar import StatusBar

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mpdetail.core.models import RenderConfig


class _StatsDisplay(Static):
    """Centered stats display for --stat mode."""

    DEFAULT_CSS = """
    _StatsDisplay {
        width: 100%;
        height: 1fr;
        content-align: center middle;
        text-align: center;
    }
    """

    def __init__(self, stats: NodeStats) -> None:
        content = (
            f"[bold]{stats.documents}[/bold] documents, "
            f"[bold]{stats.total_nodes}[/bold] nodes"
            f" (max depth: {stats.max_depth})\n\n"
            f"[blue]{stats.containers} containers[/blue]  "
            f"[yellow]{stats.scalars} scalars[/yellow]  "
            f"[cyan]{stats.extensions} extensions[/cyan]  "
            f"[red]{stats.reserved} reserved[/red]"
        )
        super().__init__(content)


class DetailApp(App[None]):
    """Interactive TUI for browsing decoded MessagePack documents."""

    CSS_PATH = "styles/app.tcss"

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit"),
        Binding("s", "toggle_view", "Toggle View"),
        Binding("n", "next_document", "Next Document"),
        Binding("p", "prev_document", "Prev Document"),
    ]

    def __init__(
        self,
        documents: Sequence[DecodedNode],
        *,
        stat_only: bool = False,
        config: RenderConfig | None = None,
    ) -> None:
        super().__init__()
        self._decoded_documents = tuple(documents)
        self._node_stats = NodeStats.from_documents(self._decoded_documents)
        self._stat_only = stat_only
        self._render_config = config

    def compose(self) -> ComposeResult:
        yield Header()
        if self._stat_only:
            yield _StatsDisplay(self._node_stats)
        else:
            with Horizontal(id="main-container"):
                yield NodeTree(self._decoded_documents)
                yield NodePanel(self._render_config)
            yield StatusBar(self._node_stats)
        yield Footer()

    def on_tree_node_selected(self, event: NodeTree.NodeSelected[DecodedNode]) -> None:
        """When a tree node is selected, show its detail in the panel."""
        if event.node.data is None:
            return
        panel = self.query_one(NodePanel)
        panel.update_node(event.node.data)
        container = self.query_one("#main-container")
        if not container.has_class("split-view"):
            container.add_class("split-view")

    def action_toggle_view(self) -> None:
        """Toggle between full-tree and split tree+detail view."""
        if self._stat_only:
            return
        container = self.query_one("#main-container")
        container.toggle_class("split-view")

    def action_next_document(self) -> None:
        """Move to the next top-level document."""
        if self._stat_only:
            return
        self.query_one(NodeTree).select_next_document()

    def action_prev_document(self) -> None:
        """Move to the previous top-level document."""
        if self._stat_only:
            return
        self.query_one(NodeTree).select_prev_document()
