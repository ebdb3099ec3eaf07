"""Status bar widget showing stream summary statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widgets import Static

if TYPE_CHECKING:
    from mpdetail.core.models import NodeStats


class StatusBar(Static):
    """Bottom bar displaying document, node and category counts."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: 1;
        background: $boost;
        color: $text;
        padding: 0 1;
    }
    """

    def __init__(self, stats: NodeStats) -> None:
        content = (
            f"{stats.documents} documents | {stats.total_nodes} nodes "
            f"[blue]{stats.containers} containers[/blue] "
            f"[yellow]{stats.scalars} scalars[/yellow] "
            f"[cyan]{stats.extensions} ext[/cyan] "
            f"[red]{stats.reserved} reserved[/red] "
            f"| depth: {stats.max_depth}"
        )
        super().__init__(content)
