"""Renderer that keeps validated documents instead of writing them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mpdetail.core.models import NodeStats, RenderConfig
from mpdetail.output.base import check_tree, report_reserved

if TYPE_CHECKING:
    from mpdetail.core.diagnostics import Diagnostics
    from mpdetail.core.models import DecodedNode


class NodeCollector:
    """Collects documents for later use (statistics, interactive browsing)."""

    def __init__(
        self,
        diagnostics: Diagnostics | None = None,
        *,
        config: RenderConfig | None = None,
    ) -> None:
        self._diagnostics = diagnostics
        self._config = config or RenderConfig()
        self.documents: list[DecodedNode] = []

    def render(self, node: DecodedNode) -> None:
        """Validate and keep one document, reporting never-used formats."""
        check_tree(node, self._config.max_depth)
        self.documents.append(node)
        report_reserved(node, self._diagnostics)

    def stats(self) -> NodeStats:
        """Summary statistics over every collected document."""
        return NodeStats.from_documents(self.documents)
