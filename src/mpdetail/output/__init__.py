"""Public API for mpdetail.output."""

from __future__ import annotations

from mpdetail.output.base import Renderer
from mpdetail.output.collector import NodeCollector
from mpdetail.output.rich_output import RichRenderer
from mpdetail.output.verbose_output import VerboseRenderer

__all__ = [
    "NodeCollector",
    "Renderer",
    "RichRenderer",
    "VerboseRenderer",
]
