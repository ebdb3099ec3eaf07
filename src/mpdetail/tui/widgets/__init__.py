"""TUI widgets for browsing decoded documents."""

from mpdetail.tui.widgets.node_panel import NodePanel
from mpdetail.tui.widgets.node_tree import NodeTree
from mpdetail.tui.widgets.status_bar import StatusBar

__all__ = ["NodePanel", "NodeTree", "StatusBar"]
