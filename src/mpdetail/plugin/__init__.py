"""Host plugin integration for mpdetail."""

from mpdetail.plugin.lifecycle import PLUGIN_DESCRIPTION, PLUGIN_NAME, DetailPlugin

__all__ = ["PLUGIN_DESCRIPTION", "PLUGIN_NAME", "DetailPlugin"]
