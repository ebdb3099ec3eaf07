"""Textual TUI for interactive browsing of decoded streams."""

from mpdetail.tui.app import DetailApp

__all__ = ["DetailApp"]
