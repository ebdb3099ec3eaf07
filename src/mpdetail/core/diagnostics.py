"""Diagnostic side channel, kept apart from the rendered output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

if TYPE_CHECKING:
    from mpdetail.core.errors import DecodeError, RenderError
    from mpdetail.core.models import DecodedNode


class Diagnostics:
    """Reports problems found while decoding and rendering.

    Messages go to a Rich console bound to stderr by default. With
    ``record=True`` they are also kept in ``messages``; a long-running
    plugin leaves it off so nothing accumulates.
    """

    def __init__(self, console: Console | None = None, *, record: bool = False) -> None:
        """Initialize with an optional Rich console.

        Args:
            console: Rich Console instance. Defaults to Console(stderr=True).
            record: Keep every message in ``messages``.
        """
        self._console = console or Console(stderr=True, highlight=False)
        self._record = record
        self.messages: list[str] = []

    def error(self, message: str) -> None:
        """Report a plain error message."""
        self._emit(f"Error: {message}")

    def decode_failure(self, exc: DecodeError) -> None:
        """Report a value that could not be fully decoded."""
        self._emit(f"Error({exc}) detected. Incoming data may be broken.")

    def render_failure(self, exc: RenderError) -> None:
        """Report a document that was skipped because it could not be rendered."""
        self._emit(f"Error: {exc}")

    def reserved_format(self, node: DecodedNode) -> None:
        """Report a tag byte MessagePack never assigns."""
        self._emit(f"Error: Never Used Format detected (header 0x{node.format_tag:02x})")

    def _emit(self, message: str) -> None:
        if self._record:
            self.messages.append(message)
        self._console.print(Text(message, style="red"), soft_wrap=True)
