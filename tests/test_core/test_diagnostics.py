"""Tests for mpdetail.core.diagnostics."""

from __future__ import annotations

from io import StringIO

from rich.console import Console

from mpdetail.core.diagnostics import Diagnostics
from mpdetail.core.errors import DecodeError, NestingDepthError
from mpdetail.core.models import DecodedNode


def _capture(diagnostics: Diagnostics) -> str:
    file = diagnostics._console.file
    assert isinstance(file, StringIO)
    return file.getvalue()


class TestDiagnostics:
    """Verify messages reach the console and are recorded."""

    def test_default_console_is_stderr(self) -> None:
        assert Diagnostics()._console.stderr

    def test_error(self, diagnostics: Diagnostics) -> None:
        diagnostics.error("something [odd] happened")
        assert "Error: something [odd] happened" in _capture(diagnostics)
        assert diagnostics.messages == ["Error: something [odd] happened"]

    def test_decode_failure(self, diagnostics: Diagnostics) -> None:
        diagnostics.decode_failure(DecodeError("unexpected end of buffer"))
        assert diagnostics.messages == [
            "Error(unexpected end of buffer) detected. Incoming data may be broken."
        ]

    def test_render_failure(self, diagnostics: Diagnostics) -> None:
        diagnostics.render_failure(NestingDepthError(4))
        assert diagnostics.messages == ["Error: nesting depth exceeds 4 containers."]

    def test_reserved_format(self, diagnostics: Diagnostics) -> None:
        diagnostics.reserved_format(DecodedNode(0xC1, "never used", b"\xc1", "null"))
        assert "Never Used Format detected" in _capture(diagnostics)

    def test_long_messages_not_wrapped(self) -> None:
        diagnostics = Diagnostics(Console(file=StringIO(), width=20))
        diagnostics.error("x" * 60)
        assert "x" * 60 in _capture(diagnostics)

    def test_messages_not_kept_by_default(self) -> None:
        diagnostics = Diagnostics(Console(file=StringIO(), width=200))
        for _ in range(3):
            diagnostics.error("broken chunk")
        assert diagnostics.messages == []
        assert _capture(diagnostics).count("Error: broken chunk") == 3
