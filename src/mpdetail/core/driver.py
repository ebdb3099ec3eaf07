"""Stream driver: decode a chunk into documents and render each one."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mpdetail.core.decoder import DecodeBuffer
from mpdetail.core.errors import DecodeError, RenderError
from mpdetail.core.models import Status

if TYPE_CHECKING:
    from mpdetail.core.decoder import Decoder
    from mpdetail.core.diagnostics import Diagnostics
    from mpdetail.core.models import DecodedNode
    from mpdetail.output.base import Renderer


class StreamDriver:
    """Renders every top-level value of a chunk as an independent document.

    A chunk may hold several concatenated values (batched records). Each one
    is decoded and handed to the renderer in input order:

    - a value that fails to decode with nothing recovered ends the call
      with ``Status.error``;
    - a partially recovered value is still rendered, then decoding goes on;
    - a value the renderer rejects is reported and skipped.
    """

    def __init__(self, decoder: Decoder, renderer: Renderer, diagnostics: Diagnostics) -> None:
        self._decoder = decoder
        self._renderer = renderer
        self._diagnostics = diagnostics

    def process(self, data: bytes) -> Status:
        """Decode and render every value in ``data``."""
        buffer = DecodeBuffer(data)

        while buffer.remaining > 0:
            before = buffer.remaining
            try:
                node = self._decoder.decode(buffer)
            except DecodeError as exc:
                self._diagnostics.decode_failure(exc)
                if exc.node is None:
                    return Status.error
                node = exc.node

            self._render_document(node)

            if buffer.remaining >= before:
                self._diagnostics.error("decoder made no progress, giving up on this chunk.")
                return Status.error

        return Status.ok

    def _render_document(self, node: DecodedNode) -> None:
        """Render one top-level node, reporting instead of raising on failure."""
        try:
            self._renderer.render(node)
        except RenderError as exc:
            self._diagnostics.render_failure(exc)
