"""Host plugin lifecycle as an explicit state machine.

The host drives the plugin through ``register -> initialize ->
process_chunk* -> shutdown``. Calls made out of that order are rejected
with ``Status.error`` and a diagnostic; nothing raises across this
boundary.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from mpdetail.core.decoder import Decoder
from mpdetail.core.diagnostics import Diagnostics
from mpdetail.core.driver import StreamDriver
from mpdetail.core.extensions import ExtensionRegistry
from mpdetail.core.models import PluginState, RenderConfig, Status
from mpdetail.output.verbose_output import VerboseRenderer

if TYPE_CHECKING:
    from typing import TextIO

    from mpdetail.output.base import Renderer

PLUGIN_NAME = "gdetail"
PLUGIN_DESCRIPTION = "Show MessagePack in detail"


class DetailPlugin:
    """Output plugin that renders every flushed chunk in detail.

    State transitions:
    - unregistered -> registered (register)
    - registered -> initialized (initialize; repeated calls are no-ops)
    - initialized/active -> active (process_chunk)
    - any registered state -> shut_down (shutdown; repeated calls are no-ops)
    """

    def __init__(
        self,
        *,
        output: TextIO | None = None,
        diagnostics: Diagnostics | None = None,
        renderer: Renderer | None = None,
        config: RenderConfig | None = None,
    ) -> None:
        """Initialize the plugin.

        Args:
            output: Stream for rendered documents. Defaults to sys.stdout.
            diagnostics: Side channel for errors. Defaults to stderr.
            renderer: Renderer to use instead of the verbose renderer.
            config: Rendering options. Defaults to RenderConfig().
        """
        self._config = config or RenderConfig()
        self._diagnostics = diagnostics or Diagnostics()
        self._renderer = renderer or VerboseRenderer(
            output or sys.stdout, self._diagnostics, config=self._config
        )
        self._state = PluginState.unregistered
        self._registry: ExtensionRegistry | None = None
        self._driver: StreamDriver | None = None
        self.name: str | None = None
        self.description: str | None = None
        self.chunks_processed = 0

    @property
    def state(self) -> PluginState:
        return self._state

    @property
    def registry(self) -> ExtensionRegistry | None:
        """Extension registry built by initialize(), None before that."""
        return self._registry

    def register(
        self, name: str = PLUGIN_NAME, description: str = PLUGIN_DESCRIPTION
    ) -> Status:
        """Record the plugin's name and description with the host."""
        if self._state != PluginState.unregistered:
            return self._reject("register")
        self.name = name
        self.description = description
        self._state = PluginState.registered
        return Status.ok

    def initialize(self) -> Status:
        """Build the extension registry and decoder. Safe to call twice."""
        if self._state in (PluginState.initialized, PluginState.active):
            return Status.ok
        if self._state != PluginState.registered:
            return self._reject("initialize")

        self._registry = ExtensionRegistry.default(event_time=self._config.event_time)
        decoder = Decoder(self._registry, max_depth=self._config.max_depth)
        self._driver = StreamDriver(decoder, self._renderer, self._diagnostics)
        self._state = PluginState.initialized
        return Status.ok

    def process_chunk(self, data: bytes, tag: str | None = None) -> Status:
        """Render every value in one flushed chunk.

        Args:
            data: MessagePack bytes, possibly several concatenated values.
            tag: Host routing tag for the chunk; not part of the output.
        """
        if self._driver is None or self._state not in (
            PluginState.initialized,
            PluginState.active,
        ):
            return self._reject("process_chunk")

        self._state = PluginState.active
        self.chunks_processed += 1
        return self._driver.process(data)

    def shutdown(self) -> Status:
        """Release the decoder. Safe to call twice."""
        if self._state == PluginState.shut_down:
            return Status.ok
        if self._state == PluginState.unregistered:
            return self._reject("shutdown")
        self._driver = None
        self._state = PluginState.shut_down
        return Status.ok

    def _reject(self, operation: str) -> Status:
        self._diagnostics.error(f"{operation} called in state '{self._state}'.")
        return Status.error
