"""Tests for mpdetail.plugin.lifecycle."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, Any

from mpdetail.core.models import PluginState, RenderConfig, Status
from mpdetail.output.collector import NodeCollector
from mpdetail.plugin.lifecycle import PLUGIN_DESCRIPTION, PLUGIN_NAME, DetailPlugin

if TYPE_CHECKING:
    from collections.abc import Callable

    from mpdetail.core.diagnostics import Diagnostics


def _plugin(diagnostics: Diagnostics, **kwargs: Any) -> tuple[DetailPlugin, StringIO]:
    out = StringIO()
    return DetailPlugin(output=out, diagnostics=diagnostics, **kwargs), out


def _ready(diagnostics: Diagnostics, **kwargs: Any) -> tuple[DetailPlugin, StringIO]:
    plugin, out = _plugin(diagnostics, **kwargs)
    assert plugin.register() == Status.ok
    assert plugin.initialize() == Status.ok
    return plugin, out


class TestLifecycleHappyPath:
    """Verify the canonical register -> initialize -> process -> shutdown order."""

    def test_initial_state(self, diagnostics: Diagnostics) -> None:
        plugin, _ = _plugin(diagnostics)
        assert plugin.state == PluginState.unregistered
        assert plugin.registry is None

    def test_register_records_name(self, diagnostics: Diagnostics) -> None:
        plugin, _ = _plugin(diagnostics)
        assert plugin.register() == Status.ok
        assert plugin.state == PluginState.registered
        assert plugin.name == PLUGIN_NAME
        assert plugin.description == PLUGIN_DESCRIPTION

    def test_register_custom_name(self, diagnostics: Diagnostics) -> None:
        plugin, _ = _plugin(diagnostics)
        plugin.register("detail", "Custom description")
        assert plugin.name == "detail"
        assert plugin.description == "Custom description"

    def test_initialize_builds_registry(self, diagnostics: Diagnostics) -> None:
        plugin, _ = _ready(diagnostics)
        assert plugin.state == PluginState.initialized
        assert plugin.registry is not None
        assert 0 in plugin.registry.formats

    def test_initialize_without_event_time(self, diagnostics: Diagnostics) -> None:
        plugin, _ = _ready(diagnostics, config=RenderConfig(event_time=False))
        assert plugin.registry is not None
        assert 0 not in plugin.registry.formats

    def test_process_chunk(
        self,
        diagnostics: Diagnostics,
        record_batch: bytes,
        parse_stream: Callable[[str], list[Any]],
    ) -> None:
        plugin, out = _ready(diagnostics)
        assert plugin.process_chunk(record_batch, tag="app.log") == Status.ok
        assert plugin.state == PluginState.active
        assert plugin.chunks_processed == 1
        docs = parse_stream(out.getvalue())
        assert len(docs) == 3
        event_time = docs[0]["value"][0]
        assert event_time["format"] == "fixext8 (EventTime)"
        assert event_time["value"] == "1970-01-01T00:00:01.000000005Z"
        assert docs[2]["value"] == "tail"

    def test_multiple_chunks(self, diagnostics: Diagnostics) -> None:
        plugin, out = _ready(diagnostics)
        plugin.process_chunk(b"\x01")
        plugin.process_chunk(b"\x02")
        assert plugin.chunks_processed == 2
        assert out.getvalue().count("\n") == 2

    def test_process_chunk_error_status(self, diagnostics: Diagnostics) -> None:
        plugin, _ = _ready(diagnostics)
        assert plugin.process_chunk(b"\xd9\x10abc") == Status.error
        assert plugin.state == PluginState.active

    def test_shutdown(self, diagnostics: Diagnostics) -> None:
        plugin, _ = _ready(diagnostics)
        plugin.process_chunk(b"\x01")
        assert plugin.shutdown() == Status.ok
        assert plugin.state == PluginState.shut_down

    def test_custom_renderer(self, diagnostics: Diagnostics) -> None:
        collector = NodeCollector()
        plugin, out = _ready(diagnostics, renderer=collector)
        plugin.process_chunk(b"\x01\x02")
        assert len(collector.documents) == 2
        assert out.getvalue() == ""


class TestLifecycleOutOfOrder:
    """Verify out-of-order calls are rejected without raising."""

    def test_initialize_before_register(self, diagnostics: Diagnostics) -> None:
        plugin, _ = _plugin(diagnostics)
        assert plugin.initialize() == Status.error
        assert plugin.state == PluginState.unregistered
        assert "initialize called in state 'unregistered'" in diagnostics.messages[0]

    def test_process_before_initialize(self, diagnostics: Diagnostics) -> None:
        plugin, out = _plugin(diagnostics)
        plugin.register()
        assert plugin.process_chunk(b"\x01") == Status.error
        assert out.getvalue() == ""

    def test_register_twice(self, diagnostics: Diagnostics) -> None:
        plugin, _ = _plugin(diagnostics)
        plugin.register()
        assert plugin.register() == Status.error
        assert plugin.state == PluginState.registered

    def test_initialize_is_idempotent(self, diagnostics: Diagnostics) -> None:
        plugin, _ = _ready(diagnostics)
        registry = plugin.registry
        assert plugin.initialize() == Status.ok
        assert plugin.registry is registry
        plugin.process_chunk(b"\x01")
        assert plugin.initialize() == Status.ok
        assert plugin.state == PluginState.active
        assert diagnostics.messages == []

    def test_shutdown_before_register(self, diagnostics: Diagnostics) -> None:
        plugin, _ = _plugin(diagnostics)
        assert plugin.shutdown() == Status.error

    def test_shutdown_is_idempotent(self, diagnostics: Diagnostics) -> None:
        plugin, _ = _ready(diagnostics)
        plugin.shutdown()
        assert plugin.shutdown() == Status.ok

    def test_process_after_shutdown(self, diagnostics: Diagnostics) -> None:
        plugin, out = _ready(diagnostics)
        plugin.shutdown()
        assert plugin.process_chunk(b"\x01") == Status.error
        assert out.getvalue() == ""

    def test_initialize_after_shutdown(self, diagnostics: Diagnostics) -> None:
        plugin, _ = _ready(diagnostics)
        plugin.shutdown()
        assert plugin.initialize() == Status.error
