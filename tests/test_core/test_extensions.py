"""Tests for mpdetail.core.extensions."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import msgpack
import pytest

from mpdetail.core.extensions import (
    EVENT_TIME_EXT_TYPE,
    TIMESTAMP_EXT_TYPE,
    ExtensionFormat,
    ExtensionRegistry,
    format_event_time,
    format_timestamp,
    hex_text,
)


class TestFormatters:
    """Verify payload formatters."""

    def test_hex_text(self) -> None:
        assert hex_text(b"\xde\xad\xbe\xef") == "0xdeadbeef"
        assert hex_text(b"") == "0x"

    def test_event_time(self) -> None:
        payload = b"\x00\x00\x00\x01\x00\x00\x00\x05"
        assert format_event_time(payload) == "1970-01-01T00:00:01.000000005Z"

    def test_event_time_wrong_size(self) -> None:
        with pytest.raises(ValueError, match="8 bytes"):
            format_event_time(b"\x00\x01")

    def test_event_time_nanoseconds_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            format_event_time(b"\x00\x00\x00\x01\xff\xff\xff\xff")

    def test_timestamp32(self) -> None:
        payload = msgpack.Timestamp(86400, 0).to_bytes()
        assert format_timestamp(payload) == "1970-01-02T00:00:00.000000000Z"

    def test_timestamp64_keeps_nanoseconds(self) -> None:
        payload = msgpack.Timestamp(1, 123456789).to_bytes()
        assert format_timestamp(payload) == "1970-01-01T00:00:01.123456789Z"

    def test_timestamp_wrong_size(self) -> None:
        with pytest.raises(ValueError):
            format_timestamp(b"\x00\x01\x02")


class TestExtensionRegistry:
    """Verify registry construction and lookups."""

    def test_empty_registry_shows_hex(self) -> None:
        registry = ExtensionRegistry()
        assert registry.describe("fixext1", 1, b"\xff") == ("fixext1", "0xff")

    def test_default_registers_timestamp_and_event_time(self) -> None:
        registry = ExtensionRegistry.default()
        assert set(registry.formats) == {TIMESTAMP_EXT_TYPE, EVENT_TIME_EXT_TYPE}

    def test_default_without_event_time(self) -> None:
        registry = ExtensionRegistry.default(event_time=False)
        assert set(registry.formats) == {TIMESTAMP_EXT_TYPE}

    def test_describe_registered_type(self) -> None:
        registry = ExtensionRegistry.default()
        name, text = registry.describe("fixext8", 0, b"\x00\x00\x00\x01\x00\x00\x00\x00")
        assert name == "fixext8 (EventTime)"
        assert text == "1970-01-01T00:00:01.000000000Z"

    def test_rejected_payload_falls_back_to_hex(self) -> None:
        registry = ExtensionRegistry.default()
        assert registry.describe("fixext2", 0, b"\xfe\xed") == ("fixext2", "0xfeed")

    def test_custom_format(self) -> None:
        registry = ExtensionRegistry({7: ExtensionFormat("upper", lambda b: b.decode().upper())})
        assert registry.describe("ext8", 7, b"abc") == ("ext8 (upper)", "ABC")

    def test_registry_is_read_only(self) -> None:
        registry = ExtensionRegistry.default()
        with pytest.raises(FrozenInstanceError):
            registry.formats = {}  # type: ignore[misc]
        with pytest.raises(TypeError):
            registry.formats[5] = ExtensionFormat("x", hex_text)  # type: ignore[index]
