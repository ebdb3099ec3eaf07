"""Interpretation of MessagePack extension types.

The registry is built once (see ``ExtensionRegistry.default``) and then
only read; decoders receive it explicitly instead of consulting a global.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

import msgpack

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TIMESTAMP_EXT_TYPE = -1
EVENT_TIME_EXT_TYPE = 0

_EVENT_TIME = struct.Struct(">II")


def hex_text(data: bytes) -> str:
    """Render bytes as a 0x-prefixed lowercase hex string."""
    return f"0x{data.hex()}"


def _iso_text(seconds: int, nanoseconds: int) -> str:
    """Format a UTC instant with nanosecond precision."""
    dt = msgpack.Timestamp(seconds, 0).to_datetime()
    return f"{dt:%Y-%m-%dT%H:%M:%S}.{nanoseconds:09d}Z"


def format_timestamp(data: bytes) -> str:
    """Format a MessagePack timestamp extension payload (4, 8 or 12 bytes)."""
    ts = msgpack.Timestamp.from_bytes(data)
    return _iso_text(ts.seconds, ts.nanoseconds)


def format_event_time(data: bytes) -> str:
    """Format a Fluentd EventTime payload: uint32 seconds, uint32 nanoseconds."""
    if len(data) != _EVENT_TIME.size:
        msg = f"EventTime payload must be {_EVENT_TIME.size} bytes, got {len(data)}"
        raise ValueError(msg)
    seconds, nanoseconds = _EVENT_TIME.unpack(data)
    if nanoseconds >= 1_000_000_000:
        msg = f"EventTime nanoseconds out of range: {nanoseconds}"
        raise ValueError(msg)
    return _iso_text(seconds, nanoseconds)


@dataclass(frozen=True)
class ExtensionFormat:
    """How to label and format one extension type."""

    label: str
    formatter: Callable[[bytes], str]


@dataclass(frozen=True)
class ExtensionRegistry:
    """Read-only mapping of extension type codes to their interpretation."""

    formats: Mapping[int, ExtensionFormat] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def default(cls, *, event_time: bool = True) -> ExtensionRegistry:
        """Build the standard registry.

        Args:
            event_time: Also interpret type 0 as a Fluentd EventTime.
        """
        formats: dict[int, ExtensionFormat] = {
            TIMESTAMP_EXT_TYPE: ExtensionFormat("timestamp", format_timestamp),
        }
        if event_time:
            formats[EVENT_TIME_EXT_TYPE] = ExtensionFormat("EventTime", format_event_time)
        return cls(MappingProxyType(formats))

    def describe(self, base_name: str, ext_type: int, data: bytes) -> tuple[str, str]:
        """Return (format_name, data_text) for an extension payload.

        Unregistered types, and payloads the registered formatter rejects,
        are shown as hex under the plain format name.
        """
        ext = self.formats.get(ext_type)
        if ext is not None:
            try:
                return f"{base_name} ({ext.label})", ext.formatter(data)
            except (ValueError, OverflowError):
                pass
        return base_name, hex_text(data)
