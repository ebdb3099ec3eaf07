"""Detail decoder: bytes to DecodedNode trees.

Unlike a regular MessagePack unpacker, this keeps the tag byte, the format
name and the payload bytes of every value so they can be shown next to the
decoded value.
"""

from __future__ import annotations

import math
import struct

from mpdetail.core.errors import DecodeDepthError, DecodeError
from mpdetail.core.extensions import ExtensionRegistry, hex_text
from mpdetail.core.formats import classify, format_name
from mpdetail.core.models import (
    DEFAULT_MAX_DEPTH,
    DecodedNode,
    FormatCategory,
    check_max_depth,
)

# Width of the explicit length field that follows the tag byte.
_LENGTH_FIELDS: dict[int, int] = {
    0xC4: 1, 0xC5: 2, 0xC6: 4,  # bin
    0xC7: 1, 0xC8: 2, 0xC9: 4,  # ext
    0xD9: 1, 0xDA: 2, 0xDB: 4,  # str
    0xDC: 2, 0xDD: 4,  # array
    0xDE: 2, 0xDF: 4,  # map
}  # fmt: skip

_FIXEXT_SIZES: dict[int, int] = {0xD4: 1, 0xD5: 2, 0xD6: 4, 0xD7: 8, 0xD8: 16}

_NUMBER_STRUCTS: dict[int, struct.Struct] = {
    0xCA: struct.Struct(">f"),
    0xCB: struct.Struct(">d"),
    0xCC: struct.Struct(">B"),
    0xCD: struct.Struct(">H"),
    0xCE: struct.Struct(">I"),
    0xCF: struct.Struct(">Q"),
    0xD0: struct.Struct(">b"),
    0xD1: struct.Struct(">h"),
    0xD2: struct.Struct(">i"),
    0xD3: struct.Struct(">q"),
}

_EXT_TYPE = struct.Struct(">b")


def _float_text(value: float) -> str:
    """Shortest decimal text for a float, JSON-style names for non-finite values."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


class DecodeBuffer:
    """Byte buffer consumed from the front by successive decode calls."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._pos

    def read(self, size: int) -> bytes:
        """Consume and return exactly ``size`` bytes.

        Raises:
            DecodeError: If fewer bytes remain. The remainder is consumed.
        """
        if size > self.remaining:
            available = self.remaining
            self._pos = len(self._data)
            msg = f"unexpected end of buffer: need {size} bytes, {available} remaining"
            raise DecodeError(msg)
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk


class Decoder:
    """Decodes one top-level value per call from a DecodeBuffer.

    Truncated containers are recovered as far as possible: the raised
    DecodeError carries the container with the children read so far.
    """

    def __init__(
        self,
        registry: ExtensionRegistry | None = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """Initialize the decoder.

        Args:
            registry: Extension interpretations. Defaults to an empty registry.
            max_depth: Maximum number of nested containers.

        Raises:
            ValueError: If max_depth is outside 1..MAX_DEPTH_LIMIT.
        """
        check_max_depth(max_depth)
        self._registry = registry or ExtensionRegistry()
        self._max_depth = max_depth

    def decode(self, buffer: DecodeBuffer) -> DecodedNode:
        """Decode the next value from the front of the buffer.

        Raises:
            DecodeError: If the value is truncated; ``node`` may hold a
                partially recovered container.
            DecodeDepthError: If containers nest deeper than ``max_depth``.
        """
        return self._decode_value(buffer, level=0)

    def _decode_value(self, buffer: DecodeBuffer, *, level: int) -> DecodedNode:
        tag = buffer.read(1)[0]
        category = classify(tag)

        if category in (FormatCategory.array, FormatCategory.map):
            return self._decode_container(buffer, tag, category, level=level)
        if category == FormatCategory.string:
            return self._decode_string(buffer, tag)
        if category == FormatCategory.extension:
            return self._decode_extension(buffer, tag)
        if category in (FormatCategory.nil, FormatCategory.reserved):
            return DecodedNode(tag, format_name(tag), bytes([tag]), "null")
        return self._decode_scalar(buffer, tag)

    @staticmethod
    def _read_length(buffer: DecodeBuffer, tag: int, fix_mask: int) -> tuple[int, bytes]:
        """Read the declared size, either packed in the tag or in a length field."""
        width = _LENGTH_FIELDS.get(tag)
        if width is None:
            return tag & fix_mask, b""
        field = buffer.read(width)
        return int.from_bytes(field, "big"), field

    def _decode_container(
        self,
        buffer: DecodeBuffer,
        tag: int,
        category: FormatCategory,
        *,
        level: int,
    ) -> DecodedNode:
        if level >= self._max_depth:
            raise DecodeDepthError(self._max_depth)

        length, raw = self._read_length(buffer, tag, 0x0F)
        count = length * 2 if category == FormatCategory.map else length
        name = format_name(tag)

        children: list[DecodedNode] = []
        for _ in range(count):
            try:
                children.append(self._decode_value(buffer, level=level + 1))
            except DecodeDepthError:
                raise
            except DecodeError as exc:
                if exc.node is not None:
                    children.append(exc.node)
                partial = DecodedNode(tag, name, raw, length=length, children=tuple(children))
                raise DecodeError(str(exc), node=partial) from None

        return DecodedNode(tag, name, raw, length=length, children=tuple(children))

    def _decode_string(self, buffer: DecodeBuffer, tag: int) -> DecodedNode:
        size, _ = self._read_length(buffer, tag, 0x1F)
        data = buffer.read(size)
        name = format_name(tag)
        if name.startswith("bin"):
            text = hex_text(data)
        else:
            text = data.decode("utf-8", errors="replace")
        return DecodedNode(tag, name, data, text, length=size)

    def _decode_extension(self, buffer: DecodeBuffer, tag: int) -> DecodedNode:
        size = _FIXEXT_SIZES.get(tag)
        if size is None:
            size, _ = self._read_length(buffer, tag, 0)
        (ext_type,) = _EXT_TYPE.unpack(buffer.read(1))
        data = buffer.read(size)
        name, text = self._registry.describe(format_name(tag), ext_type, data)
        return DecodedNode(tag, name, data, text, length=size, ext_type=ext_type)

    @staticmethod
    def _decode_scalar(buffer: DecodeBuffer, tag: int) -> DecodedNode:
        name = format_name(tag)
        if tag <= 0x7F:
            return DecodedNode(tag, name, bytes([tag]), str(tag))
        if tag >= 0xE0:
            return DecodedNode(tag, name, bytes([tag]), str(tag - 0x100))
        if tag in (0xC2, 0xC3):
            return DecodedNode(tag, name, bytes([tag]), "true" if tag == 0xC3 else "false")

        fmt = _NUMBER_STRUCTS[tag]
        raw = buffer.read(fmt.size)
        (value,) = fmt.unpack(raw)
        text = _float_text(value) if isinstance(value, float) else str(value)
        return DecodedNode(tag, name, raw, text)
