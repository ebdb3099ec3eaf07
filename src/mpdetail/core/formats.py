"""Classification of MessagePack tag bytes.

Every byte 0x00-0xff maps to exactly one FormatCategory and one format
name. The tables are built once at import time from the range list below,
so a lookup can never fall through to a default.
"""

from __future__ import annotations

from mpdetail.core.models import FormatCategory

NIL_FORMAT = 0xC0
NEVER_USED_FORMAT = 0xC1

# (first, last, name, category), inclusive ranges covering 0x00-0xff
_FORMAT_RANGES: tuple[tuple[int, int, str, FormatCategory], ...] = (
    (0x00, 0x7F, "positive fixint", FormatCategory.scalar),
    (0x80, 0x8F, "fixmap", FormatCategory.map),
    (0x90, 0x9F, "fixarray", FormatCategory.array),
    (0xA0, 0xBF, "fixstr", FormatCategory.string),
    (0xC0, 0xC0, "nil", FormatCategory.nil),
    (0xC1, 0xC1, "never used", FormatCategory.reserved),
    (0xC2, 0xC2, "false", FormatCategory.scalar),
    (0xC3, 0xC3, "true", FormatCategory.scalar),
    (0xC4, 0xC4, "bin8", FormatCategory.string),
    (0xC5, 0xC5, "bin16", FormatCategory.string),
    (0xC6, 0xC6, "bin32", FormatCategory.string),
    (0xC7, 0xC7, "ext8", FormatCategory.extension),
    (0xC8, 0xC8, "ext16", FormatCategory.extension),
    (0xC9, 0xC9, "ext32", FormatCategory.extension),
    (0xCA, 0xCA, "float32", FormatCategory.scalar),
    (0xCB, 0xCB, "float64", FormatCategory.scalar),
    (0xCC, 0xCC, "uint8", FormatCategory.scalar),
    (0xCD, 0xCD, "uint16", FormatCategory.scalar),
    (0xCE, 0xCE, "uint32", FormatCategory.scalar),
    (0xCF, 0xCF, "uint64", FormatCategory.scalar),
    (0xD0, 0xD0, "int8", FormatCategory.scalar),
    (0xD1, 0xD1, "int16", FormatCategory.scalar),
    (0xD2, 0xD2, "int32", FormatCategory.scalar),
    (0xD3, 0xD3, "int64", FormatCategory.scalar),
    (0xD4, 0xD4, "fixext1", FormatCategory.extension),
    (0xD5, 0xD5, "fixext2", FormatCategory.extension),
    (0xD6, 0xD6, "fixext4", FormatCategory.extension),
    (0xD7, 0xD7, "fixext8", FormatCategory.extension),
    (0xD8, 0xD8, "fixext16", FormatCategory.extension),
    (0xD9, 0xD9, "str8", FormatCategory.string),
    (0xDA, 0xDA, "str16", FormatCategory.string),
    (0xDB, 0xDB, "str32", FormatCategory.string),
    (0xDC, 0xDC, "array16", FormatCategory.array),
    (0xDD, 0xDD, "array32", FormatCategory.array),
    (0xDE, 0xDE, "map16", FormatCategory.map),
    (0xDF, 0xDF, "map32", FormatCategory.map),
    (0xE0, 0xFF, "negative fixint", FormatCategory.scalar),
)


def _build_tables() -> tuple[tuple[str, ...], tuple[FormatCategory, ...]]:
    """Expand the range list into per-byte lookup tables."""
    names: list[str | None] = [None] * 256
    categories: list[FormatCategory | None] = [None] * 256
    for first, last, name, category in _FORMAT_RANGES:
        for tag in range(first, last + 1):
            if names[tag] is not None:
                msg = f"Tag 0x{tag:02x} classified twice"
                raise RuntimeError(msg)
            names[tag] = name
            categories[tag] = category
    missing = [tag for tag, name in enumerate(names) if name is None]
    if missing:
        msg = f"Unclassified tags: {', '.join(f'0x{t:02x}' for t in missing)}"
        raise RuntimeError(msg)
    return tuple(n for n in names if n is not None), tuple(
        c for c in categories if c is not None
    )


_NAMES, _CATEGORIES = _build_tables()


def _check_tag(tag: int) -> None:
    if not 0 <= tag <= 0xFF:
        msg = f"Format tag must be a single byte, got {tag}"
        raise ValueError(msg)


def classify(tag: int) -> FormatCategory:
    """Return the rendering category for a tag byte."""
    _check_tag(tag)
    return _CATEGORIES[tag]


def format_name(tag: int) -> str:
    """Return the MessagePack format name for a tag byte."""
    _check_tag(tag)
    return _NAMES[tag]
