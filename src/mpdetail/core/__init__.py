"""Public API for mpdetail.core."""

from __future__ import annotations

from mpdetail.core.decoder import DecodeBuffer, Decoder
from mpdetail.core.diagnostics import Diagnostics
from mpdetail.core.driver import StreamDriver
from mpdetail.core.errors import (
    DecodeDepthError,
    DecodeError,
    NestingDepthError,
    RenderError,
    SizeMismatchError,
)
from mpdetail.core.extensions import ExtensionFormat, ExtensionRegistry
from mpdetail.core.formats import classify, format_name
from mpdetail.core.models import (
    DecodedNode,
    FormatCategory,
    NodeStats,
    OutputMode,
    PluginState,
    RenderConfig,
    Status,
)

__all__ = [
    "DecodeBuffer",
    "DecodeDepthError",
    "DecodeError",
    "DecodedNode",
    "Decoder",
    "Diagnostics",
    "ExtensionFormat",
    "ExtensionRegistry",
    "FormatCategory",
    "NestingDepthError",
    "NodeStats",
    "OutputMode",
    "PluginState",
    "RenderConfig",
    "RenderError",
    "SizeMismatchError",
    "StreamDriver",
    "Status",
    "classify",
    "format_name",
]
