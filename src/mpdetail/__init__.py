"""Show MessagePack streams in detail."""

__version__ = "0.1.0"
