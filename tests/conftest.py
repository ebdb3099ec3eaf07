"""Shared test fixtures for mpdetail."""

from __future__ import annotations

import json
from io import StringIO
from typing import TYPE_CHECKING, Any

import msgpack
import pytest
from rich.console import Console

from mpdetail.core.diagnostics import Diagnostics

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def parse_documents(text: str) -> list[Any]:
    """Parse a stream of back-to-back JSON documents."""
    decoder = json.JSONDecoder()
    documents: list[Any] = []
    pos = 0
    text = text.strip()
    while pos < len(text):
        doc, end = decoder.raw_decode(text, pos)
        documents.append(doc)
        pos = end
        while pos < len(text) and text[pos].isspace():
            pos += 1
    return documents


@pytest.fixture
def diagnostics() -> Diagnostics:
    """Diagnostics writing to an in-memory console."""
    return Diagnostics(Console(file=StringIO(), width=200), record=True)


@pytest.fixture
def record_batch() -> bytes:
    """Three concatenated top-level values, as a Fluent Bit flush would carry."""
    return (
        msgpack.packb([msgpack.ExtType(0, b"\x00\x00\x00\x01\x00\x00\x00\x05"), {"log": "hello"}])
        + msgpack.packb([1, 2, 3])
        + msgpack.packb("tail")
    )


@pytest.fixture
def msgpack_file(tmp_path: Path, record_batch: bytes) -> Path:
    """A file holding the record batch."""
    path = tmp_path / "chunk.msgpack"
    path.write_bytes(record_batch)
    return path


@pytest.fixture
def parse_stream() -> Callable[[str], list[Any]]:
    """Parser for the back-to-back document stream the renderers write."""
    return parse_documents
