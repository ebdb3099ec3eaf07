"""CLI entry point for mpdetail."""

from __future__ import annotations

import binascii
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from mpdetail.core.diagnostics import Diagnostics
from mpdetail.core.models import (
    DEFAULT_INDENT_WIDTH,
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    OutputMode,
    RenderConfig,
    Status,
)
from mpdetail.plugin.lifecycle import DetailPlugin

if TYPE_CHECKING:
    from mpdetail.output.base import Renderer

app = typer.Typer(
    name="mpdetail",
    help="Show MessagePack streams in detail.",
    rich_markup_mode="rich",
)

STDIN_PATH = "-"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from mpdetail import __version__

        typer.echo(f"mpdetail {__version__}")
        raise typer.Exit()


def _parse_output_mode(value: str) -> OutputMode:
    """Parse output string to OutputMode enum."""
    try:
        return OutputMode(value)
    except ValueError:
        valid = ", ".join(o.value for o in OutputMode)
        msg = f"Invalid output mode '{value}'. Choose from: {valid}"
        raise typer.BadParameter(msg) from None


def _read_input(source: str, *, hex_input: bool) -> bytes:
    """Read raw bytes from a file or stdin, decoding hex text if requested.

    Raises:
        FileNotFoundError: If the source file does not exist.
        ValueError: If hex input is malformed.
    """
    if source == STDIN_PATH:
        data = sys.stdin.buffer.read()
    else:
        path = Path(source)
        if not path.is_file():
            msg = f"Input file does not exist: {path}"
            raise FileNotFoundError(msg)
        data = path.read_bytes()

    if not hex_input:
        return data
    text = "".join(data.decode("ascii", errors="replace").split())
    if text.lower().startswith("0x"):
        text = text[2:]
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError):
        msg = "Input is not valid hex"
        raise ValueError(msg) from None


def _get_renderer(
    output_mode: OutputMode, config: RenderConfig, diagnostics: Diagnostics
) -> Renderer:
    """Get the stream renderer for the output mode."""
    if output_mode == OutputMode.rich:
        from mpdetail.output.rich_output import RichRenderer

        return RichRenderer(diagnostics=diagnostics, config=config)

    from mpdetail.output.verbose_output import VerboseRenderer

    return VerboseRenderer(diagnostics=diagnostics, config=config)


def _run_plugin(
    data: bytes, config: RenderConfig, renderer: Renderer, diagnostics: Diagnostics
) -> Status:
    """Drive a DetailPlugin through its full lifecycle for one chunk."""
    plugin = DetailPlugin(diagnostics=diagnostics, renderer=renderer, config=config)
    plugin.register()
    status = plugin.initialize()
    if status == Status.ok:
        status = plugin.process_chunk(data)
    plugin.shutdown()
    return status


@app.command()
def main(
    source: Annotated[
        str,
        typer.Argument(help="MessagePack file to inspect, or '-' for stdin."),
    ] = STDIN_PATH,
    output: Annotated[
        str,
        typer.Option("--output", "-o", help="Output mode: verbose, rich, or tui."),
    ] = "verbose",
    hex_input: Annotated[
        bool,
        typer.Option("--hex", help="Treat input as hex text instead of raw bytes."),
    ] = False,
    stat: Annotated[
        bool,
        typer.Option("--stat", help="Show only summary statistics."),
    ] = False,
    indent: Annotated[
        int,
        typer.Option("--indent", "-i", min=0, help="Spaces per nesting level."),
    ] = DEFAULT_INDENT_WIDTH,
    max_depth: Annotated[
        int,
        typer.Option(
            "--max-depth",
            min=1,
            max=MAX_DEPTH_LIMIT,
            help="Maximum container nesting depth.",
        ),
    ] = DEFAULT_MAX_DEPTH,
    no_event_time: Annotated[
        bool,
        typer.Option("--no-event-time", help="Show ext type 0 as hex, not Fluentd EventTime."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Render every MessagePack value in the input with its format, header and raw bytes.

    Values are written as a stream of JSON-like documents, one per top-level value.
    """
    try:
        output_mode = _parse_output_mode(output)
        config = RenderConfig(
            indent_width=indent,
            max_depth=max_depth,
            event_time=not no_event_time,
        )
        data = _read_input(source, hex_input=hex_input)

        diagnostics = Diagnostics()

        if stat or output_mode == OutputMode.tui:
            from mpdetail.output.collector import NodeCollector

            collector = NodeCollector(diagnostics, config=config)
            status = _run_plugin(data, config, collector, diagnostics)

            if output_mode == OutputMode.tui:
                from mpdetail.tui import DetailApp

                DetailApp(collector.documents, stat_only=stat, config=config).run()
            elif output_mode == OutputMode.rich:
                from mpdetail.output.rich_output import RichRenderer

                RichRenderer(config=config).render_stats(collector.stats())
            else:
                from mpdetail.output.verbose_output import VerboseRenderer

                VerboseRenderer(config=config).render_stats(collector.stats())
        else:
            renderer = _get_renderer(output_mode, config, diagnostics)
            status = _run_plugin(data, config, renderer, diagnostics)

    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from None

    if status != Status.ok:
        raise typer.Exit(code=1)
