"""CLI entry point — a single click command that reads a sequence and charts it."""

from __future__ import annotations

import os
import re
import sys

import click
from rich.console import Console
from rich.markup import escape

from aspark.core.models import InputMode, RenderConfig
from aspark.core.sources import DataFormatError, read_sequence
from aspark.display.charts import render_sequence

err_console = Console(stderr=True)

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "token_normalize_func": str.lower,
}

DEFAULT_COLUMNS = 80
VALUE_OPTIONS = {"--columns", "--rows", "--label-margin-top", "--format"}
_NEGATIVE_NUMBER = re.compile(r"-\.?\d")


class SparkCommand(click.Command):
    """Command that accepts negative numbers as data and exits 1 on bad usage."""

    def parse_args(self, ctx, args):
        # `aspark -1,2,3` -> the data starts with "-" but is not an option
        if "--" not in args:
            options, data = [], []
            prev = None
            for arg in args:
                if _NEGATIVE_NUMBER.match(arg) and (prev or "").lower() not in VALUE_OPTIONS:
                    data.append(arg)
                else:
                    options.append(arg)
                prev = arg
            if data:
                args = options + ["--"] + data
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def fail(message: str) -> None:
    err_console.print(f"[red]Error:[/] {escape(message)}", soft_wrap=True)
    sys.exit(1)


def detect_columns(explicit: int | None = None, environ=None) -> int:
    """Explicit width wins, then $COLUMNS, then 80."""
    if explicit is not None:
        return explicit
    environ = os.environ if environ is None else environ
    try:
        columns = int(environ.get("COLUMNS", ""))
    except ValueError:
        return DEFAULT_COLUMNS
    return columns if columns > 0 else DEFAULT_COLUMNS


def select_mode(data: str | None, stream: bool, txtfreq: bool, binfreq: bool) -> InputMode:
    """Pick the single active data source, or exit with an error."""
    selected = [mode for mode, on in [
        (InputMode.STREAM, stream),
        (InputMode.TXTFREQ, txtfreq),
        (InputMode.BINFREQ, binfreq),
    ] if on]
    if len(selected) > 1:
        fail("conflicting modes: " + ", ".join(f"--{m.value}" for m in selected))
    if selected and data is not None:
        fail("data argument passed but incompatible mode selected.")
    if not selected and data is None:
        fail("missing data.")
    return selected[0] if selected else InputMode.ARGUMENT


@click.command(cls=SparkCommand, context_settings=CONTEXT_SETTINGS)
@click.argument("data", required=False)
@click.option("--stream", is_flag=True, help="Read '<value> [label]' lines from stdin")
@click.option("--txtfreq", is_flag=True, help="Chart character frequency of stdin text")
@click.option("--binfreq", is_flag=True, help="Chart frequency of all 256 byte values on stdin")
@click.option("--log", "log_scale", is_flag=True, help="Logarithmic scale")
@click.option("--fill", is_flag=True, help="Fill the area under the sparkline")
@click.option("--columns", type=click.IntRange(min=1), default=None,
              help="Output width  [default: $COLUMNS or 80]")
@click.option("--rows", type=click.IntRange(min=1), default=2, show_default=True,
              help="Rows used to increase vertical resolution")
@click.option("--label-margin-top", type=click.IntRange(min=0), default=1,
              show_default=True, help="Blank rows between chart and labels")
@click.option("--json", "json_output", is_flag=True, help="Output the parsed sequence as JSON")
@click.option("--format", "fmt", type=click.Choice(["csv", "parquet"]),
              default=None, help="Export the parsed sequence as tables")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def main(data, stream, txtfreq, binfreq, log_scale, fill, columns, rows,
         label_margin_top, json_output, fmt, verbose):
    """ASCII sparklines from your terminal.

    \b
    Usage:
      aspark 1,2,3.4,5:label1,6:label2   Chart comma separated values
      some-cmd | aspark --stream          One value (and label) per line
      aspark --txtfreq < file.txt         Character frequency of a text
      aspark --binfreq < file.bin         Byte frequency of a binary
    """
    mode = select_mode(data, stream, txtfreq, binfreq)
    config = RenderConfig(
        columns=detect_columns(columns),
        rows=rows,
        label_margin_top=label_margin_top,
        fill=fill,
        log=log_scale,
    )

    stdin = None if mode is InputMode.ARGUMENT else click.get_binary_stream("stdin")
    try:
        seq = read_sequence(mode, data, stdin)
    except DataFormatError as e:
        fail(f"Bad data format: '{e.data}'")

    if verbose:
        blocks = -(-len(seq) // config.columns)
        err_console.print(
            f"[dim]{mode.value}: {len(seq)} samples ({seq.labeled_count} labeled), "
            f"min {seq.min} max {seq.max}[/]", soft_wrap=True)
        err_console.print(
            f"[dim]{blocks} block(s) of {config.columns} columns x {config.rows} rows[/]",
            soft_wrap=True)

    if fmt:
        from aspark.frames import export_tables, sequence_tables
        export_tables(sequence_tables(seq, config), fmt)
    elif json_output:
        from aspark.display.json_out import print_json, sequence_payload
        print_json(sequence_payload(seq, mode))
    else:
        render_sequence(seq, config)
