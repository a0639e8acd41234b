"""ASCII sparklines, stacked over several rows for extra resolution."""

from __future__ import annotations

import math
from typing import Iterator, TextIO

import click

from aspark.core.models import RenderConfig, Sample, Sequence

# Glyphs from lowest to highest level; one row of the chart holds one level.
SPARK_CHARS = "_-`"
SPARK_CHARS_FILL = "_o#"
FILL_CHAR = "|"
PALETTE_SIZE = len(SPARK_CHARS)


def total_steps(rows: int) -> int:
    return PALETTE_SIZE * rows


def _log_scale(x: float, halved: bool) -> float:
    """log(x + 1), where a halved `x` stands for 2 * x."""
    if not halved:
        return math.log(x + 1)
    full = 2 * x
    if math.isfinite(full):
        return math.log(full + 1)
    return math.log(x) + math.log(2)


def sample_step(value: float, seq: Sequence, steps: int, log: bool = False) -> int:
    """Discretize `value` to a level in [0, steps) relative to the sequence range."""
    relval = value - seq.min
    span = seq.span
    # a range wider than the largest float is measured in halves
    halved = not math.isfinite(span)
    if halved:
        relval = value / 2 - seq.min / 2
        span = seq.max / 2 - seq.min / 2
    if log:
        relval = _log_scale(relval, halved)
        span = _log_scale(span, halved)
    if span == 0:
        span = 1
    scaled = relval * steps
    if math.isfinite(scaled):
        # truncate the scaled value first, then the quotient
        step = int(scaled) / span
    else:
        step = relval / span * steps
    return int(max(0, min(step, steps - 1)))


def glyph_for_step(step: int, row: int, config: RenderConfig) -> str:
    """Character drawn at glyph row `row` (0 = top) for a sample at `step`."""
    idx = step - (config.rows - row - 1) * PALETTE_SIZE
    if 0 <= idx < PALETTE_SIZE:
        return SPARK_CHARS_FILL[idx] if config.fill else SPARK_CHARS[idx]
    if config.fill and idx >= PALETTE_SIZE:
        return FILL_CHAR
    return " "


def glyph_row(chunk: list[Sample], seq: Sequence, row: int,
              config: RenderConfig) -> str:
    steps = total_steps(config.rows)
    return "".join(
        glyph_for_step(sample_step(s.value, seq, steps, config.log), row, config)
        for s in chunk
    )


def label_row(chunk: list[Sample], offset: int) -> str:
    """One character of every label, labels read top to bottom."""
    return "".join(
        s.label[offset] if s.label is not None and len(s.label) > offset else " "
        for s in chunk
    )


def has_labels(chunk: list[Sample]) -> bool:
    return any(s.label is not None for s in chunk)


def row_has_content(chunk: list[Sample], row: int, config: RenderConfig) -> bool:
    """Whether output row `row` of a chunk should be emitted at all.

    Glyph rows always are; the label margin only when the chunk has labels;
    label rows while at least one label is still long enough.
    """
    if not chunk:
        return False
    if row < config.rows:
        return True
    if not has_labels(chunk):
        return False
    offset = row - config.rows - config.label_margin_top
    if offset < 0:
        return True
    return any(s.label is not None and len(s.label) > offset for s in chunk)


def chunk_line(chunk: list[Sample], seq: Sequence, row: int,
               config: RenderConfig) -> str:
    if row < config.rows:
        return glyph_row(chunk, seq, row, config)
    offset = row - config.rows - config.label_margin_top
    if offset < 0:
        return " " * len(chunk)
    return label_row(chunk, offset)


def render_chunk(chunk: list[Sample], seq: Sequence,
                 config: RenderConfig) -> list[str]:
    """Render one self-contained block: glyph rows, margin, label rows."""
    lines = []
    row = 0
    while row_has_content(chunk, row, config):
        lines.append(chunk_line(chunk, seq, row, config))
        row += 1
    return lines


def render_lines(seq: Sequence, config: RenderConfig) -> Iterator[str]:
    """All output lines, one block per `config.columns` samples."""
    for chunk in seq.chunks(config.columns):
        yield from render_chunk(chunk, seq, config)


def render_sequence(seq: Sequence, config: RenderConfig,
                    out: TextIO | None = None) -> None:
    """Write the chart to `out` (stdout by default), one row per line."""
    for line in render_lines(seq, config):
        click.echo(line, file=out)


def render_text(seq: Sequence, config: RenderConfig) -> str:
    return "".join(line + "\n" for line in render_lines(seq, config))


def sparkline(values: list[int | float], labels: list[str | None] | None = None,
              config: RenderConfig | None = None) -> str:
    """Render a sparkline string from a list of numbers."""
    seq = Sequence()
    labels = labels or [None] * len(values)
    if len(labels) != len(values):
        raise ValueError("labels must match values in length")
    for value, label in zip(values, labels):
        seq.add(float(value), label)
    return render_text(seq, config or RenderConfig())
