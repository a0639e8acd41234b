"""Public Python API — returns ibis tables and chart text for programmatic use.

Usage:
    import aspark.api as sp

    sp.argument("1,2,3.4,5:label1,6:label2").to_pyarrow()
    sp.frequency(open("notes.txt", "rb").read()).to_pandas()

    print(sp.sparkline([1, 5, 2, 8], rows=3, fill=True))
"""

from __future__ import annotations

import ibis

from aspark.core.models import RenderConfig
from aspark.core.sources import (
    argument_to_sequence, datastream_to_sequence, file_freq_to_sequence,
)
from aspark.display import charts
from aspark.frames import sequence_frame


def argument(data: str, **kwargs) -> ibis.Table:
    """Samples parsed from a "1,2,3:label" string."""
    return sequence_frame(argument_to_sequence(data), RenderConfig(**kwargs))


def stream(text: str, **kwargs) -> ibis.Table:
    """Samples parsed from "<value> [label]" lines, bad lines skipped."""
    return sequence_frame(datastream_to_sequence(text.split("\n")),
                          RenderConfig(**kwargs))


def frequency(data: bytes, binary: bool = False, **kwargs) -> ibis.Table:
    """Byte (binary=True) or character frequency table of `data`."""
    return sequence_frame(file_freq_to_sequence(data, binary=binary),
                          RenderConfig(**kwargs))


def sparkline(values: list[int | float], labels: list[str | None] | None = None,
              **kwargs) -> str:
    """Chart text for `values`; kwargs are RenderConfig fields."""
    return charts.sparkline(values, labels, RenderConfig(**kwargs))
