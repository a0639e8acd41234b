"""Data models as dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class InputMode(Enum):
    ARGUMENT = "argument"  # comma separated values on the command line
    STREAM = "stream"  # one value (and optional label) per stdin line
    TXTFREQ = "txtfreq"  # character frequency of stdin text
    BINFREQ = "binfreq"  # frequency of all 256 byte values


@dataclass(frozen=True)
class Sample:
    value: float
    label: str | None = None


@dataclass
class Sequence:
    """Ordered samples plus running min/max and labeled-sample count."""

    samples: list[Sample] = field(default_factory=list)
    min: float | None = None
    max: float | None = None
    labeled_count: int = 0

    def add(self, value: float, label: str | None = None) -> None:
        if not self.samples:
            self.min = self.max = value
        elif value < self.min:
            self.min = value
        elif value > self.max:
            self.max = value
        self.samples.append(Sample(value, label))
        if label is not None:
            self.labeled_count += 1

    @property
    def span(self) -> float:
        if not self.samples:
            return 0.0
        return self.max - self.min

    def chunks(self, size: int) -> Iterator[list[Sample]]:
        """Yield consecutive runs of at most `size` samples, in order."""
        for start in range(0, len(self.samples), size):
            yield self.samples[start:start + size]

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)


@dataclass(frozen=True)
class RenderConfig:
    columns: int = 80
    rows: int = 2  # stacked rows, multiplies vertical resolution
    label_margin_top: int = 1  # blank rows between chart and labels
    fill: bool = False
    log: bool = False

    def __post_init__(self) -> None:
        if self.columns < 1:
            raise ValueError("columns must be >= 1")
        if self.rows < 1:
            raise ValueError("rows must be >= 1")
        if self.label_margin_top < 0:
            raise ValueError("label_margin_top must be >= 0")
