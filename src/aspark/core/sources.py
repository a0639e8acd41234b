"""Sequence builders — argument string, line stream, byte frequency."""

from __future__ import annotations

import math
import re
from typing import BinaryIO, Iterable

from aspark.core.models import InputMode, Sequence

# strtod-style decimal: sign, digits with optional fraction, optional exponent
_NUMBER_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE | re.ASCII,
)

TXTFREQ_FIRST = ord("!")
TXTFREQ_LAST = ord("Z")


class DataFormatError(Exception):
    def __init__(self, data: str, entry: str):
        super().__init__(f"Bad data format: {data!r} (invalid entry {entry!r})")
        self.data = data
        self.entry = entry


def parse_number(text: str) -> float | None:
    """Parse a whole token as a number, or return None."""
    if not _NUMBER_RE.fullmatch(text):
        return None
    return float(text)


def argument_to_sequence(arg: str) -> Sequence:
    """Convert "1,2,3.4,5:label1,6:label2" into a sequence.

    Raises DataFormatError on the first entry that is not a finite number;
    nothing is returned in that case.
    """
    seq = Sequence()
    if not arg:
        return seq
    entries = arg.split(",")
    # "1,2," has a dangling separator, not an empty third entry
    if len(entries) > 1 and entries[-1] == "":
        entries.pop()

    for entry in entries:
        number, sep, label = entry.partition(":")
        value = parse_number(number.lstrip())
        if value is None or not math.isfinite(value):
            raise DataFormatError(arg, entry)
        seq.add(value, label if sep else None)
    return seq


def datastream_to_sequence(lines: Iterable[str]) -> Sequence:
    """Build a sequence from "<value> [label]" lines.

    Very tolerant: blank lines and lines whose first token is not a number
    are skipped, tokens after the label are ignored.
    """
    seq = Sequence()
    for line in lines:
        tokens = line.split(None, 2)
        if not tokens:
            continue
        value = parse_number(tokens[0])
        if value is None or not math.isfinite(value):
            continue
        seq.add(value, tokens[1] if len(tokens) > 1 else None)
    return seq


def count_bytes(data: bytes, fold_case: bool = False) -> list[int]:
    counts = [0] * 256
    if fold_case:
        data = data.upper()  # ASCII only for bytes
    for byte in data:
        counts[byte] += 1
    return counts


def file_freq_to_sequence(data: bytes, binary: bool = False) -> Sequence:
    """Tally byte frequencies of `data` into a sequence, one sample per symbol.

    Text mode folds case and covers "!" through "Z"; binary mode covers
    every byte value, labeled with its decimal number.
    """
    counts = count_bytes(data, fold_case=not binary)
    seq = Sequence()
    if binary:
        for byte, count in enumerate(counts):
            seq.add(float(count), str(byte))
    else:
        for byte in range(TXTFREQ_FIRST, TXTFREQ_LAST + 1):
            seq.add(float(counts[byte]), chr(byte))
    return seq


def read_sequence(mode: InputMode, data: str | None = None,
                  stdin: BinaryIO | None = None) -> Sequence:
    """Build the sequence for `mode`, reading stdin to EOF where needed."""
    if mode is InputMode.ARGUMENT:
        if data is None:
            raise ValueError("argument mode needs data")
        return argument_to_sequence(data)

    if stdin is None:
        raise ValueError(f"{mode.value} mode needs an input stream")
    raw = stdin.read()
    if mode is InputMode.STREAM:
        text = raw.decode("utf-8", errors="replace")
        return datastream_to_sequence(text.split("\n"))
    return file_freq_to_sequence(raw, binary=mode is InputMode.BINFREQ)
