"""JSON serialization for --json flag."""

from __future__ import annotations

import dataclasses
import json
from enum import Enum
from typing import Any

from rich.console import Console

from aspark.core.models import InputMode, Sequence

console = Console()


class _Encoder(json.JSONEncoder):
    def default(self, obj: Any) -> Any:
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


def sequence_payload(seq: Sequence, mode: InputMode | None = None) -> dict[str, Any]:
    """Flatten a sequence to plain JSON-ready data."""
    return {
        "mode": mode,
        "length": len(seq),
        "min": seq.min,
        "max": seq.max,
        "labeled_count": seq.labeled_count,
        "samples": seq.samples,
    }


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    console.print_json(json.dumps(data, cls=_Encoder, indent=2))
