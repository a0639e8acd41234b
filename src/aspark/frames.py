"""Convert sequences to ibis memtables and export them.

Tables can be materialized to any backend:

    sequence_frame(seq).to_pyarrow()
    sequence_frame(seq, RenderConfig(rows=4)).to_pandas()
"""

from __future__ import annotations

import sys

import ibis

from aspark.core.models import RenderConfig, Sequence
from aspark.display.charts import sample_step, total_steps

SEQUENCE_SCHEMA = {
    "index": "int64",
    "value": "float64",
    "label": "string",
    "step": "int64",
}


def _sample_rows(seq: Sequence, config: RenderConfig) -> list[dict]:
    steps = total_steps(config.rows)
    return [
        {
            "index": i,
            "value": s.value,
            "label": s.label,
            "step": sample_step(s.value, seq, steps, config.log),
        }
        for i, s in enumerate(seq)
    ]


def sequence_frame(seq: Sequence, config: RenderConfig | None = None) -> ibis.Table:
    """One row per sample with the chart level it renders at."""
    rows = _sample_rows(seq, config or RenderConfig())
    if not rows:
        return ibis.memtable({k: [] for k in SEQUENCE_SCHEMA}, schema=SEQUENCE_SCHEMA)
    return ibis.memtable(rows, schema=SEQUENCE_SCHEMA)


def sequence_tables(seq: Sequence, config: RenderConfig | None = None) -> dict[str, ibis.Table]:
    config = config or RenderConfig()
    summary = ibis.memtable([{
        "length": len(seq),
        "min": seq.min,
        "max": seq.max,
        "labeled_count": seq.labeled_count,
        "steps": total_steps(config.rows),
    }], schema={
        "length": "int64",
        "min": "float64",
        "max": "float64",
        "labeled_count": "int64",
        "steps": "int64",
    })
    return {"summary": summary, "samples": sequence_frame(seq, config)}


def export_tables(tables: dict[str, ibis.Table], fmt: str) -> None:
    """Export ibis tables to stdout (csv) or files (parquet)."""
    if fmt == "csv":
        for name, table in tables.items():
            sys.stdout.write(f"# {name}\n")
            table.to_pandas().to_csv(sys.stdout, index=False)
            sys.stdout.write("\n")
    elif fmt == "parquet":
        for name, table in tables.items():
            path = f"{name}.parquet"
            table.to_pandas().to_parquet(path)
            sys.stderr.write(f"Wrote {path}\n")
    else:
        raise ValueError(f"unknown export format: {fmt}")
