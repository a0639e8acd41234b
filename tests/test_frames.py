import json

import aspark.api as sp
from aspark.core.models import RenderConfig, Sequence
from aspark.core.sources import argument_to_sequence
from aspark.display.json_out import sequence_payload
from aspark.frames import SEQUENCE_SCHEMA, sequence_frame, sequence_tables


def test_sequence_frame_columns():
    table = sequence_frame(argument_to_sequence("1,2:x"))
    assert list(table.columns) == list(SEQUENCE_SCHEMA)


def test_sequence_frame_steps_follow_config():
    seq = argument_to_sequence("0,1,2,3,4,5")
    df = sequence_frame(seq, RenderConfig(rows=1)).to_pandas()
    assert df["value"].tolist() == [0, 1, 2, 3, 4, 5]
    assert df["step"].tolist() == [0, 0, 1, 1, 2, 2]
    assert df["index"].tolist() == list(range(6))


def test_empty_sequence_frame():
    table = sequence_frame(Sequence())
    assert list(table.columns) == list(SEQUENCE_SCHEMA)
    assert table.to_pandas().empty


def test_sequence_tables_summary():
    tables = sequence_tables(argument_to_sequence("1:a,5"), RenderConfig(rows=3))
    assert set(tables) == {"summary", "samples"}
    row = tables["summary"].to_pandas().iloc[0]
    assert row["length"] == 2
    assert row["labeled_count"] == 1
    assert row["steps"] == 9


def test_api_frequency():
    df = sp.frequency(b"\x01\x01", binary=True).to_pandas()
    assert len(df) == 256
    assert df["value"].tolist()[1] == 2


def test_api_stream_skips_bad_lines():
    df = sp.stream("1 a\noops\n2\n").to_pandas()
    assert df["value"].tolist() == [1, 2]


def test_api_sparkline():
    assert sp.sparkline([5, 5, 5], rows=1) == "___\n"
    assert sp.sparkline([0, 1, 2], rows=2, fill=True) == " _#\n_||\n"


def test_sequence_payload():
    payload = sequence_payload(argument_to_sequence("1,2:x"))
    assert payload["length"] == 2
    assert payload["labeled_count"] == 1
    assert payload["min"] == 1 and payload["max"] == 2


def test_sequence_payload_serializes_mode():
    from aspark.core.models import InputMode
    from aspark.display.json_out import _Encoder

    payload = sequence_payload(argument_to_sequence("1"), InputMode.STREAM)
    text = json.dumps(payload, cls=_Encoder)
    assert '"mode": "stream"' in text
    assert '"samples": [{"value": 1.0, "label": null}]' in text
