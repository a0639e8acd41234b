import dataclasses

import pytest

from aspark.core.models import RenderConfig, Sample, Sequence


def test_empty_sequence_has_no_range():
    seq = Sequence()
    assert seq.min is None and seq.max is None
    assert len(seq) == 0
    assert seq.span == 0.0


def test_first_sample_sets_min_and_max():
    seq = Sequence()
    seq.add(4.5)
    assert seq.min == seq.max == 4.5


def test_min_max_follow_appends():
    seq = Sequence()
    for v in [3, 7, -2, 5, 10]:
        seq.add(v)
    assert seq.min == -2
    assert seq.max == 10
    assert all(seq.min <= s.value <= seq.max for s in seq)
    assert [s.value for s in seq] == [3, 7, -2, 5, 10]


def test_labeled_count_counts_empty_labels():
    seq = Sequence()
    seq.add(1)
    seq.add(2, "x")
    seq.add(3, "")
    assert seq.labeled_count == 2


def test_sample_is_immutable():
    s = Sample(1.0, "a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        s.value = 2.0  # type: ignore[misc]


def test_chunks_preserve_order_and_size():
    seq = Sequence()
    for v in range(7):
        seq.add(v)
    chunks = list(seq.chunks(3))
    assert [len(c) for c in chunks] == [3, 3, 1]
    assert [s.value for c in chunks for s in c] == list(range(7))


@pytest.mark.parametrize("kwargs", [
    {"columns": 0}, {"rows": 0}, {"label_margin_top": -1},
])
def test_render_config_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        RenderConfig(**kwargs)


def test_render_config_defaults():
    config = RenderConfig()
    assert (config.columns, config.rows, config.label_margin_top) == (80, 2, 1)
    assert not config.fill and not config.log
