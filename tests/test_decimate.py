import pytest

from gribweather.pipeline.decimate import decimate, decimation_step


def test_five_thousand_samples_stride_by_five():
    samples = list(range(5000))
    result = decimate(samples, 1000)
    assert decimation_step(5000, 1000) == 5
    assert len(result) == 1000
    assert result == list(range(0, 5000, 5))
    assert result[-1] == 4995


def test_at_or_below_cap_is_identity():
    samples = list(range(1000))
    assert decimate(samples, 1000) == samples
    assert decimate([], 1000) == []


def test_floored_step_can_exceed_cap():
    result = decimate(list(range(2500)), 1000)
    assert len(result) == 1250
    assert result[:3] == [0, 2, 4]


@pytest.mark.parametrize("count", [999, 1001, 1999, 2500, 3500, 5000, 12345])
def test_decimation_is_idempotent(count):
    once = decimate(list(range(count)), 1000)
    assert decimate(once, 1000) == once


def test_cap_must_be_positive():
    with pytest.raises(ValueError):
        decimate([1, 2, 3], 0)
