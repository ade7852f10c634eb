import pytest
from hypothesis import given
from hypothesis import strategies as st

from metrickit.histogram import Histogram


def test_empty_bounds_rejected():
    with pytest.raises(ValueError):
        Histogram([])


def test_histogram():
    values = [3.0, 2.0, 6.0, 12.0, 56.0, 82.0, 202.0, 100.0, 29.0]
    histogram = Histogram([10.0, 25.0, 100.0])

    histogram.record_many(values)
    histogram.record(89.0)

    result = histogram.buckets()
    assert len(result) == 3
    assert result[0] == (10.0, 3)
    assert result[1] == (25.0, 4)
    assert result[2] == (100.0, 9)

    assert histogram.count == len(values) + 1
    assert histogram.sum == 581.0


def test_fresh_histogram_is_zeroed():
    histogram = Histogram([1.0, 2.0])
    assert histogram.buckets() == [(1.0, 0), (2.0, 0)]
    assert histogram.count == 0
    assert histogram.sum == 0.0


@given(st.lists(st.integers(min_value=-50, max_value=250).map(float), max_size=50))
def test_record_many_matches_record(samples):
    bounds = [0.0, 10.0, 25.0, 100.0]
    one_by_one = Histogram(bounds)
    for sample in samples:
        one_by_one.record(sample)
    batched = Histogram(bounds)
    batched.record_many(samples)

    assert batched.buckets() == one_by_one.buckets()
    assert batched.count == one_by_one.count == len(samples)
    assert batched.sum == one_by_one.sum


@given(st.lists(st.floats(min_value=-1e6, max_value=1e6), max_size=50))
def test_buckets_are_cumulative(samples):
    histogram = Histogram([-10.0, 0.0, 10.0, 1000.0])
    histogram.record_many(samples)
    counts = [c for _, c in histogram.buckets()]
    assert counts == sorted(counts)
    assert counts[-1] <= histogram.count