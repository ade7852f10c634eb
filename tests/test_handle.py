import threading

import pytest

from metrickit.handle import GaugeValue, Handle
from metrickit.kind import MetricKind


def test_counter_starts_at_zero_and_accumulates():
    handle = Handle.counter()
    assert handle.read_counter() == 0
    values = [42, 7, 1, 100]
    for value in values:
        handle.increment_counter(value)
    assert handle.read_counter() == sum(values)


def test_counter_wraps_like_unsigned_64_bit():
    handle = Handle.counter()
    handle.increment_counter(2**64 - 1)
    handle.increment_counter(1)
    assert handle.read_counter() == 0


def test_counter_rejects_negative_increment():
    with pytest.raises(ValueError):
        Handle.counter().increment_counter(-1)


def test_counter_is_thread_safe():
    handle = Handle.counter()

    def work():
        for _ in range(1000):
            handle.increment_counter(1)

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert handle.read_counter() == 4 * 1000


def test_gauge_starts_at_zero_and_takes_absolute_value():
    handle = Handle.gauge()
    assert handle.read_gauge() == 0.0
    handle.update_gauge(GaugeValue.absolute(-420.69))
    assert handle.read_gauge() == -420.69


def test_gauge_increment_then_decrement_returns_to_start():
    handle = Handle.gauge()
    handle.update_gauge(GaugeValue.absolute(12.0))
    handle.update_gauge(GaugeValue.increment(2.5))
    assert handle.read_gauge() > 12.0
    handle.update_gauge(GaugeValue.decrement(2.5))
    assert handle.read_gauge() == 12.0


def test_gauge_value_update_value():
    assert GaugeValue.absolute(3.0).update_value(100.0) == 3.0
    assert GaugeValue.increment(3.0).update_value(4.0) == 4.0 + 3.0
    assert GaugeValue.decrement(3.0).update_value(4.0) == 4.0 - 3.0


def test_gauge_value_rejects_unknown_operation():
    with pytest.raises(ValueError):
        GaugeValue("multiply", 2.0)


def test_histogram_records_and_reads_back():
    handle = Handle.histogram()
    assert handle.read_histogram_is_empty()
    assert handle.read_histogram() == []
    samples = [3.14, 2.0, 6.5]
    for sample in samples:
        handle.record_histogram(sample)
    assert not handle.read_histogram_is_empty()
    assert handle.read_histogram() == samples
    # Reading does not clear.
    assert handle.read_histogram() == samples


def test_histogram_read_with_clear_collects_then_empties():
    handle = Handle.histogram()
    samples = [float(i) for i in range(150)]
    for sample in samples:
        handle.record_histogram(sample)
    seen = []
    handle.read_histogram_with_clear(seen.extend)
    assert sorted(seen) == samples
    assert handle.read_histogram_is_empty()
    assert handle.read_histogram() == []


def test_handle_kind_property():
    assert Handle.counter().kind is MetricKind.COUNTER
    assert Handle.gauge().kind is MetricKind.GAUGE
    assert Handle.histogram().kind is MetricKind.HISTOGRAM


@pytest.mark.parametrize(
    "factory, action",
    [
        (Handle.gauge, lambda h: h.increment_counter(1)),
        (Handle.histogram, lambda h: h.read_counter()),
        (Handle.counter, lambda h: h.update_gauge(GaugeValue.absolute(1.0))),
        (Handle.histogram, lambda h: h.read_gauge()),
        (Handle.counter, lambda h: h.record_histogram(1.0)),
        (Handle.gauge, lambda h: h.read_histogram()),
        (Handle.counter, lambda h: h.read_histogram_is_empty()),
        (Handle.gauge, lambda h: h.read_histogram_with_clear(lambda _: None)),
    ],
)
def test_wrong_kind_raises(factory, action):
    with pytest.raises(TypeError):
        action(factory())