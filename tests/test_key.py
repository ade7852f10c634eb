import pytest

from metrickit.key import CompositeKey, Key
from metrickit.kind import MetricKind


def test_same_keys_different_kinds_not_equal():
    key = Key.from_name("test")
    key1 = CompositeKey(MetricKind.COUNTER, key)
    key2 = CompositeKey(MetricKind.GAUGE, key)

    assert key1 != key2
    assert key1 < key2


def test_same_kind_and_key_equal_and_hash_alike():
    a = CompositeKey(MetricKind.HISTOGRAM, Key.from_name("latency"))
    b = CompositeKey(MetricKind.HISTOGRAM, Key.from_name("latency"))
    assert a == b
    assert len({a, b}) == 1


def test_into_parts():
    key = Key.from_name("requests")
    ck = CompositeKey(MetricKind.COUNTER, key)
    assert ck.into_parts() == (MetricKind.COUNTER, key)


def test_prepend_name():
    key = Key.from_parts("loops", [("region", "east")])
    prefixed = key.prepend_name("app")
    assert prefixed.parts == ("app", "loops")
    assert prefixed.name == "app.loops"
    assert prefixed.labels == (("region", "east"),)
    assert key.name == "loops"


def test_str_includes_labels():
    key = Key.from_parts("hits", [("type", "http")])
    assert str(key) == "hits{type = http}"
    assert str(Key.from_name("plain")) == "plain"


def test_empty_key_rejected():
    with pytest.raises(ValueError):
        Key(())