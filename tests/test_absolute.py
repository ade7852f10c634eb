from metrickit.debugging import DebuggingRecorder, DebugValue
from metrickit.handle import GaugeValue
from metrickit.key import Key
from metrickit.layers.absolute import AbsoluteLayer


def _setup(patterns=("rdkafka",)):
    recorder = DebuggingRecorder(ordered=True)
    snapshotter = recorder.snapshotter()
    layered = AbsoluteLayer.from_patterns(patterns).layer(recorder)
    return layered, snapshotter


def test_basic_functionality():
    layered, snapshotter = _setup()
    assert len(snapshotter.snapshot()) == 0

    layered.register_counter(Key.from_name("counter"), None, None)
    layered.register_gauge(Key.from_name("gauge"), None, None)
    layered.register_histogram(Key.from_name("histo"), None, None)

    after = snapshotter.snapshot()
    assert len(after) == 3
    assert after[0].key.key == Key.from_name("counter")
    assert after[1].key.key == Key.from_name("gauge")
    assert after[2].key.key == Key.from_name("histo")

    layered.increment_counter(Key.from_name("counter"), 42)
    layered.update_gauge(Key.from_name("gauge"), GaugeValue.absolute(-420.69))
    layered.record_histogram(Key.from_name("histo"), 3.14)

    after = snapshotter.snapshot()
    assert len(after) == 3
    assert after[0].key.key == Key.from_name("counter")
    assert after[0].value == DebugValue.counter(42)
    assert after[1].key.key == Key.from_name("gauge")
    assert after[1].value == DebugValue.gauge(-420.69)
    assert after[2].key.key == Key.from_name("histo")
    assert after[2].value == DebugValue.histogram([3.14])


def test_absolute_to_delta():
    layered, snapshotter = _setup()
    assert len(snapshotter.snapshot()) == 0

    layered.increment_counter(Key.from_name("counter"), 42)
    after = snapshotter.snapshot()
    assert len(after) == 1
    assert after[0].key.key == Key.from_name("counter")
    assert after[0].value == DebugValue.counter(42)

    layered.increment_counter(Key.from_name("rdkafka.bytes"), 18)
    after = snapshotter.snapshot()
    assert len(after) == 2
    assert after[0].value == DebugValue.counter(42)
    assert after[1].key.key == Key.from_name("rdkafka.bytes")
    assert after[1].value == DebugValue.counter(18)

    layered.increment_counter(Key.from_name("counter"), 42)
    layered.increment_counter(Key.from_name("rdkafka.bytes"), 18)
    after = snapshotter.snapshot()
    assert len(after) == 2
    assert after[0].value == DebugValue.counter(84)
    assert after[1].value == DebugValue.counter(18)

    layered.increment_counter(Key.from_name("rdkafka.bytes"), 24)
    after = snapshotter.snapshot()
    assert after[1].key.key == Key.from_name("rdkafka.bytes")
    assert after[1].value == DebugValue.counter(24)

    layered.increment_counter(Key.from_name("rdkafka.bytes"), 18)
    after = snapshotter.snapshot()
    assert len(after) == 2
    assert after[1].value == DebugValue.counter(24)


def test_zero_on_new_matching_key_is_dropped():
    layered, snapshotter = _setup()
    layered.increment_counter(Key.from_name("rdkafka.bytes"), 0)
    assert snapshotter.snapshot() == []


def test_match_in_any_name_part():
    layered, snapshotter = _setup()
    key = Key(("prefix", "rdkafka.bytes"))
    layered.increment_counter(key, 10)
    layered.increment_counter(key, 5)
    after = snapshotter.snapshot()
    assert len(after) == 1
    assert after[0].value == DebugValue.counter(10)


def test_case_insensitive_and_add_pattern():
    recorder = DebuggingRecorder(ordered=True)
    snapshotter = recorder.snapshotter()
    layer = AbsoluteLayer.from_patterns([]).add_pattern("rdkafka").case_insensitive(True)
    assert layer.patterns == ("rdkafka",)
    assert layer.is_case_insensitive
    layered = layer.layer(recorder)

    layered.increment_counter(Key.from_name("RDKafka.bytes"), 18)
    layered.increment_counter(Key.from_name("RDKafka.bytes"), 10)
    after = snapshotter.snapshot()
    assert after[0].value == DebugValue.counter(18)


def test_case_sensitive_by_default():
    layered, snapshotter = _setup()
    layered.increment_counter(Key.from_name("RDKafka.bytes"), 18)
    layered.increment_counter(Key.from_name("RDKafka.bytes"), 10)
    after = snapshotter.snapshot()
    assert after[0].value == DebugValue.counter(28)


def test_use_dfa_flag_is_stored():
    layer = AbsoluteLayer.from_patterns(["x"])
    assert layer.uses_dfa is True
    assert layer.use_dfa(False).uses_dfa is False