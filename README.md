# metrickit

Building blocks for anyone writing a metrics recorder or exporter.

metrickit gives you the pieces that sit between "a metric was emitted" and
"a metric was rendered somewhere":

- **Keys and kinds** – `Key`, `CompositeKey`, `MetricKind` and
  `MetricKindMask` (in `metrickit.key` and `metrickit.kind`) for naming
  metrics and telling counters, gauges and histograms apart.
- **Storage** – `Registry` (`metrickit.registry`) maps keys to handles and
  tracks a generation per entry, so stale entries can be pruned safely.
  `Handle` (`metrickit.handle`) stores a counter, gauge or histogram value;
  gauges are changed with `GaugeValue.absolute`, `.increment` and
  `.decrement`, and histogram samples go into an `AtomicBucket`
  (`metrickit.bucket`).
- **Aggregation** – `Histogram` (`metrickit.histogram`) for fixed-bound
  bucketed data, `Summary` (`metrickit.summary`) for quantiles with a
  relative-error guarantee, and `Quantile` / `parse_quantiles`
  (`metrickit.quantile`) for turning `0.99` into a `p99` label.
- **Housekeeping** – `Recency` (`metrickit.recency`) removes metrics from a
  registry once they have been idle longer than a timeout.
- **Layers** – wrap any recorder to change its behaviour without touching
  it: `PrefixLayer`, `FilterLayer`, `AbsoluteLayer`, plus `FanoutBuilder`
  to send everything to several recorders and `Stack` to compose layers
  (all under `metrickit.layers`).
- **Testing** – `DebuggingRecorder` (`metrickit.debugging`) keeps every
  metric in memory and hands out a `Snapshotter` so tests can look at the
  raw values.

It has no runtime dependencies beyond the standard library.

## Installing

```
pip install metrickit
```

## A quick tour

### Bucketed histograms

```python
from metrickit.histogram import Histogram

histogram = Histogram([10.0, 25.0, 100.0])
histogram.record_many([3.0, 2.0, 6.0, 12.0, 56.0, 82.0, 202.0, 100.0, 29.0])
histogram.record(89.0)

histogram.buckets()   # [(10.0, 3), (25.0, 4), (100.0, 9)]
histogram.count       # 10
```

Each bucket counts the samples less than or equal to its bound. An empty
list of bounds raises `ValueError`.

### Quantile summaries

```python
from metrickit.summary import Summary

summary = Summary.with_defaults()
for value in (-420.42, 420.42, 42.42):
    summary.add(value)

summary.count()          # 3
summary.quantile(0.5)    # roughly 42.42
summary.min(), summary.max()
```

Infinite samples are ignored, and `quantile` returns `None` for an empty
summary or a quantile outside `[0, 1]`.

### A registry of handles

```python
from metrickit.handle import Handle
from metrickit.key import CompositeKey, Key
from metrickit.kind import MetricKind
from metrickit.registry import Registry

registry = Registry()
key = CompositeKey(MetricKind.COUNTER, Key.from_name("requests"))

registry.op(key, lambda handle: handle.increment_counter(1), Handle.counter)

for key, (generation, handle) in registry.get_handles().items():
    print(key, handle.read_counter())
```

Every `op` bumps the entry's generation. `Registry.delete` only removes an
entry when the generation you pass is still current, so a metric updated
in the meantime is left alone. Calling a handle operation that does not fit
its kind, such as `read_gauge` on a counter, raises `TypeError`.

### Layering recorders

```python
from metrickit.debugging import DebuggingRecorder
from metrickit.key import Key
from metrickit.layers.filter import FilterLayer
from metrickit.layers.prefix import PrefixLayer
from metrickit.layers.stack import Stack

recorder = DebuggingRecorder()
snapshotter = recorder.snapshotter()

stack = (
    Stack(recorder)
    .push(FilterLayer.from_patterns(["tokio", "bb8"]))
    .push(PrefixLayer("app"))
)

stack.increment_counter(Key.from_name("requests"), 1)
stack.increment_counter(Key.from_name("tokio.loops"), 1)   # filtered out

snapshotter.snapshot()   # one counter, named "app.requests"
```

Each snapshot entry carries the composite key, the unit, the description
and a `DebugValue`. With `DebuggingRecorder(ordered=True)` (the default)
entries come out in the order the metrics were first seen.

`AbsoluteLayer` turns counters that report absolute totals into increments.
Counters whose name matches one of its patterns pass on only the difference
from the last value seen, and a value that does not go up is dropped.

## Stress tool

One small program puts `AtomicBucket` under load. It runs producer threads
that push values while a single consumer drains the bucket once a second,
then logs the totals both sides saw so you can check that nothing went
missing:

```
metrickit-bucket-crusher --duration 10 --producers 4
```

It takes `-d/--duration` (seconds, default 60), `-p/--producers`
(default 1) and `-h/--help`.

## What it does not do

metrickit has no global recorder to install and no exporters: it does not
render metrics in any wire format or serve them over the network. Recorders
built from these pieces are plain objects that you call directly.

## Running the tests

```
pip install "metrickit[test]"
pytest
```