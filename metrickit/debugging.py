"""A simple recorder whose metrics can be snapshotted, for debugging and tests."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Union

from metrickit.handle import GaugeValue, Handle
from metrickit.key import CompositeKey, Key
from metrickit.kind import MetricKind
from metrickit.registry import Registry


class Unit(enum.Enum):
    """The unit of a metric."""

    COUNT = "count"
    PERCENT = "percent"
    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"
    MICROSECONDS = "microseconds"
    NANOSECONDS = "nanoseconds"
    TEBIBYTES = "tebibytes"
    GIGIBYTES = "gigibytes"
    MEBIBYTES = "mebibytes"
    KIBIBYTES = "kibibytes"
    BYTES = "bytes"
    TERABITS_PER_SECOND = "terabits_per_second"
    GIGABITS_PER_SECOND = "gigabits_per_second"
    MEGABITS_PER_SECOND = "megabits_per_second"
    KILOBITS_PER_SECOND = "kilobits_per_second"
    BITS_PER_SECOND = "bits_per_second"
    COUNT_PER_SECOND = "count_per_second"


@dataclass(frozen=True)
class DebugValue:
    """A point-in-time value of a metric."""

    kind: MetricKind
    value: Union[int, float, tuple[float, ...]]

    @classmethod
    def counter(cls, value: int) -> DebugValue:
        return cls(MetricKind.COUNTER, int(value))

    @classmethod
    def gauge(cls, value: float) -> DebugValue:
        return cls(MetricKind.GAUGE, float(value))

    @classmethod
    def histogram(cls, values) -> DebugValue:
        return cls(MetricKind.HISTOGRAM, tuple(float(v) for v in values))


class SnapshotEntry(NamedTuple):
    """One metric in a snapshot."""

    key: CompositeKey
    unit: Optional[Unit]
    description: Optional[str]
    value: DebugValue


@dataclass
class _SharedState:
    registry: Registry[CompositeKey, Handle] = field(default_factory=Registry)
    # Insertion-ordered set of keys when ordering is enabled.
    order: Optional[dict[CompositeKey, None]] = None
    units: dict[CompositeKey, Unit] = field(default_factory=dict)
    descriptions: dict[CompositeKey, str] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock)


def _read(ckey: CompositeKey, handle: Handle) -> DebugValue:
    if ckey.kind is MetricKind.COUNTER:
        return DebugValue.counter(handle.read_counter())
    if ckey.kind is MetricKind.GAUGE:
        return DebugValue.gauge(handle.read_gauge())
    return DebugValue.histogram(handle.read_histogram())


class Snapshotter:
    """Takes point-in-time snapshots of a DebuggingRecorder."""

    def __init__(self, state: _SharedState) -> None:
        self._state = state

    def snapshot(self) -> list[SnapshotEntry]:
        """Return every metric with its unit, description and current value."""
        state = self._state
        handles = state.registry.get_handles()
        with state.lock:
            order = list(state.order) if state.order is not None else None
            units = dict(state.units)
            descriptions = dict(state.descriptions)
        keys = order if order is not None else list(handles)
        return [
            SnapshotEntry(
                ckey,
                units.get(ckey),
                descriptions.get(ckey),
                _read(ckey, handles[ckey][1]),
            )
            for ckey in keys
            if ckey in handles
        ]


class DebuggingRecorder:
    """A recorder that keeps raw metric values for inspection.

    With ``ordered`` set, snapshots list metrics in the order they were first
    seen; otherwise the order is unspecified.
    """

    def __init__(self, ordered: bool = True) -> None:
        self._state = _SharedState(order={} if ordered else None)

    def snapshotter(self) -> Snapshotter:
        """Return a snapshotter attached to this recorder."""
        return Snapshotter(self._state)

    def _register_metric(self, rkey: CompositeKey) -> None:
        state = self._state
        if state.order is not None:
            with state.lock:
                state.order.setdefault(rkey, None)

    def _insert_unit_description(
        self, rkey: CompositeKey, unit: Optional[Unit], description: Optional[str]
    ) -> None:
        with self._state.lock:
            if unit is not None:
                self._state.units[rkey] = unit
            if description is not None:
                self._state.descriptions[rkey] = description

    def _register(
        self,
        kind: MetricKind,
        key: Key,
        unit: Optional[Unit],
        description: Optional[str],
        init,
    ) -> None:
        rkey = CompositeKey(kind, key)
        self._register_metric(rkey)
        self._insert_unit_description(rkey, unit, description)
        self._state.registry.op(rkey, lambda _handle: None, init)

    def register_counter(
        self, key: Key, unit: Optional[Unit] = None, description: Optional[str] = None
    ) -> None:
        self._register(MetricKind.COUNTER, key, unit, description, Handle.counter)

    def register_gauge(
        self, key: Key, unit: Optional[Unit] = None, description: Optional[str] = None
    ) -> None:
        self._register(MetricKind.GAUGE, key, unit, description, Handle.gauge)

    def register_histogram(
        self, key: Key, unit: Optional[Unit] = None, description: Optional[str] = None
    ) -> None:
        self._register(MetricKind.HISTOGRAM, key, unit, description, Handle.histogram)

    def increment_counter(self, key: Key, value: int) -> None:
        rkey = CompositeKey(MetricKind.COUNTER, key)
        self._register_metric(rkey)
        self._state.registry.op(
            rkey, lambda handle: handle.increment_counter(value), Handle.counter
        )

    def update_gauge(self, key: Key, value: GaugeValue) -> None:
        rkey = CompositeKey(MetricKind.GAUGE, key)
        self._register_metric(rkey)
        self._state.registry.op(
            rkey, lambda handle: handle.update_gauge(value), Handle.gauge
        )

    def record_histogram(self, key: Key, value: float) -> None:
        rkey = CompositeKey(MetricKind.HISTOGRAM, key)
        self._register_metric(rkey)
        self._state.registry.op(
            rkey, lambda handle: handle.record_histogram(value), Handle.histogram
        )