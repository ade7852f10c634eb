"""Thread-safe storage for counter, gauge and histogram values."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Sequence

from metrickit.bucket import AtomicBucket
from metrickit.kind import MetricKind

_U64_MASK = (1 << 64) - 1

GaugeOperation = Literal["absolute", "increment", "decrement"]


@dataclass(frozen=True)
class GaugeValue:
    """An update to a gauge: set it, or move it up or down."""

    operation: GaugeOperation
    amount: float

    def __post_init__(self) -> None:
        if self.operation not in ("absolute", "increment", "decrement"):
            raise ValueError(f"unknown gauge operation: {self.operation!r}")

    @classmethod
    def absolute(cls, value: float) -> GaugeValue:
        """Set the gauge to ``value``."""
        return cls("absolute", float(value))

    @classmethod
    def increment(cls, value: float) -> GaugeValue:
        """Raise the gauge by ``value``."""
        return cls("increment", float(value))

    @classmethod
    def decrement(cls, value: float) -> GaugeValue:
        """Lower the gauge by ``value``."""
        return cls("decrement", float(value))

    def update_value(self, current: float) -> float:
        """Apply this update to ``current`` and return the new gauge value."""
        if self.operation == "absolute":
            return self.amount
        if self.operation == "increment":
            return current + self.amount
        return current - self.amount


class Handle:
    """Shared storage for one metric: a counter, a gauge or a histogram.

    Calling an operation that does not fit the handle's kind raises TypeError.
    """

    __slots__ = ("_kind", "_lock", "_value", "_bucket")

    def __init__(self, kind: MetricKind) -> None:
        self._kind = MetricKind(kind)
        self._lock = threading.Lock()
        self._value: float | int = 0.0 if self._kind is MetricKind.GAUGE else 0
        self._bucket: Optional[AtomicBucket[float]] = (
            AtomicBucket() if self._kind is MetricKind.HISTOGRAM else None
        )

    @property
    def kind(self) -> MetricKind:
        """The kind of metric this handle stores."""
        return self._kind

    @classmethod
    def counter(cls) -> Handle:
        """Create a counter handle, starting at 0."""
        return cls(MetricKind.COUNTER)

    @classmethod
    def gauge(cls) -> Handle:
        """Create a gauge handle, starting at 0.0."""
        return cls(MetricKind.GAUGE)

    @classmethod
    def histogram(cls) -> Handle:
        """Create an empty histogram handle."""
        return cls(MetricKind.HISTOGRAM)

    def _require(self, kind: MetricKind, message: str) -> None:
        if self._kind is not kind:
            raise TypeError(message)

    def _histogram_bucket(self) -> AtomicBucket[float]:
        self._require(MetricKind.HISTOGRAM, "tried to read as histogram")
        assert self._bucket is not None
        return self._bucket

    def increment_counter(self, value: int) -> None:
        """Add ``value`` to this counter, wrapping at 2**64."""
        self._require(MetricKind.COUNTER, "tried to increment as counter")
        if value < 0:
            raise ValueError("counter increments must not be negative")
        with self._lock:
            self._value = (int(self._value) + int(value)) & _U64_MASK

    def update_gauge(self, value: GaugeValue) -> None:
        """Apply a gauge update."""
        self._require(MetricKind.GAUGE, "tried to update as gauge")
        with self._lock:
            self._value = float(value.update_value(float(self._value)))

    def record_histogram(self, value: float) -> None:
        """Record a sample into this histogram."""
        self._require(MetricKind.HISTOGRAM, "tried to record as histogram")
        assert self._bucket is not None
        self._bucket.push(float(value))

    def read_counter(self) -> int:
        """Return the counter's value."""
        self._require(MetricKind.COUNTER, "tried to read as counter")
        with self._lock:
            return int(self._value)

    def read_gauge(self) -> float:
        """Return the gauge's value."""
        self._require(MetricKind.GAUGE, "tried to read as gauge")
        with self._lock:
            return float(self._value)

    def read_histogram(self) -> list[float]:
        """Return all samples in the histogram, newest block first."""
        return self._histogram_bucket().data()

    def read_histogram_is_empty(self) -> bool:
        """Return whether the histogram holds no samples."""
        return self._histogram_bucket().is_empty()

    def read_histogram_with_clear(self, f: Callable[[Sequence[float]], object]) -> None:
        """Call ``f`` with each chunk of samples, then clear the histogram."""
        self._histogram_bucket().clear_with(f)

    def __repr__(self) -> str:
        return f"Handle(kind={self._kind.name})"