"""A recorder that forwards every metric to several recorders."""

from __future__ import annotations

from typing import Iterable, Optional

from metrickit.handle import GaugeValue
from metrickit.key import Key
from metrickit.layers.stack import Recorder


class Fanout(Recorder):
    """Sends every registration and update to each of its recorders, in order."""

    def __init__(self, recorders: Iterable = ()) -> None:
        self._recorders = list(recorders)

    @property
    def recorders(self) -> tuple:
        """The recorders metrics are sent to."""
        return tuple(self._recorders)

    def register_counter(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        for recorder in self._recorders:
            recorder.register_counter(key, unit, description)

    def register_gauge(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        for recorder in self._recorders:
            recorder.register_gauge(key, unit, description)

    def register_histogram(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        for recorder in self._recorders:
            recorder.register_histogram(key, unit, description)

    def increment_counter(self, key: Key, value: int) -> None:
        for recorder in self._recorders:
            recorder.increment_counter(key, value)

    def update_gauge(self, key: Key, value: GaugeValue) -> None:
        for recorder in self._recorders:
            recorder.update_gauge(key, value)

    def record_histogram(self, key: Key, value: float) -> None:
        for recorder in self._recorders:
            recorder.record_histogram(key, value)


class FanoutBuilder:
    """Collects recorders and builds a :class:`Fanout` over them."""

    def __init__(self) -> None:
        self._recorders: list = []

    def add_recorder(self, recorder) -> FanoutBuilder:
        """Add a recorder to the fanout list and return this builder."""
        self._recorders.append(recorder)
        return self

    def build(self) -> Fanout:
        """Build a fanout over the recorders added so far."""
        return Fanout(self._recorders)