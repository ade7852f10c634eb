"""A layer that prepends a fixed prefix to every metric key."""

from __future__ import annotations

from typing import Optional

from metrickit.handle import GaugeValue
from metrickit.key import Key
from metrickit.layers.stack import Layer, Recorder


class Prefix(Recorder):
    """Forwards every metric to ``inner`` with ``prefix`` added to its key.

    Keys become ``<prefix>.<remaining>``.
    """

    def __init__(self, prefix: str, inner) -> None:
        self._prefix = prefix
        self._inner = inner

    @property
    def prefix(self) -> str:
        """The prefix applied to every key."""
        return self._prefix

    @property
    def inner(self):
        """The recorder metrics are forwarded to."""
        return self._inner

    def _prefix_key(self, key: Key) -> Key:
        return key.prepend_name(self._prefix)

    def register_counter(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        self._inner.register_counter(self._prefix_key(key), unit, description)

    def register_gauge(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        self._inner.register_gauge(self._prefix_key(key), unit, description)

    def register_histogram(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        self._inner.register_histogram(self._prefix_key(key), unit, description)

    def increment_counter(self, key: Key, value: int) -> None:
        self._inner.increment_counter(self._prefix_key(key), value)

    def update_gauge(self, key: Key, value: GaugeValue) -> None:
        self._inner.update_gauge(self._prefix_key(key), value)

    def record_histogram(self, key: Key, value: float) -> None:
        self._inner.record_histogram(self._prefix_key(key), value)


class PrefixLayer(Layer):
    """Wraps recorders in a :class:`Prefix` with the given prefix."""

    def __init__(self, prefix: str) -> None:
        self._prefix = str(prefix)

    @property
    def prefix(self) -> str:
        """The prefix this layer applies."""
        return self._prefix

    def layer(self, inner) -> Prefix:
        """Return ``inner`` wrapped so that every key gets this layer's prefix."""
        return Prefix(self._prefix, inner)