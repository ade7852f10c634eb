"""Recorder and layer interfaces, and a stack for composing layers."""

from __future__ import annotations

import abc
from typing import Generic, Optional, TypeVar

from metrickit.handle import GaugeValue
from metrickit.key import Key

R = TypeVar("R")


class Recorder(abc.ABC):
    """Receives metric registrations and updates."""

    @abc.abstractmethod
    def register_counter(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        """Register a counter."""

    @abc.abstractmethod
    def register_gauge(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        """Register a gauge."""

    @abc.abstractmethod
    def register_histogram(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        """Register a histogram."""

    @abc.abstractmethod
    def increment_counter(self, key: Key, value: int) -> None:
        """Increment a counter by ``value``."""

    @abc.abstractmethod
    def update_gauge(self, key: Key, value: GaugeValue) -> None:
        """Apply an update to a gauge."""

    @abc.abstractmethod
    def record_histogram(self, key: Key, value: float) -> None:
        """Record a sample into a histogram."""


class Layer(abc.ABC, Generic[R]):
    """Wraps an object, typically a recorder, in another one."""

    @abc.abstractmethod
    def layer(self, inner: R) -> object:
        """Return ``inner`` wrapped by this layer."""


class Stack(Recorder):
    """Composes layers around an inner recorder, innermost first."""

    def __init__(self, inner) -> None:
        self._inner = inner

    @property
    def inner(self):
        """The recorder this stack forwards to."""
        return self._inner

    def push(self, layer: Layer) -> Stack:
        """Return a new stack with ``layer`` wrapped around this one's recorder."""
        return Stack(layer.layer(self._inner))

    def register_counter(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        self._inner.register_counter(key, unit, description)

    def register_gauge(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        self._inner.register_gauge(key, unit, description)

    def register_histogram(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        self._inner.register_histogram(key, unit, description)

    def increment_counter(self, key: Key, value: int) -> None:
        self._inner.increment_counter(key, value)

    def update_gauge(self, key: Key, value: GaugeValue) -> None:
        self._inner.update_gauge(key, value)

    def record_histogram(self, key: Key, value: float) -> None:
        self._inner.record_histogram(key, value)