"""A layer that drops metrics whose names contain any of a set of patterns."""

from __future__ import annotations

from typing import Iterable, Optional

from metrickit.handle import GaugeValue
from metrickit.key import Key
from metrickit.layers.stack import Layer, Recorder

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


class Filter(Recorder):
    """Discards metrics whose name parts contain any configured pattern."""

    def __init__(
        self, inner, patterns: Iterable[str] = (), case_insensitive: bool = False
    ) -> None:
        self._inner = inner
        self._case_insensitive = case_insensitive
        fold = _ascii_lower if case_insensitive else str
        self._patterns = tuple(fold(p) for p in patterns)

    @property
    def inner(self):
        """The recorder that receives metrics which pass the filter."""
        return self._inner

    def _should_filter(self, key: Key) -> bool:
        fold = _ascii_lower if self._case_insensitive else str
        return any(
            pattern in fold(part) for part in key.parts for pattern in self._patterns
        )

    def register_counter(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        if not self._should_filter(key):
            self._inner.register_counter(key, unit, description)

    def register_gauge(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        if not self._should_filter(key):
            self._inner.register_gauge(key, unit, description)

    def register_histogram(
        self, key: Key, unit: object = None, description: Optional[str] = None
    ) -> None:
        if not self._should_filter(key):
            self._inner.register_histogram(key, unit, description)

    def increment_counter(self, key: Key, value: int) -> None:
        if not self._should_filter(key):
            self._inner.increment_counter(key, value)

    def update_gauge(self, key: Key, value: GaugeValue) -> None:
        if not self._should_filter(key):
            self._inner.update_gauge(key, value)

    def record_histogram(self, key: Key, value: float) -> None:
        if not self._should_filter(key):
            self._inner.record_histogram(key, value)


class FilterLayer(Layer):
    """Builds :class:`Filter` recorders from a set of substring patterns.

    Patterns are matched as substrings of each name part.  Matching is case
    sensitive unless ``case_insensitive`` is enabled, which folds ASCII letters
    only.  ``use_dfa`` is kept as a tuning flag and does not change results.
    """

    def __init__(
        self,
        patterns: Iterable[str] = (),
        case_insensitive: bool = False,
        use_dfa: bool = False,
    ) -> None:
        self._patterns = [str(p) for p in patterns]
        self._case_insensitive = case_insensitive
        self._use_dfa = use_dfa

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> FilterLayer:
        """Create a layer from an existing set of patterns."""
        return cls(patterns, case_insensitive=False, use_dfa=True)

    @property
    def patterns(self) -> tuple[str, ...]:
        """The configured patterns."""
        return tuple(self._patterns)

    @property
    def is_case_insensitive(self) -> bool:
        """Whether matching ignores ASCII case."""
        return self._case_insensitive

    @property
    def uses_dfa(self) -> bool:
        """Whether the DFA tuning flag is set."""
        return self._use_dfa

    def add_pattern(self, pattern: str) -> FilterLayer:
        """Add a pattern to match and return this layer."""
        self._patterns.append(str(pattern))
        return self

    def case_insensitive(self, case_insensitive: bool) -> FilterLayer:
        """Set whether matching ignores ASCII case, and return this layer."""
        self._case_insensitive = case_insensitive
        return self

    def use_dfa(self, dfa: bool) -> FilterLayer:
        """Set the DFA tuning flag and return this layer."""
        self._use_dfa = dfa
        return self

    def layer(self, inner) -> Filter:
        """Return ``inner`` wrapped in a filter using the current patterns."""
        return Filter(inner, self._patterns, self._case_insensitive)