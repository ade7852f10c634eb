"""Quantiles with human-friendly percentile labels."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Iterable


def _plain_float(value: float) -> str:
    """Shortest round-trip form of ``value`` in positional notation."""
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class Quantile:
    """A quantile value, clamped to [0, 1], with a label such as ``p99``."""

    __slots__ = ("_value", "_label")

    def __init__(self, quantile: float) -> None:
        clamped = 0.0 if math.isnan(quantile) else min(max(quantile, 0.0), 1.0)
        if clamped == 0.0:
            clamped = 0.0
        raw_label = _plain_float(clamped)
        if raw_label == "0":
            label = "min"
        elif raw_label == "1":
            label = "max"
        else:
            label = f"p{_plain_float(clamped * 100.0)}".replace(".", "")
        self._value = clamped
        self._label = label

    @property
    def value(self) -> float:
        """The raw quantile value."""
        return self._value

    @property
    def label(self) -> str:
        """The display label."""
        return self._label

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantile):
            return NotImplemented
        return self._value == other._value and self._label == other._label

    def __hash__(self) -> int:
        return hash((self._value, self._label))

    def __repr__(self) -> str:
        return f"Quantile({self._value!r}, {self._label!r})"


def parse_quantiles(quantiles: Iterable[float]) -> list[Quantile]:
    """Turn floating-point values into quantiles."""
    return [Quantile(q) for q in quantiles]