"""Metric kinds and masks for matching sets of kinds."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar


class MetricKind(enum.IntEnum):
    """The kind, or type, of a metric."""

    COUNTER = 0
    GAUGE = 1
    HISTOGRAM = 2


_KIND_BITS = {
    MetricKind.COUNTER: 1,
    MetricKind.GAUGE: 2,
    MetricKind.HISTOGRAM: 4,
}


@dataclass(frozen=True, order=True)
class MetricKindMask:
    """A bitmask of metric kinds, combinable with ``|``."""

    bits: int

    NONE: ClassVar[MetricKindMask]
    COUNTER: ClassVar[MetricKindMask]
    GAUGE: ClassVar[MetricKindMask]
    HISTOGRAM: ClassVar[MetricKindMask]
    ALL: ClassVar[MetricKindMask]

    def matches(self, kind: MetricKind) -> bool:
        """Return whether this mask includes ``kind``."""
        return bool(self.bits & _KIND_BITS[MetricKind(kind)])

    def __or__(self, other: MetricKindMask) -> MetricKindMask:
        if not isinstance(other, MetricKindMask):
            return NotImplemented
        return MetricKindMask(self.bits | other.bits)


MetricKindMask.NONE = MetricKindMask(0)
MetricKindMask.COUNTER = MetricKindMask(1)
MetricKindMask.GAUGE = MetricKindMask(2)
MetricKindMask.HISTOGRAM = MetricKindMask(4)
MetricKindMask.ALL = MetricKindMask(7)