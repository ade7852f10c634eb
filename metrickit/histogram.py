"""A bucketed histogram that counts samples under fixed bounds."""

from __future__ import annotations

from itertools import accumulate
from typing import Iterable, Sequence


class Histogram:
    """Counts samples falling at or below each of a set of bounds."""

    def __init__(self, bounds: Sequence[float]) -> None:
        if not bounds:
            raise ValueError("a histogram needs at least one bucket bound")
        self._bounds = list(bounds)
        self._buckets = [0] * len(self._bounds)
        self._count = 0
        self._sum = 0.0

    @property
    def sum(self) -> float:
        """The sum of all samples."""
        return self._sum

    @property
    def count(self) -> int:
        """The number of samples."""
        return self._count

    def buckets(self) -> list[tuple[float, int]]:
        """Return ``(bound, count)`` pairs, one per bucket."""
        return list(zip(self._bounds, self._buckets))

    def record(self, sample: float) -> None:
        """Record a single sample."""
        self._sum += sample
        self._count += 1
        self._buckets = [
            count + 1 if sample <= bound else count
            for bound, count in zip(self._bounds, self._buckets)
        ]

    def record_many(self, samples: Iterable[float]) -> None:
        """Record many samples at once."""
        bucketed = [0] * len(self._bounds)
        total = 0.0
        count = 0
        for sample in samples:
            total += sample
            count += 1
            for idx, bound in enumerate(self._bounds):
                if sample <= bound:
                    bucketed[idx] += 1
                    break

        self._buckets = [
            current + extra
            for current, extra in zip(self._buckets, accumulate(bucketed))
        ]
        self._sum += total
        self._count += count