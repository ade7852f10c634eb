"""Quantile sketches with relative-error guarantees."""

from __future__ import annotations

import math
from typing import Optional

# Rough fixed overhead of a summary, excluding its allocated bins.
_BASE_SIZE = 160
_BIN_SIZE = 8


class _Store:
    """Dense, contiguous bin counts that collapse the lowest bins when full."""

    def __init__(self, max_bins: int) -> None:
        self._max_bins = max(1, int(max_bins))
        self._bins: list[int] = []
        self._min_key = 0
        self.count = 0

    def __len__(self) -> int:
        return len(self._bins)

    @property
    def _max_key(self) -> int:
        return self._min_key + len(self._bins) - 1

    def add(self, key: int) -> None:
        if not self._bins:
            self._bins = [1]
            self._min_key = key
            self.count += 1
            return
        if key < self._min_key:
            self._grow_left(key)
        elif key > self._max_key:
            self._grow_right(key)
        # Keys below the lowest bin have been collapsed into it.
        self._bins[max(key - self._min_key, 0)] += 1
        self.count += 1

    def _grow_left(self, key: int) -> None:
        new_min = max(key, self._max_key - self._max_bins + 1)
        if new_min < self._min_key:
            self._bins[:0] = [0] * (self._min_key - new_min)
            self._min_key = new_min

    def _grow_right(self, key: int) -> None:
        new_min = max(self._min_key, key - self._max_bins + 1)
        if new_min > self._min_key:
            shift = new_min - self._min_key
            if shift >= len(self._bins):
                self._bins = [sum(self._bins)]
            else:
                collapsed = sum(self._bins[: shift + 1])
                self._bins = [collapsed, *self._bins[shift + 1 :]]
            self._min_key = new_min
        self._bins.extend([0] * (key - self._max_key))

    def key_at_rank(self, rank: int) -> int:
        running = 0
        for offset, count in enumerate(self._bins):
            running += count
            if running > rank:
                return self._min_key + offset
        return self._max_key


class DDSketch:
    """A sketch of non-negative values with relative error ``alpha``.

    Values not above ``min_value`` are counted as zeroes.  At most
    ``max_buckets`` bins are kept; beyond that the lowest bins are merged.
    """

    def __init__(self, alpha: float, max_buckets: int, min_value: float) -> None:
        if not 0.0 < alpha < 1.0:
            raise ValueError("alpha must lie strictly between 0 and 1")
        self._gamma_ln = math.log1p(2.0 * alpha / (1.0 - alpha))
        self._gamma = math.exp(self._gamma_ln)
        self._min_value = abs(min_value)
        self._store = _Store(max_buckets)
        self._zero_count = 0
        self._min = math.inf
        self._max = -math.inf

    def _key(self, value: float) -> int:
        return math.ceil(math.log(value) / self._gamma_ln)

    def _value(self, key: int) -> float:
        try:
            return 2.0 * math.exp(key * self._gamma_ln) / (1.0 + self._gamma)
        except OverflowError:
            return math.inf

    def add(self, value: float) -> None:
        """Add a sample."""
        if math.isinf(value):
            raise ValueError("cannot add an infinite value to a sketch")
        if value > self._min_value:
            self._store.add(self._key(value))
        else:
            self._zero_count += 1
        if value < self._min:
            self._min = value
        if value > self._max:
            self._max = value

    def quantile(self, q: float) -> Optional[float]:
        """Return the estimated value at quantile ``q``, or None when empty."""
        if math.isnan(q) or q < 0.0 or q > 1.0:
            raise ValueError(f"quantile must be within [0, 1], got {q!r}")
        total = self.count()
        if total == 0:
            return None
        tracked = self._min <= self._max
        if tracked and q == 0.0:
            return self._min
        if tracked and q == 1.0:
            return self._max

        rank = int(q * (total - 1))
        if rank < self._zero_count:
            estimate = 0.0
        else:
            estimate = self._value(self._store.key_at_rank(rank - self._zero_count))
        if tracked:
            estimate = min(max(estimate, self._min), self._max)
        return estimate

    def count(self) -> int:
        """Return the number of samples added."""
        return self._store.count + self._zero_count

    def length(self) -> int:
        """Return the number of bins currently allocated."""
        return len(self._store)


class Summary:
    """Quantiles over arbitrary floating-point samples, negatives included.

    Negative and positive samples go to separate sketches; samples whose
    absolute value is no more than ``min_value`` are counted as zeroes.
    """

    def __init__(self, alpha: float, max_buckets: int, min_value: float) -> None:
        min_value = abs(min_value)
        self._negative = DDSketch(alpha, max_buckets, min_value)
        self._positive = DDSketch(alpha, max_buckets, min_value)
        self._min_value = min_value
        self._zeroes = 0
        self._min = math.inf
        self._max = -math.inf

    @classmethod
    def with_defaults(cls) -> Summary:
        """Create a summary with alpha 0.0001, 32768 buckets and min value 1e-9."""
        return cls(0.0001, 32_768, 1.0e-9)

    def add(self, value: float) -> None:
        """Add a sample; infinite values are ignored."""
        if math.isinf(value):
            return
        if value < self._min:
            self._min = value
        if value > self._max:
            self._max = value

        if value > self._min_value:
            self._positive.add(value)
        elif value < -self._min_value:
            self._negative.add(-value)
        else:
            self._zeroes += 1

    def quantile(self, q: float) -> Optional[float]:
        """Return the estimated value at ``q``, or None if empty or ``q`` is out of range."""
        if q < 0.0 or q > 1.0 or self.count() == 0:
            return None

        ncount = self._negative.count()
        pcount = self._positive.count()
        zcount = self._zeroes
        total = ncount + pcount + zcount
        rank = 0 if math.isnan(q) else int(q * (total - 1))

        if rank < ncount:
            estimate = self._negative.quantile(1.0 - rank / ncount)
            return None if estimate is None else -estimate
        if rank < ncount + zcount:
            return 0.0
        return self._positive.quantile((rank - (ncount + zcount)) / pcount)

    def min(self) -> float:
        """Return the smallest sample seen so far."""
        return self._min

    def max(self) -> float:
        """Return the largest sample seen so far."""
        return self._max

    def is_empty(self) -> bool:
        """Return whether no samples have been added."""
        return self.count() == 0

    def count(self) -> int:
        """Return the number of samples."""
        return self._negative.count() + self._positive.count() + self._zeroes

    def detailed_count(self) -> tuple[int, int, int]:
        """Return the counts of zero, negative and positive samples."""
        return self._zeroes, self._negative.count(), self._positive.count()

    def estimated_size(self) -> int:
        """Return a rough estimate of the memory used, in bytes."""
        bins = self._positive.length() + self._negative.length()
        return _BASE_SIZE + bins * _BIN_SIZE