"""Tracks when metrics were last updated so idle ones can be removed."""

from __future__ import annotations

import threading
import time
from datetime import timedelta
from typing import Callable, Generic, Hashable, Optional, TypeVar, Union

from metrickit.kind import MetricKind, MetricKindMask
from metrickit.registry import Generation, Registry

K = TypeVar("K", bound=Hashable)


class Recency(Generic[K]):
    """Removes metrics from a registry once they have been idle too long.

    ``clock`` returns the current time in seconds.  With ``idle_timeout`` set
    to None nothing is ever removed; ``mask`` picks the metric kinds that are
    tracked at all.  Removal happens only when ``should_store`` is called.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], float]] = None,
        mask: MetricKindMask = MetricKindMask.ALL,
        idle_timeout: Union[float, timedelta, None] = None,
    ) -> None:
        self._clock = clock if clock is not None else time.monotonic
        self._mask = mask
        if isinstance(idle_timeout, timedelta):
            idle_timeout = idle_timeout.total_seconds()
        self._idle_timeout = idle_timeout
        self._entries: dict[K, tuple[Generation, float]] = {}
        self._lock = threading.Lock()

    def should_store(
        self, kind: MetricKind, key: K, gen: Generation, registry: Registry
    ) -> bool:
        """Return whether ``key`` should still be kept, deleting it from
        ``registry`` if it has been idle past the timeout at generation ``gen``."""
        if self._idle_timeout is None or not self._mask.matches(kind):
            return True

        with self._lock:
            now = self._clock()
            entry = self._entries.get(key)
            if entry is None:
                self._entries[key] = (gen, now)
                return True

            last_gen, last_update = entry
            if last_gen == gen:
                if now - last_update > self._idle_timeout:
                    # A failed delete means the metric was updated since, so keep it.
                    if registry.delete(key, gen):
                        return False
            else:
                self._entries[key] = (last_gen, now)

        return True