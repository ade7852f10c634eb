"""A thread-safe registry of metric handles with generation tracking."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
H = TypeVar("H")
V = TypeVar("V")
R = TypeVar("R")


@dataclass(frozen=True)
class Generation:
    """The generation of a handle, used for compare-and-delete semantics."""

    value: int


class Generational(Generic[H]):
    """A value paired with a generation counter."""

    def __init__(self, inner: H) -> None:
        self._generation = 0
        self._inner = inner
        self._lock = threading.Lock()

    @property
    def inner(self) -> H:
        """The wrapped value."""
        return self._inner

    def increment_generation(self) -> None:
        """Advance the generation by one."""
        with self._lock:
            self._generation += 1

    def get_generation(self) -> Generation:
        """Return the current generation."""
        with self._lock:
            return Generation(self._generation)


class Registry(Generic[K, H]):
    """A central listing of metric handles mapped by key."""

    def __init__(self) -> None:
        self._map: dict[K, Generational[H]] = {}
        self._lock = threading.RLock()

    def op(self, key: K, op: Callable[[H], V], init: Callable[[], H]) -> V:
        """Run ``op`` on the handle for ``key``, creating it with ``init`` if absent."""
        with self._lock:
            entry = self._map.get(key)
            if entry is None:
                entry = Generational(init())
                self._map[key] = entry
            result = op(entry.inner)
            entry.increment_generation()
            return result

    def delete(self, key: K, generation: Generation) -> bool:
        """Remove ``key`` if its generation still equals ``generation``."""
        with self._lock:
            entry = self._map.get(key)
            if entry is None or entry.get_generation() != generation:
                return False
            del self._map[key]
            return True

    def get_handles(self) -> dict[K, tuple[Generation, H]]:
        """Return a snapshot mapping each key to its generation and handle."""
        return dict(
            self.map_collect(lambda key, gen, handle: (key, (gen, handle)))
        )

    def map_collect(self, f: Callable[[K, Generation, H], R]) -> list[R]:
        """Apply ``f`` to every key, generation and handle in a snapshot."""
        with self._lock:
            entries = list(self._map.items())
        return [f(key, entry.get_generation(), entry.inner) for key, entry in entries]