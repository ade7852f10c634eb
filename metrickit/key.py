"""Metric keys and composite keys that pair a key with its metric kind."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from metrickit.kind import MetricKind


@dataclass(frozen=True, order=True)
class Key:
    """A metric key: a name made of one or more parts, plus labels."""

    parts: tuple[str, ...]
    labels: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", tuple(self.parts))
        object.__setattr__(
            self, "labels", tuple((str(k), str(v)) for k, v in self.labels)
        )
        if not self.parts:
            raise ValueError("a key needs at least one name part")

    @classmethod
    def from_name(cls, name: str) -> Key:
        """Create a key with a single name part and no labels."""
        return cls((name,))

    @classmethod
    def from_parts(cls, name: str, labels: Iterable[tuple[str, str]]) -> Key:
        """Create a key from a name and a sequence of label pairs."""
        return cls((name,), tuple(labels))

    @property
    def name(self) -> str:
        """The full name, with parts joined by dots."""
        return ".".join(self.parts)

    def prepend_name(self, prefix: str) -> Key:
        """Return a copy of this key with ``prefix`` added as the first name part."""
        return Key((prefix, *self.parts), self.labels)

    def __str__(self) -> str:
        if not self.labels:
            return self.name
        rendered = ", ".join(f"{k} = {v}" for k, v in self.labels)
        return f"{self.name}{{{rendered}}}"


@dataclass(frozen=True, order=True)
class CompositeKey:
    """A metric key together with the kind of metric it refers to."""

    kind: MetricKind
    key: Key

    def into_parts(self) -> tuple[MetricKind, Key]:
        """Return the kind and key as a pair."""
        return self.kind, self.key