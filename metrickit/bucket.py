"""A thread-safe, append-only bucket of values with snapshot and clear support."""

from __future__ import annotations

import threading
import time
from typing import Callable, Generic, Optional, Sequence, TypeVar

T = TypeVar("T")

BLOCK_SIZE = 64


class BlockFull(Exception):
    """Raised when a value is pushed into a block that has no free slot."""

    def __init__(self, value: object) -> None:
        super().__init__("block is full")
        self.value = value


def _trailing_ones(bits: int) -> int:
    return (~bits & (bits + 1)).bit_length() - 1


def _snooze() -> None:
    time.sleep(0)


class Block(Generic[T]):
    """A fixed-size chunk of slots written by claiming an index, then marking it readable."""

    def __init__(self) -> None:
        self._write = 0
        self._read = 0
        self._slots: list[Optional[T]] = [None] * BLOCK_SIZE
        self._lock = threading.Lock()
        # The block written before this one, i.e. the next one to visit when reading.
        self.next: Optional[Block[T]] = None

    def next_len(self) -> int:
        """Return the length of the next block, or 0 if there is none."""
        following = self.next
        return 0 if following is None else following.len()

    def len(self) -> int:
        """Return the number of contiguous readable slots from the start."""
        return _trailing_ones(self._read)

    def is_quiesced(self) -> bool:
        """Return whether no writes to this block are in flight."""
        length = self.len()
        if length == BLOCK_SIZE:
            return True
        # Several writers may race past the end, so the write index is clamped.
        return min(self._write, BLOCK_SIZE) == length

    def data(self) -> list[T]:
        """Return the readable values in the order they were written."""
        return list(self._slots[: self.len()])  # type: ignore[arg-type]

    def push(self, value: T) -> None:
        """Write ``value`` into the next free slot, raising BlockFull if there is none."""
        with self._lock:
            index = self._write
            self._write += 1
        if index >= BLOCK_SIZE:
            raise BlockFull(value)
        self._slots[index] = value
        with self._lock:
            self._read |= 1 << index

    def __repr__(self) -> str:
        return (
            f"Block(block_size={BLOCK_SIZE}, write={self._write}, read={self._read}, "
            f"len={self.len()}, has_next={self.next is not None})"
        )


class AtomicBucket(Generic[T]):
    """An unbounded bucket of values, read whole and cleared in one step.

    Values live in a chain of blocks.  Reading visits the newest block first,
    so blocks come out in reverse order while the values within each block keep
    their original order: with blocks of four and ten values pushed, the order
    is ``[6 7 8 9] [2 3 4 5] [0 1]``.
    """

    def __init__(self) -> None:
        self._tail: Optional[Block[T]] = None
        self._lock = threading.Lock()

    def _compare_and_set(
        self, expected: Optional[Block[T]], new: Optional[Block[T]]
    ) -> bool:
        with self._lock:
            if self._tail is expected:
                self._tail = new
                return True
            return False

    def _install_first(self) -> Block[T]:
        with self._lock:
            if self._tail is None:
                self._tail = Block()
            return self._tail

    def is_empty(self) -> bool:
        """Return whether the bucket holds no values."""
        tail = self._tail
        if tail is None:
            return True
        # A fresh tail block may be empty while the block before it is not.
        return tail.len() == 0 and tail.next_len() == 0

    def push(self, value: T) -> None:
        """Add a value to the bucket."""
        while True:
            tail = self._tail
            if tail is None:
                tail = self._install_first()
            try:
                tail.push(value)
                return
            except BlockFull:
                pass

            new_tail: Block[T] = Block()
            new_tail.next = tail
            if self._compare_and_set(tail, new_tail):
                try:
                    new_tail.push(value)
                    return
                except BlockFull:
                    continue

    def data(self) -> list[T]:
        """Return every value in the bucket, newest block first."""
        values: list[T] = []
        self.data_with(values.extend)
        return values

    def data_with(self, f: Callable[[Sequence[T]], object]) -> None:
        """Call ``f`` with the values of each block, newest block first."""
        block = self._tail
        while block is not None:
            while not block.is_quiesced():
                _snooze()
            f(block.data())
            block = block.next

    def clear(self) -> None:
        """Remove every value from the bucket."""
        self.clear_with(lambda _values: None)

    def clear_with(self, f: Callable[[Sequence[T]], object]) -> None:
        """Detach all blocks, calling ``f`` with the values of each before it is dropped."""
        block = self._tail
        if block is None or not self._compare_and_set(block, None):
            return
        while block is not None:
            while not block.is_quiesced():
                _snooze()
            f(block.data())
            block = block.next

    def __repr__(self) -> str:
        return f"AtomicBucket(tail={self._tail!r})"