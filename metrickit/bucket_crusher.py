"""Stress test that hammers an AtomicBucket with producers and a draining consumer."""

from __future__ import annotations

import argparse
import logging
import os
import random
import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional, Sequence

from metrickit.bucket import AtomicBucket

logger = logging.getLogger(__name__)

COUNTER_LOOP = 1024
DEFAULT_DURATION = 60
BATCH = 32


class UsageError(Exception):
    """Raised when the command line cannot be parsed."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


@dataclass
class Tally:
    """A thread-safe running total and count of produced values."""

    total: int = 0
    count: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def add(self, total: int, count: int) -> None:
        """Add to the running total and count."""
        with self._lock:
            self.total += total
            self.count += count


def build_parser(prog: str) -> argparse.ArgumentParser:
    """Build the command-line parser for the stress test."""
    parser = _Parser(prog=prog, usage="%(prog)s [options]", add_help=False)
    parser.add_argument(
        "-d",
        "--duration",
        metavar="INTEGER",
        help="number of seconds to run the crusher test",
    )
    parser.add_argument(
        "-p", "--producers", metavar="INTEGER", help="number of producers"
    )
    parser.add_argument(
        "-h", "--help", action="store_true", help="print this help menu"
    )
    return parser


def _parse_duration(text: Optional[str]) -> int:
    try:
        seconds = int(text if text is not None else DEFAULT_DURATION)
    except ValueError:
        return DEFAULT_DURATION
    return seconds if seconds >= 0 else DEFAULT_DURATION


def _parse_producers(text: Optional[str]) -> int:
    producers = int(text if text is not None else "1")
    if producers < 0:
        raise ValueError(f"invalid number of producers: {text!r}")
    return producers


def run_producer(
    done: threading.Event, tally: Tally, bucket: AtomicBucket[int]
) -> None:
    """Push random values in batches until ``done`` is set, reporting to ``tally``."""
    rng = random.Random()
    counter_local = 0
    total_local = 0
    while True:
        if counter_local == COUNTER_LOOP:
            tally.add(total_local, counter_local)
            total_local = 0
            counter_local = 0
            if done.is_set():
                break

        value = rng.randrange(1024)
        for _ in range(BATCH):
            bucket.push(value)
        total_local += value * BATCH
        counter_local += BATCH

    logger.info("producer finished")


def run_consumer(
    done: threading.Event, bucket: AtomicBucket[int], interval: float = 1.0
) -> tuple[int, int]:
    """Drain the bucket every ``interval`` seconds until done and empty.

    Returns the total and count of the values drained.
    """
    total = 0
    counter = 0
    while True:
        is_done = done.is_set()
        start = time.monotonic()

        drained: list[int] = []
        logger.debug("clearing")
        bucket.clear_with(drained.extend)

        delta = time.monotonic() - start
        if is_done and not drained:
            break

        total += sum(drained)
        counter += len(drained)

        remaining = interval - delta
        if remaining > 0:
            time.sleep(remaining)

    logger.info("consumer finished")
    return total, counter


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the stress test from the command line."""
    logging.basicConfig(level=logging.INFO)
    if argv is None:
        argv = sys.argv[1:]
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "bucket-crusher"
    parser = build_parser(prog)

    try:
        args = parser.parse_args(list(argv))
    except UsageError as exc:
        logger.error("Failed to parse command line args: %s", exc)
        return 2

    if args.help:
        print(parser.format_help(), end="")
        return 0

    logger.info("bucket-crusher")

    duration = _parse_duration(args.duration)
    producers = _parse_producers(args.producers)
    logger.info("duration: %ss", duration)
    logger.info("producers: %s", producers)

    producer_done = threading.Event()
    consumer_done = threading.Event()
    tally = Tally()
    bucket: AtomicBucket[int] = AtomicBucket()

    with ThreadPoolExecutor(max_workers=producers + 1) as pool:
        consumer = pool.submit(run_consumer, consumer_done, bucket)
        producer_futures = [
            pool.submit(run_producer, producer_done, tally, bucket)
            for _ in range(producers)
        ]

        time.sleep(duration)

        producer_done.set()
        for future in producer_futures:
            error = future.exception()
            if error is not None:
                logger.error("encountered error for producer: %r", error)

        consumer_done.set()
        error = consumer.exception()
        if error is not None:
            logger.error("encountered problem for consumer: %r", error)
            return 1

    ctotal, ccounter = consumer.result()
    logger.info(
        "Producer(s) reported: %d total, with %d values produced",
        tally.total,
        tally.count,
    )
    logger.info(
        "Consumer reported:    %d total, with %d values consumed", ctotal, ccounter
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())