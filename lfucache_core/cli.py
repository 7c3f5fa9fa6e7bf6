"""LFUCache CLI - Interactive and Randomized Cache Harness.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Drives an LFUCache with operations picked at random or typed in by hand,
printing each result followed by the cache contents.

Usage:
    lfucache --capacity 10 --evict-fraction 0.2 --mode random --ops 100
    lfucache --capacity 4 --mode manual
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Callable, Optional, Sequence, TextIO

from lfucache_core.cache.cache import CacheConfig, LFUCache
from lfucache_core.errors import CacheError, InvalidConfigurationError

logger = logging.getLogger(__name__)

OPERATIONS = ("get", "set", "mset", "mget", "incr", "decr")

RULE = "=" * 25

_MISSING = object()


def render_snapshot(cache: LFUCache) -> str:
    """Render cache contents as ``(key, value : frequency)`` rows.

    Args:
        cache: Cache to render

    Returns:
        Multi-line text block
    """
    rows = ", ".join(
        f"({row.key}, {row.value} : {row.frequency})"
        for row in cache.debug_snapshot()
    )
    return f"{RULE}\nWhat is in cache?\n{rows}\n{RULE}\n"


class RandomSource:
    """Picks operations and operands at random."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        key_range: int = 10,
        value_range: int = 100,
        max_batch: int = 10,
    ):
        self._rng = rng or random.Random()
        self.key_range = key_range
        self.value_range = value_range
        self.max_batch = max_batch

    def operation(self) -> str:
        return self._rng.choice(OPERATIONS)

    def key(self) -> int:
        return self._rng.randrange(self.key_range)

    def value(self) -> int:
        return self._rng.randrange(-self.value_range, self.value_range)

    def delta(self) -> int:
        return self.value()

    def count(self) -> int:
        return self._rng.randint(1, self.max_batch)


class ManualSource:
    """Reads operations and operands from a prompt.

    Invalid answers are reported and asked again. ``EOFError`` from the
    reader ends the session.
    """

    def __init__(
        self,
        read: Callable[[str], str] = input,
        out: Optional[TextIO] = None,
    ):
        self._read = read
        self._out = out if out is not None else sys.stdout

    def operation(self) -> str:
        choices = " ".join(f"({i}) {op.upper()}" for i, op in enumerate(OPERATIONS))
        return self._ask(f"Choose {choices}\nYour choice: ", self._parse_operation)

    def key(self) -> int:
        return self._ask("Input Key: ", int)

    def value(self) -> int:
        return self._ask("Input Value: ", int)

    def delta(self) -> int:
        return self._ask("Input Delta: ", int)

    def count(self) -> int:
        return self._ask("Number of keys: ", self._parse_count)

    def _ask(self, prompt: str, parse: Callable[[str], object]):
        while True:
            text = self._read(prompt).strip()
            try:
                return parse(text)
            except ValueError:
                self._out.write(f"Invalid input: {text!r}\n")

    @staticmethod
    def _parse_operation(text: str) -> str:
        name = text.lower()
        if name in OPERATIONS:
            return name
        index = int(name)
        if not 0 <= index < len(OPERATIONS):
            raise ValueError(text)
        return OPERATIONS[index]

    @staticmethod
    def _parse_count(text: str) -> int:
        count = int(text)
        if count < 1:
            raise ValueError(text)
        return count


class Harness:
    """Applies operations from a source to a cache and reports them.

    Example:
        harness = Harness(LFUCache(10, 0.2), RandomSource())
        harness.run(100)
    """

    def __init__(self, cache: LFUCache, source, out: Optional[TextIO] = None):
        self.cache = cache
        self.source = source
        self._out = out if out is not None else sys.stdout

    def run(self, ops: int) -> int:
        """Run up to ``ops`` operations.

        Args:
            ops: Maximum operations

        Returns:
            Number of operations completed
        """
        done = 0
        try:
            while done < ops:
                self.step()
                done += 1
        except EOFError:
            logger.debug(f"Input closed after {done} operations")
        return done

    def step(self) -> str:
        """Run one operation and print the cache.

        Returns:
            Operation name
        """
        op = self.source.operation()
        try:
            getattr(self, f"_do_{op}")()
        except CacheError as e:
            self._write(f"Error: {e}")
        self._out.write(render_snapshot(self.cache))
        return op

    def _do_get(self) -> None:
        key = self.source.key()
        value = self.cache.get(key, _MISSING)
        if value is _MISSING:
            self._write(f"Fetching: {key}: doesn't exist!")
        else:
            self._write(f"Fetching: {key}: {value}")

    def _do_set(self) -> None:
        key = self.source.key()
        value = self.source.value()
        self._write(f"Insert: {key}, {value}")
        self.cache.set(key, value)

    def _do_mset(self) -> None:
        count = self.source.count()
        pairs = []
        for _ in range(count):
            key = self.source.key()
            pairs.append((key, self.source.value()))
        self._write(f"MSET: {count} pairs: {self._pairs(pairs)}")
        self.cache.mset(pairs)

    def _do_mget(self) -> None:
        count = self.source.count()
        keys = [self.source.key() for _ in range(count)]
        self._write(f"MGET: {', '.join(str(k) for k in keys)}")
        self._write(f"Return: {self._pairs(self.cache.mget(keys))}")

    def _do_incr(self) -> None:
        key = self.source.key()
        delta = self.source.delta()
        self._write(f"INCR: {key} by {delta} -> {self.cache.incr(key, delta)}")

    def _do_decr(self) -> None:
        key = self.source.key()
        delta = self.source.delta()
        self._write(f"DECR: {key} by {delta} -> {self.cache.decr(key, delta)}")

    @staticmethod
    def _pairs(pairs) -> str:
        return ", ".join(f"({k}, {v})" for k, v in pairs)

    def _write(self, line: str) -> None:
        self._out.write(line + "\n")


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="lfucache",
        description="Exercise an LFU cache manually or with random operations.",
    )
    parser.add_argument("--capacity", type=int, default=10, help="Maximum entries")
    parser.add_argument(
        "--evict-fraction",
        type=float,
        default=0.2,
        help="Share of capacity evicted when full, in (0, 1)",
    )
    parser.add_argument(
        "--mode",
        choices=["manual", "random"],
        default="random",
        help="Type operations in or generate them",
    )
    parser.add_argument(
        "--ops", type=int, default=10000, help="Maximum operations to run"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--key-range", type=int, default=10, help="Random keys fall in [0, N)"
    )
    parser.add_argument(
        "--value-range",
        type=int,
        default=100,
        help="Random values and deltas fall in [-N, N)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point.

    Args:
        argv: Arguments, defaults to ``sys.argv[1:]``

    Returns:
        Exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.key_range < 1 or args.value_range < 1:
        parser.error("--key-range and --value-range must be at least 1")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = CacheConfig(capacity=args.capacity, evict_fraction=args.evict_fraction)
    try:
        cache = LFUCache.from_config(config)
    except InvalidConfigurationError as e:
        print(f"lfucache: {e}", file=sys.stderr)
        return 2

    if args.mode == "manual":
        source = ManualSource()
    else:
        source = RandomSource(
            random.Random(args.seed),
            key_range=args.key_range,
            value_range=args.value_range,
        )

    try:
        Harness(cache, source).run(args.ops)
    except KeyboardInterrupt:
        return 130
    return 0


__all__ = [
    "Harness",
    "ManualSource",
    "RandomSource",
    "build_parser",
    "main",
    "render_snapshot",
]
