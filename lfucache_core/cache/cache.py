"""LFUCache Cache - Main Cache Implementation.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import math
import numbers
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import (
    Any,
    Callable,
    Dict,
    Hashable,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    Union,
)

from lfucache_core.cache.entry import CacheEntry, SnapshotEntry
from lfucache_core.errors import InvalidConfigurationError, TypeMismatchError
from lfucache_core.eviction.lfu import LFUPolicy

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass
class CacheConfig:
    """Cache configuration.

    Attributes:
        name: Cache name
        capacity: Maximum entries
        evict_fraction: Share of capacity evicted at once, in (0, 1)
    """

    name: str = "cache"
    capacity: int = 1000
    evict_fraction: float = 0.2

    def validate(self) -> None:
        """Check the settings.

        Raises:
            InvalidConfigurationError: If capacity or evict_fraction is out of range
        """
        capacity = self.capacity
        if (
            isinstance(capacity, bool)
            or not isinstance(capacity, numbers.Integral)
            or capacity <= 0
        ):
            raise InvalidConfigurationError(
                f"Capacity must be a positive integer, got {capacity!r}"
            )

        fraction = self.evict_fraction
        if (
            isinstance(fraction, bool)
            or not isinstance(fraction, numbers.Real)
            or not 0 < fraction < 1
        ):
            raise InvalidConfigurationError(
                f"Eviction fraction must be within (0, 1), got {fraction!r}"
            )

    @property
    def evict_batch_size(self) -> int:
        """Entries removed per eviction, between 1 and capacity."""
        return min(self.capacity, max(1, math.ceil(self.capacity * self.evict_fraction)))


@dataclass
class CacheStats:
    """Cache statistics.

    Attributes:
        hits: Number of cache hits
        misses: Number of cache misses
        sets: Number of set operations
        updates: Sets that overwrote an existing key
        deletes: Number of delete operations
        evictions: Number of evicted entries
        eviction_batches: Number of eviction runs
        entry_count: Current entry count
        started_at: When cache started
    """

    hits: int = 0
    misses: int = 0
    sets: int = 0
    updates: int = 0
    deletes: int = 0
    evictions: int = 0
    eviction_batches: int = 0
    entry_count: int = 0
    started_at: Optional[datetime] = None

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def reset(self) -> None:
        """Reset statistics."""
        self.hits = 0
        self.misses = 0
        self.sets = 0
        self.updates = 0
        self.deletes = 0
        self.evictions = 0
        self.eviction_batches = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "sets": self.sets,
            "updates": self.updates,
            "deletes": self.deletes,
            "evictions": self.evictions,
            "eviction_batches": self.eviction_batches,
            "entry_count": self.entry_count,
            "hit_rate": self.hit_rate,
        }


class LFUCache:
    """Thread-safe in-memory LFU cache.

    Evicts the least frequently used entries first, breaking ties by
    evicting the least recently used. When a new key arrives at a full
    cache, a whole batch of cold entries (``evict_fraction`` of the
    capacity, at least one) is evicted at once.

    Features:
    - O(1) get/set and amortized O(1) eviction
    - Batch get/set and atomic increment/decrement
    - Frequency saturates at capacity - 1, where ordering is pure LRU
    - Statistics and eviction callbacks
    - One re-entrant lock; every call, batches included, is atomic

    Example:
        cache = LFUCache(capacity=1000, evict_fraction=0.2)

        cache.set("key", "value")
        value = cache.get("key")

        cache.mset([("a", 1), ("b", 2)])
        cache.mget(["a", "b", "c"])   # [("a", 1), ("b", 2), ("c", None)]

        cache.incr("counter", 5)
    """

    def __init__(
        self,
        capacity: int = 1000,
        evict_fraction: float = 0.2,
        name: str = "cache",
    ):
        """Initialize cache.

        Args:
            capacity: Maximum entries
            evict_fraction: Share of capacity evicted when full, in (0, 1)
            name: Cache name

        Raises:
            InvalidConfigurationError: If capacity or evict_fraction is out of range
        """
        self.config = CacheConfig(
            name=name, capacity=capacity, evict_fraction=evict_fraction
        )
        try:
            self.config.validate()
        except InvalidConfigurationError as e:
            logger.warning(f"Cache {name} rejected configuration: {e}")
            raise

        self._capacity = int(capacity)
        self._evict_batch_size = self.config.evict_batch_size

        self._entries: Dict[Hashable, CacheEntry] = {}
        self._policy = LFUPolicy(self._capacity)
        self._lock = threading.RLock()
        self._stats = CacheStats(started_at=datetime.now())

        self._on_evict: Optional[Callable[[Hashable, Any], None]] = None

        logger.debug(
            f"Cache {name} created: capacity={self._capacity}, "
            f"evict_batch_size={self._evict_batch_size}"
        )

    @classmethod
    def from_config(cls, config: CacheConfig) -> "LFUCache":
        """Create a cache from configuration.

        Args:
            config: Cache configuration

        Returns:
            LFUCache instance
        """
        return cls(
            capacity=config.capacity,
            evict_fraction=config.evict_fraction,
            name=config.name,
        )

    @property
    def capacity(self) -> int:
        """Maximum entries."""
        return self._capacity

    @property
    def evict_batch_size(self) -> int:
        """Entries removed per eviction."""
        return self._evict_batch_size

    @property
    def min_frequency(self) -> int:
        """Lowest populated frequency, or capacity once the cache drained."""
        with self._lock:
            return self._policy.min_frequency

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Get value from cache.

        A hit counts as an access and promotes the key.

        Args:
            key: Cache key
            default: Value returned when the key is absent

        Returns:
            Cached value or default
        """
        with self._lock:
            entry = self._entries.get(key)

            if entry is None:
                self._stats.misses += 1
                return default

            self._touch(key, entry)
            self._stats.hits += 1
            return entry.value

    def set(self, key: Hashable, value: Any) -> None:
        """Set value in cache.

        Overwriting an existing key keeps its frequency and counts as an
        access. A new key starts at frequency 0, evicting a batch of cold
        entries first when the cache is full.

        Args:
            key: Cache key
            value: Value to cache
        """
        with self._lock:
            entry = self._entries.get(key)

            if entry is not None:
                entry.update_value(value)
                self._touch(key, entry)
                self._stats.updates += 1
            else:
                if len(self._entries) >= self._capacity:
                    self._evict()
                self._entries[key] = CacheEntry(frequency=0, value=value)
                self._policy.insert(key)
                self._stats.entry_count = len(self._entries)

            self._stats.sets += 1

    def mget(
        self,
        keys: Iterable[Hashable],
        default: Any = None,
    ) -> List[Tuple[Hashable, Any]]:
        """Get multiple values.

        Keys are processed in order; duplicates are looked up (and
        touched) once per occurrence.

        Args:
            keys: Keys to fetch
            default: Value reported for absent keys

        Returns:
            List of (key, value) pairs in input order
        """
        with self._lock:
            return [(key, self.get(key, default)) for key in keys]

    def mset(
        self,
        pairs: Union[Mapping[Hashable, Any], Iterable[Tuple[Hashable, Any]]],
    ) -> None:
        """Set multiple values in order.

        Args:
            pairs: Mapping or iterable of (key, value) pairs
        """
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        with self._lock:
            for key, value in items:
                self.set(key, value)

    def incr(self, key: Hashable, delta: Any = 1) -> Any:
        """Increment a numeric value.

        A missing key counts as 0. The read and the write are both
        accesses of the key.

        Args:
            key: Cache key
            delta: Amount to add

        Returns:
            New value

        Raises:
            TypeMismatchError: If delta or the stored value is not numeric
        """
        self._check_numeric(delta, "Delta")
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                self._check_numeric(entry.value, f"Value for {key!r}")

            current = 0 if entry is None else entry.value
            try:
                new_value = current + delta
            except TypeError as e:
                raise TypeMismatchError(
                    f"Cannot add {type(delta).__name__} to {type(current).__name__}"
                ) from e

            self.get(key)
            self.set(key, new_value)
            return new_value

    def decr(self, key: Hashable, delta: Any = 1) -> Any:
        """Decrement a numeric value.

        Args:
            key: Cache key
            delta: Amount to subtract

        Returns:
            New value

        Raises:
            TypeMismatchError: If delta or the stored value is not numeric
        """
        self._check_numeric(delta, "Delta")
        return self.incr(key, -delta)

    def delete(self, key: Hashable) -> bool:
        """Delete key from cache.

        Args:
            key: Cache key

        Returns:
            True if deleted
        """
        with self._lock:
            entry = self._entries.pop(key, None)
            if entry is None:
                return False

            self._policy.remove(key, entry.frequency)
            self._stats.deletes += 1
            self._stats.entry_count = len(self._entries)
            return True

    def clear(self) -> int:
        """Clear all entries.

        Returns:
            Number of entries cleared
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._policy.clear()
            self._stats.entry_count = 0
            return count

    def contains(self, key: Hashable) -> bool:
        """Check if key is cached, without touching it."""
        with self._lock:
            return key in self._entries

    def get_frequency(self, key: Hashable) -> Optional[int]:
        """Get access frequency for key, without touching it.

        Args:
            key: Cache key

        Returns:
            Frequency or None if absent
        """
        with self._lock:
            entry = self._entries.get(key)
            return entry.frequency if entry is not None else None

    def keys(self) -> List[Hashable]:
        """Get all keys, coldest first."""
        with self._lock:
            return list(self._policy.ordered_keys())

    def size(self) -> int:
        """Get entry count."""
        return len(self._entries)

    def debug_snapshot(self) -> List[SnapshotEntry]:
        """List the cache contents for diagnostics.

        Rows are ordered by ascending frequency, then from least to most
        recently touched within a frequency.

        Returns:
            List of SnapshotEntry rows
        """
        with self._lock:
            snapshot = []
            for key in self._policy.ordered_keys():
                entry = self._entries[key]
                snapshot.append(SnapshotEntry(key, entry.value, entry.frequency))
            return snapshot

    def on_evict(self, callback: Callable[[Hashable, Any], None]) -> "LFUCache":
        """Set eviction callback.

        The callback runs with the cache lock held.

        Args:
            callback: Function(key, value)

        Returns:
            Self for chaining
        """
        self._on_evict = callback
        return self

    def get_stats(self) -> CacheStats:
        """Get cache statistics.

        Returns:
            CacheStats instance
        """
        self._stats.entry_count = len(self._entries)
        return self._stats

    def reset_stats(self) -> None:
        """Reset statistics."""
        self._stats.reset()

    def _touch(self, key: Hashable, entry: CacheEntry) -> None:
        """Promote key frequency and recency."""
        entry.frequency = self._policy.touch(key, entry.frequency)

    def _evict(self) -> List[Hashable]:
        """Evict one batch of the coldest entries.

        Returns:
            Evicted keys
        """
        keys = self._policy.evict(self._evict_batch_size)
        removed = [(key, self._entries.pop(key).value) for key in keys]

        self._stats.evictions += len(removed)
        self._stats.eviction_batches += 1
        self._stats.entry_count = len(self._entries)

        if self._on_evict:
            for key, value in removed:
                self._on_evict(key, value)

        return keys

    @staticmethod
    def _check_numeric(value: Any, label: str) -> None:
        if not isinstance(value, numbers.Number):
            raise TypeMismatchError(
                f"{label} must be numeric, got {type(value).__name__}"
            )

    def __contains__(self, key: Hashable) -> bool:
        """Check if key in cache."""
        return self.contains(key)

    def __len__(self) -> int:
        """Get entry count."""
        return self.size()

    def __iter__(self) -> Iterator[Hashable]:
        """Iterate over keys."""
        return iter(self.keys())

    def __getitem__(self, key: Hashable) -> Any:
        """Get item by key."""
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: Hashable, value: Any) -> None:
        """Set item by key."""
        self.set(key, value)

    def __delitem__(self, key: Hashable) -> None:
        """Delete item by key."""
        if not self.delete(key):
            raise KeyError(key)

    def __repr__(self) -> str:
        return (
            f"LFUCache(name={self.config.name!r}, entries={len(self._entries)}, "
            f"capacity={self._capacity})"
        )


__all__ = ["LFUCache", "CacheConfig", "CacheStats"]
