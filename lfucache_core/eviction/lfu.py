"""LFUCache LFU Policy - Frequency-Bucketed Eviction.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Hashable, Iterator, List

from lfucache_core.eviction.policy import EvictionStats

logger = logging.getLogger(__name__)


class LFUPolicy:
    """Least Frequently Used eviction policy with LRU tie-breaking.

    Keys are grouped into one bucket per frequency level. The bucket
    array is sized exactly to the cache capacity, so a key's frequency
    saturates at ``capacity - 1``; once there, the terminal ("hot")
    bucket orders keys purely by recency.

    Implementation:
    - One OrderedDict per frequency, used as an insertion-ordered set
    - Front of a bucket is the oldest key, back is the most recent
    - ``min_frequency`` cursor points at the lowest non-empty bucket,
      or equals ``capacity`` once every bucket has been emptied
    - Evicts in batches from the front of the lowest buckets

    The policy does not store frequencies itself: the owning cache keeps
    each key's frequency and passes it in. It has no lock of its own and
    relies on the owning cache to serialize access.

    Example:
        policy = LFUPolicy(capacity=3)
        policy.insert("key1")              # freq=0
        freq = policy.touch("key1", 0)     # freq=1
        policy.insert("key2")              # freq=0
        policy.evict(1)                    # ["key2"]
    """

    def __init__(self, capacity: int):
        """Initialize LFU policy.

        Args:
            capacity: Number of frequency buckets (the cache capacity)
        """
        self.capacity = capacity
        self._buckets: List[OrderedDict] = [OrderedDict() for _ in range(capacity)]
        self._min_freq = 0
        self._size = 0
        self._stats = EvictionStats(max_size=capacity)

    @property
    def min_frequency(self) -> int:
        """Lowest populated frequency, or ``capacity`` when drained."""
        return self._min_freq

    def slot(self, frequency: int) -> int:
        """Get the bucket index holding keys of the given frequency."""
        return min(frequency, self.capacity - 1)

    def insert(self, key: Hashable) -> None:
        """Record a new key at frequency 0.

        Args:
            key: Inserted key
        """
        self._buckets[0][key] = None
        self._min_freq = 0
        self._size += 1
        self._stats.current_size = self._size

    def touch(self, key: Hashable, frequency: int) -> int:
        """Record an access and re-home the key.

        Args:
            key: Accessed key
            frequency: The key's current frequency

        Returns:
            The key's new frequency
        """
        bucket = self._buckets[self.slot(frequency)]

        if frequency + 1 < self.capacity:
            del bucket[key]
            self._buckets[frequency + 1][key] = None
            if frequency == self._min_freq and not bucket:
                self._min_freq += 1
            self._stats.promotions += 1
            return frequency + 1

        # Hot bucket: frequency saturates, only recency changes
        bucket.move_to_end(key)
        self._stats.saturated_touches += 1
        return frequency

    def evict(self, count: int) -> List[Hashable]:
        """Remove up to ``count`` of the coldest keys.

        Keys leave from the front of the lowest non-empty bucket, moving
        up through the buckets until ``count`` keys are gone or the
        policy is empty.

        Args:
            count: Maximum keys to remove

        Returns:
            Evicted keys, coldest first
        """
        evicted: List[Hashable] = []
        self._advance()

        while len(evicted) < count and self._min_freq < self.capacity:
            key, _ = self._buckets[self._min_freq].popitem(last=False)
            evicted.append(key)
            self._advance()

        self._size -= len(evicted)
        self._stats.evictions += len(evicted)
        self._stats.batches += 1
        self._stats.current_size = self._size

        logger.debug(
            f"Evicted {len(evicted)} keys, min_frequency now {self._min_freq}"
        )
        return evicted

    def remove(self, key: Hashable, frequency: int) -> None:
        """Stop tracking a key.

        Args:
            key: Removed key
            frequency: The key's current frequency
        """
        slot = self.slot(frequency)
        del self._buckets[slot][key]
        self._size -= 1
        self._stats.current_size = self._size
        if slot == self._min_freq:
            self._advance()

    def clear(self) -> None:
        """Clear all tracked keys."""
        for bucket in self._buckets:
            bucket.clear()
        self._min_freq = 0
        self._size = 0
        self._stats.current_size = 0

    def bucket(self, frequency: int) -> List[Hashable]:
        """Get the keys of one bucket, oldest first.

        Args:
            frequency: Frequency level

        Returns:
            List of keys
        """
        return list(self._buckets[self.slot(frequency)])

    def ordered_keys(self) -> Iterator[Hashable]:
        """Iterate keys by ascending frequency, oldest first within a bucket."""
        for bucket in self._buckets:
            yield from bucket

    def size(self) -> int:
        """Get number of tracked keys."""
        return self._size

    def get_stats(self) -> EvictionStats:
        """Get eviction statistics.

        Returns:
            EvictionStats instance
        """
        self._stats.current_size = self._size
        return self._stats

    def _advance(self) -> None:
        """Move the cursor past empty buckets."""
        while self._min_freq < self.capacity and not self._buckets[self._min_freq]:
            self._min_freq += 1

    def __len__(self) -> int:
        """Get tracked key count."""
        return self._size

    def __repr__(self) -> str:
        return (
            f"LFUPolicy(size={self._size}, capacity={self.capacity}, "
            f"min_freq={self._min_freq})"
        )


__all__ = ["LFUPolicy"]
