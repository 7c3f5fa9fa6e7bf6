"""LFUCache - Thread-Safe Least-Frequently-Used Cache.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

An in-memory key-value cache with:
- LFU eviction with LRU tie-breaking
- O(1) get/set through frequency buckets
- Batch eviction sized by a configurable fraction of capacity
- Batch get/set and atomic increment/decrement
- Cache statistics and eviction callbacks
- Interactive and randomized command-line harness

Architecture:
    ┌─────────────────────────────────────────────────────────────────┐
    │                         LFUCache System                         │
    ├─────────────────────────────────────────────────────────────────┤
    │  ┌─────────────┐  ┌─────────────┐  ┌─────────────┐             │
    │  │  LFUCache   │  │  mget/mset  │  │  incr/decr  │   CACHE     │
    │  │  get/set    │  │   batches   │  │  counters   │   LAYER     │
    │  └──────┬──────┘  └──────┬──────┘  └──────┬──────┘             │
    │         │                │                │                     │
    │  ┌──────┴────────────────┴────────────────┴──────┐             │
    │  │        Entry Index  key -> (freq, value)       │             │
    │  └──────────────────────┬────────────────────────┘             │
    │                         │ touch / evict                         │
    │  ┌──────────────────────┴────────────────────────┐             │
    │  │              LFU Policy                        │   EVICTION  │
    │  │   ┌──────┐ ┌──────┐ ┌──────┐     ┌────────┐   │   LAYER     │
    │  │   │ f=0  │ │ f=1  │ │ f=2  │ ... │ f=cap-1│   │             │
    │  │   └──────┘ └──────┘ └──────┘     └────────┘   │             │
    │  │        min_frequency cursor                    │             │
    │  └──────────────────────────────────────────────┘             │
    └─────────────────────────────────────────────────────────────────┘

Example Usage:
    from lfucache_core import LFUCache

    cache = LFUCache(capacity=1000, evict_fraction=0.2)
    cache.set("user:1", {"name": "John"})
    user = cache.get("user:1")

    # Batches
    cache.mset([("a", 1), ("b", 2)])
    pairs = cache.mget(["a", "b", "missing"])

    # Counters
    cache.incr("hits", 5)
    cache.decr("hits")
"""

__version__ = "1.0.0"
__author__ = "BlackRoad OS"

from lfucache_core.errors import (
    CacheError,
    InvalidConfigurationError,
    TypeMismatchError,
)
from lfucache_core.cache.entry import (
    CacheEntry,
    SnapshotEntry,
)
from lfucache_core.cache.cache import (
    LFUCache,
    CacheConfig,
    CacheStats,
)
from lfucache_core.eviction.policy import EvictionStats
from lfucache_core.eviction.lfu import LFUPolicy

__all__ = [
    # Cache
    "LFUCache",
    "CacheConfig",
    "CacheStats",
    "CacheEntry",
    "SnapshotEntry",
    # Eviction
    "EvictionStats",
    "LFUPolicy",
    # Errors
    "CacheError",
    "InvalidConfigurationError",
    "TypeMismatchError",
]
