"""Cache module - Core caching functionality.

This module provides the main cache interface and entry types.
"""

from lfucache_core.cache.entry import (
    CacheEntry,
    SnapshotEntry,
)
from lfucache_core.cache.cache import (
    LFUCache,
    CacheConfig,
    CacheStats,
)

__all__ = [
    "CacheEntry",
    "SnapshotEntry",
    "LFUCache",
    "CacheConfig",
    "CacheStats",
]
