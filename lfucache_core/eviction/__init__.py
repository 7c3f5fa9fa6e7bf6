"""Eviction module - Frequency-bucketed LFU eviction."""

from lfucache_core.eviction.policy import EvictionStats
from lfucache_core.eviction.lfu import LFUPolicy

__all__ = [
    "EvictionStats",
    "LFUPolicy",
]
