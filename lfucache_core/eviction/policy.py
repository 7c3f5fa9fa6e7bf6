"""LFUCache Eviction Statistics.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class EvictionStats:
    """Eviction policy statistics.

    Attributes:
        evictions: Keys removed by eviction batches
        batches: Number of eviction batches run
        promotions: Touches that moved a key to a higher bucket
        saturated_touches: Touches that only refreshed recency in the hot bucket
        current_size: Keys currently tracked
        max_size: Number of buckets (the cache capacity)
    """

    evictions: int = 0
    batches: int = 0
    promotions: int = 0
    saturated_touches: int = 0
    current_size: int = 0
    max_size: int = 0

    @property
    def touches(self) -> int:
        """Total touches recorded."""
        return self.promotions + self.saturated_touches

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "evictions": self.evictions,
            "batches": self.batches,
            "promotions": self.promotions,
            "saturated_touches": self.saturated_touches,
            "current_size": self.current_size,
            "max_size": self.max_size,
        }


__all__ = ["EvictionStats"]
