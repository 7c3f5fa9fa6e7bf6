"""LFUCache Entry - Cache Entry with Access Frequency.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, NamedTuple


@dataclass
class CacheEntry:
    """A cached value and its access frequency.

    Attributes:
        frequency: Number of recorded accesses, saturating at capacity - 1
        value: Cached value
    """

    frequency: int
    value: Any

    def update_value(self, value: Any) -> None:
        """Replace the cached value, keeping the frequency.

        Args:
            value: New value
        """
        self.value = value


class SnapshotEntry(NamedTuple):
    """One row of a cache snapshot."""

    key: Hashable
    value: Any
    frequency: int


__all__ = ["CacheEntry", "SnapshotEntry"]
