"""LFUCache Errors - Cache Error Taxonomy.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

A missing key is not an error: ``get`` and ``mget`` hand back the caller's
default instead.
"""

from __future__ import annotations


class CacheError(Exception):
    """Base class for cache errors."""


class InvalidConfigurationError(CacheError, ValueError):
    """Raised when a cache is constructed with out-of-range settings."""


class TypeMismatchError(CacheError, TypeError):
    """Raised when a stored value or delta cannot take part in arithmetic."""


__all__ = ["CacheError", "InvalidConfigurationError", "TypeMismatchError"]
