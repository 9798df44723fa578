"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error types raised by the coalescing cache layer.
"""

from __future__ import annotations


class OnceCacheError(RuntimeError):
    """Base error for oncecache failures."""


class InvalidKeyError(OnceCacheError, ValueError):
    """Raised when a cache key is empty or not a string."""


class ProducerAbortedError(OnceCacheError):
    """Delivered to waiters when the initiating call aborted mid-flight."""


class CacheStoreError(OnceCacheError):
    """Raised when cache store resolution or configuration fails."""


class StoreUnavailableError(CacheStoreError):
    """Raised when a configured store backend cannot be constructed."""
