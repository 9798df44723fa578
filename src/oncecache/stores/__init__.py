"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache store contract consumed by `OnceCache`, plus process-local and Redis
implementations.
"""

from .base import CacheEntry, CacheStore
from .inmemory import InMemoryCacheStore
from .redis import RedisCacheStore

__all__ = [
    "CacheEntry",
    "CacheStore",
    "InMemoryCacheStore",
    "RedisCacheStore",
]

