"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Request-coalescing cache-fill layer.

Returns a cached value when present; otherwise runs the producer once per key,
even under concurrent requests, writes the value through to the store and
hands it to every caller that was waiting for it.

Quick start::

    from oncecache import InMemoryCacheStore, OnceCache

    cache = OnceCache(InMemoryCacheStore())
    value, ok = await cache.get_or_load("report:7", build_report, ttl_s=60)
"""

from .errors import (
    CacheStoreError,
    InvalidKeyError,
    OnceCacheError,
    ProducerAbortedError,
    StoreUnavailableError,
)
from .factory import create_cache_store_from_env, create_once_cache_from_env
from .fetcher import LoadResult, OnceCache, Producer, validate_key
from .flight import CallGroup, CallOutcome
from .handlers import ErrorHandler, LoggingErrorHandler, NoOpErrorHandler
from .metrics import FetcherMetrics, NoOpFetcherMetrics, PrometheusFetcherMetrics
from .settings import OnceCacheSettings
from .stores import (
    CacheEntry,
    CacheStore,
    InMemoryCacheStore,
    RedisCacheStore,
)

__all__ = [
    "OnceCache",
    "LoadResult",
    "Producer",
    "validate_key",
    "CallGroup",
    "CallOutcome",
    "ErrorHandler",
    "LoggingErrorHandler",
    "NoOpErrorHandler",
    "FetcherMetrics",
    "NoOpFetcherMetrics",
    "PrometheusFetcherMetrics",
    "CacheEntry",
    "CacheStore",
    "InMemoryCacheStore",
    "RedisCacheStore",
    "OnceCacheSettings",
    "create_cache_store_from_env",
    "create_once_cache_from_env",
    "OnceCacheError",
    "InvalidKeyError",
    "ProducerAbortedError",
    "CacheStoreError",
    "StoreUnavailableError",
]
