"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Factory helpers for selecting cache stores from environment variables.
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import StoreUnavailableError
from .fetcher import OnceCache
from .flight import CallGroup
from .handlers import ErrorHandler
from .metrics import FetcherMetrics
from .settings import OnceCacheSettings
from .stores.base import CacheStore
from .stores.inmemory import InMemoryCacheStore

logger = logging.getLogger("oncecache.factory")


def create_cache_store_from_env(
    *,
    redis_client: Any | None = None,
    settings: OnceCacheSettings | None = None,
) -> CacheStore:
    """
    Create a cache store from `ONCECACHE_*` environment variables.

    Stores:
    - `inmemory` (default)
    - `redis`

    Redis resolution:
    - Uses the provided `redis_client` when supplied.
    - Otherwise builds a client from `ONCECACHE_REDIS_URL` (or `REDIS_URL`).
    - If no URL is set, falls back to host/port/db/password variables.
    """
    cfg = settings or OnceCacheSettings.from_env()
    backend = cfg.store.strip().lower()

    if backend in ("mem", "memory", "inmemory", "in_memory"):
        return InMemoryCacheStore(default_ttl_s=cfg.default_ttl_s)

    if backend in ("redis",):
        from .stores.redis import RedisCacheStore

        client = redis_client
        if client is None:
            try:
                import redis.asyncio as redis
            except ModuleNotFoundError as exc:  # pragma: no cover
                raise StoreUnavailableError(
                    "Redis cache store requires `redis` to be installed."
                ) from exc
            client = redis.Redis.from_url(cfg.resolved_redis_url())

        logger.debug("Using redis cache store (prefix=%s)", cfg.redis_prefix)
        return RedisCacheStore(
            client,
            prefix=cfg.redis_prefix,
            default_ttl_s=cfg.default_ttl_s,
        )

    raise ValueError(f"Unknown ONCECACHE_STORE: {backend}")


def create_once_cache_from_env(
    *,
    redis_client: Any | None = None,
    group: CallGroup | None = None,
    error_handler: ErrorHandler | None = None,
    metrics: FetcherMetrics | None = None,
) -> OnceCache:
    """Create a `OnceCache` over the store selected by the environment."""
    settings = OnceCacheSettings.from_env()
    store = create_cache_store_from_env(redis_client=redis_client, settings=settings)
    return OnceCache(
        store,
        group=group,
        error_handler=error_handler,
        metrics=metrics,
        default_ttl_s=settings.default_ttl_s,
    )
