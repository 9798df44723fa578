"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: stores/redis.py.
"""

from __future__ import annotations

import json
from typing import Any

from .base import CacheStore, resolve_ttl


class RedisCacheStore(CacheStore):
    """
    Redis-backed store for values shared between processes.

    Values are stored as JSON under ``{prefix}:{key}`` with ``SETEX``, so they
    must be JSON-serializable. Client errors propagate to the caller as-is.

    Requires ``redis.asyncio`` (``pip install redis``).

    Args:
        redis_client: An ``redis.asyncio.Redis`` client instance.
        prefix: Key prefix for namespacing.
        default_ttl_s: TTL used when a write passes no positive TTL.
    """

    store_id: str = "redis"

    def __init__(
        self,
        redis_client: Any,
        *,
        prefix: str = "oncecache",
        default_ttl_s: float = 300.0,
    ) -> None:
        self._redis = redis_client
        self._prefix = prefix
        self.default_ttl_s = default_ttl_s

    def _key(self, key: str) -> str:
        """Namespaced Redis key for one cache key."""
        return f"{self._prefix}:{key}"

    async def get(self, key: str) -> tuple[Any, bool]:
        blob = await self._redis.get(self._key(key))
        if blob is None:
            return None, False
        if isinstance(blob, bytes):
            blob = blob.decode("utf-8")
        try:
            row = json.loads(blob)
        except ValueError:
            return None, False
        if not isinstance(row, dict) or "value" not in row:
            return None, False
        return row["value"], True

    async def set(self, key: str, value: Any, *, ttl_s: float | None = None) -> None:
        ttl = resolve_ttl(ttl_s, self.default_ttl_s)
        payload = json.dumps({"value": value}, ensure_ascii=True)
        await self._redis.setex(self._key(key), int(max(1, ttl)), payload)

    async def delete(self, key: str) -> None:
        await self._redis.delete(self._key(key))
