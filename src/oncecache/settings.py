"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache settings and explicit environment loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_first(*names: str, default: str | None = None) -> str | None:
    """
    Return the first non-empty environment variable in `names`.

    Args:
        *names: Environment variable names to check in order.
        default: Value returned if no non-empty variable is found.
    """
    for name in names:
        raw = os.getenv(name)
        if raw is None:
            continue
        value = raw.strip()
        if value:
            return value
    return default


@dataclass(frozen=True, slots=True)
class OnceCacheSettings:
    """Explicit settings used to build a store and its fetcher."""

    store: str = "inmemory"
    default_ttl_s: float = 300.0

    redis_url: str | None = None
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: str | None = None
    redis_prefix: str = "oncecache"

    @staticmethod
    def from_env() -> "OnceCacheSettings":
        """Load settings from `ONCECACHE_*` environment variables."""
        return OnceCacheSettings(
            store=(_env_first("ONCECACHE_STORE", default="inmemory") or "inmemory").lower(),
            default_ttl_s=float(_env_first("ONCECACHE_DEFAULT_TTL_S", default="300") or "300"),
            redis_url=_env_first("ONCECACHE_REDIS_URL", "REDIS_URL"),
            redis_host=_env_first("ONCECACHE_REDIS_HOST", default="localhost") or "localhost",
            redis_port=int(_env_first("ONCECACHE_REDIS_PORT", default="6379") or "6379"),
            redis_db=int(_env_first("ONCECACHE_REDIS_DB", default="0") or "0"),
            redis_password=_env_first("ONCECACHE_REDIS_PASSWORD"),
            redis_prefix=_env_first("ONCECACHE_REDIS_PREFIX", default="oncecache") or "oncecache",
        )

    def resolved_redis_url(self) -> str:
        """Redis URL, built from host/port/db/password when no URL is set."""
        if self.redis_url:
            return self.redis_url
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"
