"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: stores/base.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """One cached value with its absolute expiration time."""
    value: Any
    expires_at_s: float


class CacheStore(Protocol):
    """Protocol implemented by key/value stores consumed by `OnceCache`."""
    store_id: str

    async def get(self, key: str) -> tuple[Any, bool]: ...

    async def set(self, key: str, value: Any, *, ttl_s: float | None = None) -> None: ...

    async def delete(self, key: str) -> None: ...


def resolve_ttl(ttl_s: float | None, default_ttl_s: float) -> float:
    """Map the "use store default" sentinel (None, zero, negative) to a TTL."""
    if ttl_s is None or ttl_s <= 0:
        return default_ttl_s
    return float(ttl_s)
