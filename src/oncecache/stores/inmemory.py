"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: stores/inmemory.py.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

from .base import CacheEntry, CacheStore, resolve_ttl


@dataclass(slots=True)
class InMemoryCacheStore(CacheStore):
    """Process-local store suitable for development/test workloads."""

    store_id: str = "inmemory"
    default_ttl_s: float = 300.0

    def __post_init__(self) -> None:
        self._rows: dict[str, CacheEntry] = {}

    async def get(self, key: str) -> tuple[Any, bool]:
        row = self._rows.get(key)
        if row is None:
            return None, False
        if row.expires_at_s <= time.time():
            self._rows.pop(key, None)
            return None, False
        return row.value, True

    async def set(self, key: str, value: Any, *, ttl_s: float | None = None) -> None:
        ttl = resolve_ttl(ttl_s, self.default_ttl_s)
        self._rows[key] = CacheEntry(value=value, expires_at_s=time.time() + ttl)

    async def delete(self, key: str) -> None:
        self._rows.pop(key, None)

    async def clear(self) -> None:
        self._rows.clear()

    def __len__(self) -> int:
        return len(self._rows)
