"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Coalescing cache-fill fetcher.

`OnceCache` wraps a `CacheStore`. On a miss it runs the producer once per key
through a `CallGroup`, writes the value through to the store before any
caller returns, and hands the same outcome to every caller that arrived
while the producer was running.

Example::

    cache = OnceCache(InMemoryCacheStore())
    value, ok = await cache.get_or_load("user:42", load_user, ttl_s=5)
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from .errors import InvalidKeyError
from .flight import CallGroup, invoke
from .handlers import ErrorHandler, LoggingErrorHandler
from .metrics import (
    COALESCED,
    FAILURES,
    HITS,
    LOADS,
    MISSES,
    FetcherMetrics,
    NoOpFetcherMetrics,
)
from .stores.base import CacheStore

logger = logging.getLogger("oncecache.fetcher")

Producer = Callable[[], Any]
LoadSource = Literal["cache", "producer", "shared", "fallback", "miss"]


@dataclass(frozen=True, slots=True)
class LoadResult:
    """
    Detailed outcome of `OnceCache.load`.

    Attributes:
        value: Loaded value; always `None` when `ok` is false.
        ok: Whether `value` is valid.
        source: Where the value came from. `cache` is a plain hit,
            `producer` means this caller ran the producer, `shared` means it
            joined another caller's run, `fallback` means the producer failed
            but the store held a value, `miss` means no value is available.
        error: Producer error when the call failed, otherwise `None`.
    """

    value: Any = None
    ok: bool = False
    source: LoadSource = "miss"
    error: BaseException | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def validate_key(key: Any) -> str:
    """Return `key` if usable as a cache key, else raise `InvalidKeyError`."""
    if not isinstance(key, str):
        raise InvalidKeyError(f"Cache key must be a string, got {type(key).__name__}")
    if not key.strip():
        raise InvalidKeyError("Cache key must be non-empty")
    return key


class OnceCache:
    """Cache-aside loader that runs at most one producer per key at a time."""

    def __init__(
        self,
        store: CacheStore,
        *,
        group: CallGroup | None = None,
        error_handler: ErrorHandler | None = None,
        metrics: FetcherMetrics | None = None,
        default_ttl_s: float | None = None,
    ) -> None:
        self._store = store
        self._group = group or CallGroup()
        self._error_handler = error_handler or LoggingErrorHandler()
        self._metrics = metrics or NoOpFetcherMetrics()
        self._default_ttl_s = default_ttl_s
        self._tags = {"store": getattr(store, "store_id", type(store).__name__)}

    @property
    def store(self) -> CacheStore:
        return self._store

    @property
    def group(self) -> CallGroup:
        return self._group

    async def get(self, key: str) -> tuple[Any, bool]:
        return await self._store.get(validate_key(key))

    async def set(self, key: str, value: Any, *, ttl_s: float | None = None) -> None:
        await self._store.set(validate_key(key), value, ttl_s=self._ttl(ttl_s))

    async def delete(self, key: str) -> None:
        await self._store.delete(validate_key(key))

    async def get_or_load(
        self,
        key: str,
        producer: Producer,
        ttl_s: float | None = None,
        on_error: ErrorHandler | None = None,
    ) -> tuple[Any, bool]:
        """
        Return the cached value for `key`, loading it with `producer` on a miss.

        Concurrent misses for the same key share one producer run. A
        synchronous producer runs in a worker thread so other keys keep
        loading while it works. After a
        producer failure the result is whatever the store holds for `key`,
        or `(None, False)` when it holds nothing.

        Raises:
            InvalidKeyError: `key` is empty or not a string.
        """
        result = await self.load(key, producer, ttl_s=ttl_s, on_error=on_error)
        return result.value, result.ok

    async def load(
        self,
        key: str,
        producer: Producer,
        *,
        ttl_s: float | None = None,
        on_error: ErrorHandler | None = None,
    ) -> LoadResult:
        """Same as `get_or_load`, reporting where the value came from."""
        validate_key(key)

        value, found = await self._store.get(key)
        if found:
            self._metrics.incr(HITS, tags=self._tags)
            return LoadResult(value=value, ok=True, source="cache")
        self._metrics.incr(MISSES, tags=self._tags)

        handler = on_error or self._error_handler
        ttl = self._ttl(ttl_s)

        async def _fill() -> Any:
            self._metrics.incr(LOADS, tags=self._tags)
            try:
                produced = await invoke(producer)
                await self._store.set(key, produced, ttl_s=ttl)
            except Exception as exc:
                self._metrics.incr(FAILURES, tags=self._tags)
                await self._notify(handler, key, exc)
                raise
            except BaseException:
                # Aborted: counted, but the handler is skipped while unwinding.
                self._metrics.incr(FAILURES, tags=self._tags)
                raise
            return produced

        outcome = await self._group.do(key, _fill)
        if outcome.shared:
            self._metrics.incr(COALESCED, tags=self._tags)

        if outcome.ok:
            source: LoadSource = "shared" if outcome.shared else "producer"
            return LoadResult(value=outcome.value, ok=True, source=source)

        value, found = await self._store.get(key)
        if found:
            return LoadResult(value=value, ok=True, source="fallback", error=outcome.error)
        return LoadResult(source="miss", error=outcome.error)

    def _ttl(self, ttl_s: float | None) -> float | None:
        """Fall back to the instance default when the caller passes none."""
        if ttl_s is None:
            return self._default_ttl_s
        return ttl_s

    async def _notify(self, handler: ErrorHandler, key: str, error: BaseException) -> None:
        """Invoke the error handler once, handling sync and async signatures."""
        try:
            out = handler(self._store, key, error)
            if inspect.isawaitable(out):
                await out
        except Exception:  # noqa: BLE001
            logger.exception("Error handler failed for key %r", key)
