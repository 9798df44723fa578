"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error handler strategies invoked when a producer call fails.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from .stores.base import CacheStore

logger = logging.getLogger("oncecache.handlers")


class ErrorHandler(Protocol):
    """
    Observe one failed producer invocation.

    Called exactly once per failed call, never once per waiter. The return
    value is informational; callers receive whatever the store holds after
    the failure. Plain functions and coroutine functions both qualify.
    """

    def __call__(
        self, store: CacheStore, key: str, error: BaseException
    ) -> Any: ...


class NoOpErrorHandler:
    """Handler that ignores failures."""

    def __call__(self, store: CacheStore, key: str, error: BaseException) -> None:
        _ = store
        _ = key
        _ = error


class LoggingErrorHandler:
    """Default handler: log the failure with its key."""

    def __init__(self, *, level: int = logging.WARNING, log: logging.Logger | None = None) -> None:
        self._level = level
        self._logger = log or logger

    def __call__(self, store: CacheStore, key: str, error: BaseException) -> None:
        self._logger.log(
            self._level,
            "Producer for key %r failed (store=%s): %s",
            key,
            getattr(store, "store_id", type(store).__name__),
            error,
            exc_info=(type(error), error, error.__traceback__),
        )
