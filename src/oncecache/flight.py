"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Per-key call deduplication.

`CallGroup` is an index of live computations: key -> in-flight call record.
The first caller for a key runs the function; callers that arrive while it is
running wait for the same outcome instead of running it again. Records are
removed as soon as their outcome is published.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .errors import ProducerAbortedError

logger = logging.getLogger("oncecache.flight")

CallFn = Callable[[], Any]


async def invoke(fn: CallFn) -> Any:
    """
    Call `fn` without blocking the event loop.

    Coroutine functions are awaited directly. Other callables run in a worker
    thread; an awaitable they return is then awaited on the loop.
    """
    if inspect.iscoroutinefunction(fn):
        return await fn()
    result = await asyncio.to_thread(fn)
    if inspect.isawaitable(result):
        result = await result
    return result


@dataclass(frozen=True, slots=True)
class CallOutcome:
    """
    Result of one coalesced call.

    Attributes:
        value: Return value of the function; `None` on failure.
        error: Exception raised by the function, `None` on success.
        shared: True for callers that joined an existing call.
    """

    value: Any = None
    error: BaseException | None = None
    shared: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class _Call:
    """In-flight record for one key."""

    done: asyncio.Future[CallOutcome]
    waiters: int = 0


class CallGroup:
    """Deduplicate concurrent calls that share a key."""

    def __init__(self) -> None:
        self._calls: dict[str, _Call] = {}
        self._lock = asyncio.Lock()

    @property
    def in_flight_count(self) -> int:
        return len(self._calls)

    def is_in_flight(self, key: str) -> bool:
        return key in self._calls

    async def do(self, key: str, fn: CallFn) -> CallOutcome:
        """
        Run `fn` once for all concurrent callers of `key`.

        Exceptions raised by `fn` are captured in the returned outcome. An
        initiator interrupted by cancellation re-raises after its waiters have
        been released with `ProducerAbortedError`.
        """
        async with self._lock:
            call = self._calls.get(key)
            if call is not None:
                call.waiters += 1
                joined = True
            else:
                call = _Call(done=asyncio.get_running_loop().create_future())
                self._calls[key] = call
                joined = False

        if joined:
            outcome = await asyncio.shield(call.done)
            return CallOutcome(value=outcome.value, error=outcome.error, shared=True)

        try:
            result = await invoke(fn)
        except Exception as exc:  # noqa: BLE001
            outcome = CallOutcome(error=exc)
        except BaseException as exc:
            logger.debug("Call for key %r aborted: %r", key, exc)
            aborted = ProducerAbortedError(f"Call for key '{key}' was aborted")
            aborted.__cause__ = exc
            await self._release(key, call, CallOutcome(error=aborted))
            raise
        else:
            outcome = CallOutcome(value=result)

        await self._release(key, call, outcome)
        return outcome

    def forget(self, key: str) -> None:
        """
        Detach the in-flight record for `key`.

        The next caller starts a fresh call; callers already waiting still
        receive the outcome of the detached one.
        """
        self._calls.pop(key, None)

    async def _release(self, key: str, call: _Call, outcome: CallOutcome) -> None:
        """Publish `outcome` to every waiter and drop the record in one step."""
        async with self._lock:
            if not call.done.done():
                call.done.set_result(outcome)
            if self._calls.get(key) is call:
                del self._calls[key]
        if call.waiters:
            logger.debug(
                "Released %d waiter(s) for key %r (ok=%s)",
                call.waiters,
                key,
                outcome.ok,
            )
