"""
transport — the abstract dispatcher the resolver is fed by.

Two ways to consume a transport
===============================
* ``await transport.dispatch(request)`` — single shot, resolves once with a
  :data:`RawResponse`. Suitable for ``asyncio.gather`` / ``asyncio.wait``.
* ``transport.dispatch_tracked(key, request)`` — runs in its own task, reports
  :class:`Sending` / :class:`Receiving` progress and can be cancelled by its
  tracker key. At most one call is in flight per key: dispatching again under
  the same key cancels the previous call.

Subclasses implement :meth:`Transport._send` only.
"""

from __future__ import annotations

import abc
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Callable, Optional, Union

from .abstraction.request import Request
from .abstraction.response import RawResponse

__all__ = [
    "Sending",
    "Receiving",
    "Progress",
    "ProgressCallback",
    "TrackedCall",
    "Transport",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sending:
    sent: int
    """Bytes of the request body handed to the network so far."""

    size: int
    """Total size of the request body."""

    @property
    def fraction(self) -> float:
        return 1.0 if self.size == 0 else min(1.0, self.sent / self.size)


@dataclass(frozen=True)
class Receiving:
    received: int
    """Bytes of the response body read so far."""

    size: Optional[int]
    """Announced ``content-length``, None when the server did not say."""

    @property
    def fraction(self) -> Optional[float]:
        if not self.size:
            return None
        return min(1.0, self.received / self.size)


Progress = Union[Sending, Receiving]
ProgressCallback = Callable[[Progress], None]

_DONE = object()


class TrackedCall:
    """Handle of a cancellable, progress-reporting dispatch.

    Iterating over the call yields the progress events followed by exactly one
    terminal :data:`RawResponse`. A cancelled call ends the iteration without
    a response; awaiting :meth:`response` then raises ``asyncio.CancelledError``.
    If the transport itself raises (an unreadable file body, for instance),
    the iteration re-raises that exception after the progress seen so far, and
    so does :meth:`response`.
    """

    def __init__(
        self,
        key: str,
        request: Request,
        resolve: Optional[Callable[[Request, RawResponse], Any]] = None,
    ) -> None:
        self.key = key
        self.request = request
        self._resolve = resolve
        self._events: asyncio.Queue = asyncio.Queue()
        self._task: Optional[asyncio.Future] = None

    # ────── wiring (owned by Transport) ──────
    def _start(self, coro: Awaitable[RawResponse]) -> None:
        self._task = asyncio.ensure_future(coro)
        self._task.add_done_callback(self._finished)

    def _report(self, event: Progress) -> None:
        self._events.put_nowait(event)

    def _finished(self, task: asyncio.Future) -> None:
        if task.cancelled():
            self._events.put_nowait(_DONE)
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "tracker %r: %s %s failed",
                self.key,
                self.request.method,
                self.request.url,
                exc_info=exc,
            )
            self._events.put_nowait(exc)
        else:
            self._events.put_nowait(task.result())
        self._events.put_nowait(_DONE)

    # ────── public ──────
    def cancel(self) -> bool:
        if self._task is None or self._task.done():
            return False
        return self._task.cancel()

    def cancelled(self) -> bool:
        return self._task is not None and self._task.cancelled()

    def done(self) -> bool:
        return self._task is not None and self._task.done()

    def add_done_callback(self, fn: Callable[[TrackedCall], None]) -> None:
        if self._task is None:
            raise RuntimeError("tracked call was never started")
        self._task.add_done_callback(lambda _task: fn(self))

    async def response(self) -> RawResponse:
        if self._task is None:
            raise RuntimeError("tracked call was never started")
        return await self._task

    async def result(self) -> Any:
        """The resolved outcome, when the call was issued through a resolver."""
        if self._resolve is None:
            raise RuntimeError("tracked call has no resolver attached")
        return self._resolve(self.request, await self.response())

    async def __aiter__(self) -> AsyncIterator[Union[Progress, RawResponse]]:
        while True:
            event = await self._events.get()
            if event is _DONE:
                return
            if isinstance(event, BaseException):
                raise event
            yield event


class Transport(metaclass=abc.ABCMeta):
    """Turns a :class:`Request` into a classified :data:`RawResponse`.

    Implementations never raise for network trouble: bad URLs, timeouts,
    connection failures and non-2xx answers are all returned as values.
    """

    def __init__(self) -> None:
        self._tracked: dict[str, TrackedCall] = {}

    @abc.abstractmethod
    async def _send(
        self, request: Request, progress: Optional[ProgressCallback]
    ) -> RawResponse:
        raise NotImplementedError

    async def dispatch(self, request: Request) -> RawResponse:
        return await self._send(request, None)

    def dispatch_tracked(
        self,
        key: str,
        request: Request,
        *,
        resolve: Optional[Callable[[Request, RawResponse], Any]] = None,
    ) -> TrackedCall:
        """Start a tracked call. Must be called from a running event loop."""
        previous = self._tracked.get(key)
        if previous is not None and previous.cancel():
            logger.info(
                "tracker %r: superseding %s %s",
                key,
                previous.request.method,
                previous.request.url,
            )

        call = TrackedCall(key, request, resolve)
        self._tracked[key] = call
        call._start(self._send(request, call._report))
        call.add_done_callback(self._forget)
        return call

    def cancel(self, key: str) -> bool:
        """Cancel the call tracked under ``key``. Unknown keys are ignored."""
        call = self._tracked.pop(key, None)
        if call is None or not call.cancel():
            return False
        logger.info("tracker %r: cancelled %s %s", key, call.request.method, call.request.url)
        return True

    def in_flight(self) -> list[str]:
        return [key for key, call in self._tracked.items() if not call.done()]

    def _forget(self, call: TrackedCall) -> None:
        # a superseding call may already own the key
        if self._tracked.get(call.key) is call:
            del self._tracked[call.key]
