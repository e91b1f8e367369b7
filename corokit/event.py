"""A thread-safe, manually triggered signal that many coroutines can await."""

from __future__ import annotations

import asyncio
import contextlib
import enum
import threading
from collections.abc import Generator
from typing import Any

_Waiter = tuple[asyncio.AbstractEventLoop, "asyncio.Future[None]"]


class ResumeOrderPolicy(enum.Enum):
    """Order in which waiters are resumed when an event is set."""

    LIFO = "lifo"
    """Last waiter in is resumed first (the default)."""
    FIFO = "fifo"
    """First waiter in is resumed first."""


def _resolve(fut: asyncio.Future[None]) -> None:
    if not fut.done():
        fut.set_result(None)


def _wake(waiter: _Waiter) -> None:
    loop, fut = waiter
    try:
        running = asyncio.get_running_loop()
    except RuntimeError:
        running = None
    if running is loop:
        _resolve(fut)
    else:
        # A closed loop has nobody left to resume.
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_resolve, fut)


class Event:
    """An event that resumes every awaiting coroutine once it is set.

    The event stays set until :meth:`reset` is called, so awaiting a set
    event completes immediately.
    """

    def __init__(self, initially_set: bool = False) -> None:
        self._lock = threading.Lock()
        self._set = bool(initially_set)
        self._waiters: list[_Waiter] = []

    def is_set(self) -> bool:
        """Return True if the event is currently set."""
        return self._set

    def set(self, policy: ResumeOrderPolicy = ResumeOrderPolicy.LIFO, executor: Any = None) -> None:
        """Set the event and resume all waiters.

        Waiters are resumed in *policy* order. If *executor* is given (any
        object with a ``submit(fn, *args)`` method, such as a
        ``concurrent.futures.Executor``), each resumption is submitted to it.
        Setting an event that is already set does nothing.
        """
        with self._lock:
            if self._set:
                return
            self._set = True
            waiters, self._waiters = self._waiters, []
        if policy is ResumeOrderPolicy.LIFO:
            waiters.reverse()
        for waiter in waiters:
            if executor is None:
                _wake(waiter)
            else:
                executor.submit(_wake, waiter)

    def reset(self) -> None:
        """Return the event to the unset state; no effect if it is not set."""
        with self._lock:
            self._set = False

    def __await__(self) -> Generator[Any, None, None]:
        if self._set:
            return
        loop = asyncio.get_running_loop()
        fut: asyncio.Future[None] = loop.create_future()
        waiter = (loop, fut)
        with self._lock:
            if self._set:
                return
            self._waiters.append(waiter)
        try:
            yield from fut.__await__()
        except asyncio.CancelledError:
            with self._lock, contextlib.suppress(ValueError):
                self._waiters.remove(waiter)
            raise