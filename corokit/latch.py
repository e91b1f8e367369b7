"""A countdown latch that resumes awaiting coroutines when it reaches zero."""

from __future__ import annotations

import threading
from collections.abc import Generator
from typing import Any

from corokit.event import Event


class Latch:
    """Thread-safe counter awaited until enough tasks have counted down.

    A latch created with a count of zero or less starts ready.
    """

    def __init__(self, count: int) -> None:
        self._lock = threading.Lock()
        self._count = count
        self._event = Event(count <= 0)

    def is_ready(self) -> bool:
        """Return True once the latch has been counted down to zero."""
        return self._event.is_set()

    def remaining(self) -> int:
        """Return how many count-downs are still outstanding, never below zero."""
        with self._lock:
            return max(self._count, 0)

    def count_down(self, n: int = 1, executor: Any = None) -> None:
        """Count down by *n*; on reaching zero resume the waiters.

        If *executor* is given, waiters are resumed through it as with
        :meth:`Event.set`.
        """
        with self._lock:
            previous = self._count
            self._count -= n
        if previous <= n:
            self._event.set(executor=executor)

    def __await__(self) -> Generator[Any, None, None]:
        return self._event.__await__()