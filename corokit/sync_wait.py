"""Block the calling thread until an awaitable completes."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

T = TypeVar("T")


def sync_wait(awaitable: Awaitable[T]) -> T:
    """Run *awaitable* to completion and return its result.

    An exception raised by the awaitable propagates to the caller. When an
    event loop is already running in this thread, the awaitable is driven on
    a helper thread and this thread blocks until it finishes.
    """
    if not inspect.isawaitable(awaitable):
        raise TypeError(f"object is not awaitable: {awaitable!r}")

    async def _drive() -> Any:
        return await awaitable

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(_drive())

    with ThreadPoolExecutor(max_workers=1) as helper:
        return helper.submit(asyncio.run, _drive()).result()