"""A container that keeps started tasks alive until they finish."""

from __future__ import annotations

import asyncio
import enum
import sys
import threading
from collections import deque
from collections.abc import Awaitable
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Union

_Handle = Union["asyncio.Task[None]", "Future[None]"]


class GarbageCollect(enum.Enum):
    """Whether :meth:`TaskContainer.start` collects finished tasks first."""

    YES = "yes"
    NO = "no"


@dataclass(frozen=True)
class TaskContainerOptions:
    """Sizing options for a :class:`TaskContainer`."""

    reserve_size: int = 8
    """Number of task slots reserved up front."""
    growth_factor: float = 2.0
    """Factor by which the slot count grows when every slot is taken."""

    def __post_init__(self) -> None:
        if self.reserve_size < 0:
            raise ValueError("reserve_size cannot be negative")
        if self.growth_factor <= 0:
            raise ValueError("growth_factor must be positive")


class TaskContainer:
    """Owns started tasks on an event loop and recycles their slots.

    Each started task is wrapped so that, once it finishes, its slot is
    marked for deletion; :meth:`garbage_collect` frees such slots for reuse.
    Unhandled exceptions from user tasks are reported on stderr and never
    propagate out of the container.
    """

    def __init__(
        self,
        executor: asyncio.AbstractEventLoop,
        options: TaskContainerOptions | None = None,
    ) -> None:
        if executor is None:
            raise ValueError("task container cannot have a None executor")
        if not isinstance(executor, asyncio.AbstractEventLoop):
            raise TypeError(f"executor must be an asyncio event loop, not {type(executor).__name__}")
        options = options if options is not None else TaskContainerOptions()
        self._loop = executor
        self._growth_factor = options.growth_factor
        self._lock = threading.Lock()
        self._size = 0
        self._tasks: list[_Handle | None] = [None] * options.reserve_size
        self._free: deque[int] = deque(range(options.reserve_size))
        self._to_delete: list[int] = []

    def start(self, user_task: Awaitable[Any], cleanup: GarbageCollect = GarbageCollect.YES) -> None:
        """Store *user_task* and start running it on the container's loop.

        With *cleanup* set to ``GarbageCollect.YES`` finished tasks are
        collected first so their slots can be reused.
        """
        with self._lock:
            self._size += 1
            if cleanup is GarbageCollect.YES:
                self._collect()
            if not self._free:
                self._grow()
            index = self._free.popleft()
            self._tasks[index] = self._launch(self._run(user_task, index))

    def garbage_collect(self) -> int:
        """Free the slots of finished tasks and return how many were freed."""
        with self._lock:
            return self._collect()

    def delete_task_size(self) -> int:
        """Return the number of finished tasks awaiting collection."""
        with self._lock:
            return len(self._to_delete)

    def delete_tasks_empty(self) -> bool:
        """Return True if no finished task awaits collection."""
        with self._lock:
            return not self._to_delete

    def size(self) -> int:
        """Return the number of tasks still running."""
        with self._lock:
            return self._size

    def empty(self) -> bool:
        """Return True if no task is still running."""
        return self.size() == 0

    def capacity(self) -> int:
        """Return the number of slots before the container has to grow."""
        with self._lock:
            return len(self._tasks)

    async def garbage_collect_and_yield_until_empty(self) -> None:
        """Collect and yield to the running loop until every task has finished."""
        while not self.empty():
            self.garbage_collect()
            await asyncio.sleep(0)

    def _launch(self, coro: Any) -> _Handle:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            return self._loop.create_task(coro)
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def _grow(self) -> None:
        old_size = len(self._tasks)
        new_size = max(int(old_size * self._growth_factor), old_size + 1)
        self._free.extend(range(old_size, new_size))
        self._tasks.extend([None] * (new_size - old_size))

    def _collect(self) -> int:
        deleted = len(self._to_delete)
        for index in self._to_delete:
            self._free.append(index)
            self._tasks[index] = None
        self._to_delete.clear()
        return deleted

    async def _run(self, user_task: Awaitable[Any], index: int) -> None:
        try:
            await user_task
        except Exception as exc:  # reported, never propagated to the loop
            print(
                f"task container user task had an unhandled exception: {exc!r}",
                file=sys.stderr,
            )
        finally:
            with self._lock:
                self._to_delete.append(index)
                self._size -= 1