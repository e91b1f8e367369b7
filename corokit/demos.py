"""Small runnable demonstrations of events, generators, tasks and latches."""

from __future__ import annotations

import argparse
import asyncio
import itertools
from collections.abc import Iterator
from dataclasses import dataclass, field

from corokit.event import Event
from corokit.latch import Latch
from corokit.sync_wait import sync_wait


def event_demo() -> list[str]:
    """Run three tasks waiting on one event and a task that sets it.

    Returns the lines the tasks logged, in the order they were logged.
    """
    lines: list[str] = []
    event = Event()

    async def wait_task(i: int) -> None:
        lines.append(f"task {i} is waiting on the event...")
        await event
        lines.append(f"task {i} event triggered, now resuming.")

    async def set_task() -> None:
        lines.append("set task is triggering the event")
        event.set()

    async def run_all() -> None:
        await asyncio.gather(wait_task(1), wait_task(2), wait_task(3), set_task())

    sync_wait(run_all())
    return lines


def _counter() -> Iterator[int]:
    yield from itertools.count()


def generator_demo(count_to: int = 100) -> list[int]:
    """Pull increasing numbers from an endless generator up to *count_to*."""

    async def run() -> list[int]:
        values: list[int] = []
        for value in _counter():
            values.append(value)
            if value >= count_to:
                break
        return values

    return sync_wait(run())


@dataclass
class _Record:
    id: str = ""
    records: list[str] = field(default_factory=list)


def task_demo() -> list[str]:
    """Chain tasks that return values, including a large object."""

    async def square(x: int) -> int:
        return x * x

    async def square_and_add_5(value: int) -> int:
        squared = await square(value)
        return squared + 5

    lines = [f"Task1 output = {sync_wait(square_and_add_5(2))}"]

    async def build_record() -> _Record:
        data = _Record(id="12345678-1234-5678-9012-123456781234")
        data.records.extend(str(i) for i in range(10_000, 100_000))
        return data

    data = sync_wait(build_record())
    lines.append(f"{data.id} has {len(data.records)} records.")

    async def answer() -> int:
        return 42

    lines.append(f"Answer to everything = {sync_wait(answer())}")
    return lines


def latch_demo(num_tasks: int = 5) -> list[str]:
    """Have one task wait on a latch while *num_tasks* workers count it down."""
    lines: list[str] = []
    latch = Latch(num_tasks)

    async def latch_task() -> None:
        lines.append("latch task is now waiting on all children tasks...")
        await latch
        lines.append("latch task dependency tasks completed, resuming.")

    async def worker_task(i: int) -> None:
        lines.append(f"worker task {i} is working...")
        await asyncio.sleep(i * 0.020)
        lines.append(f"worker task {i} is done, counting down on the latch")
        latch.count_down()

    async def run_all() -> None:
        await asyncio.gather(latch_task(), *(worker_task(i) for i in range(1, num_tasks + 1)))

    sync_wait(run_all())
    return lines


def main(argv: list[str] | None = None) -> int:
    """Run one demonstration, or all of them, and print what it produced."""
    parser = argparse.ArgumentParser(prog="corokit-demos", description=main.__doc__)
    parser.add_argument(
        "demo",
        nargs="?",
        default="all",
        choices=["event", "generator", "task", "latch", "all"],
    )
    parser.add_argument("--count-to", type=int, default=100)
    parser.add_argument("--tasks", type=int, default=5)
    args = parser.parse_args(argv)

    selected = ["event", "generator", "task", "latch"] if args.demo == "all" else [args.demo]
    for name in selected:
        if name == "event":
            print("\n".join(event_demo()))
        elif name == "generator":
            print(", ".join(str(v) for v in generator_demo(args.count_to)))
        elif name == "task":
            print("\n".join(task_demo()))
        else:
            print("\n".join(latch_demo(args.tasks)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())