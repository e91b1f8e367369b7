import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from corokit.event import Event, ResumeOrderPolicy


async def _start_waiters(event, order, ids):
    async def wait(i):
        await event
        order.append(i)

    tasks = [asyncio.create_task(wait(i)) for i in ids]
    await asyncio.sleep(0)
    return tasks


async def _await(event):
    await event
    return True


def test_initial_state_and_reset():
    event = Event(True)
    assert event.is_set()
    event.reset()
    assert not event.is_set()
    event.reset()
    assert not event.is_set()
    event.set()
    assert event.is_set()


def test_default_is_not_set():
    assert Event().is_set() is False


@pytest.mark.asyncio
async def test_await_set_event_completes_immediately():
    event = Event(initially_set=True)
    assert await asyncio.wait_for(_await(event), 1) is True
    assert event.is_set()


@pytest.mark.asyncio
async def test_lifo_resume_order():
    event = Event()
    order = []
    tasks = await _start_waiters(event, order, [1, 2, 3])
    assert order == []
    assert event.is_set() is False
    event.set()
    assert event.is_set() is True
    await asyncio.gather(*tasks)
    assert order == [3, 2, 1]


@pytest.mark.asyncio
async def test_fifo_resume_order():
    event = Event()
    order = []
    tasks = await _start_waiters(event, order, [1, 2, 3])
    assert event.is_set() is False
    event.set(ResumeOrderPolicy.FIFO)
    assert event.is_set() is True
    await asyncio.gather(*tasks)
    assert order == [1, 2, 3]


@pytest.mark.asyncio
async def test_set_on_executor_resumes_all_waiters():
    event = Event()
    order = []
    tasks = await _start_waiters(event, order, [1, 2, 3, 4])
    with ThreadPoolExecutor(max_workers=2) as pool:
        event.set(executor=pool)
    assert event.is_set() is True
    await asyncio.wait_for(asyncio.gather(*tasks), 2)
    assert sorted(order) == [1, 2, 3, 4]


@pytest.mark.asyncio
async def test_set_from_another_thread():
    event = Event()
    order = []
    tasks = await _start_waiters(event, order, [7])
    assert event.is_set() is False
    thread = threading.Thread(target=event.set)
    thread.start()
    await asyncio.wait_for(asyncio.gather(*tasks), 2)
    thread.join()
    assert event.is_set() is True
    assert order == [7]


@pytest.mark.asyncio
async def test_second_set_is_noop_and_reset_allows_reuse():
    event = Event()
    order = []
    tasks = await _start_waiters(event, order, [1])
    event.set()
    event.set()
    assert event.is_set() is True
    await asyncio.gather(*tasks)
    assert order == [1]

    event.reset()
    assert event.is_set() is False
    tasks = await _start_waiters(event, order, [2])
    assert order == [1]
    event.set()
    assert event.is_set() is True
    await asyncio.gather(*tasks)
    assert order == [1, 2]


@pytest.mark.asyncio
async def test_cancelled_waiter_is_dropped():
    event = Event()
    order = []
    tasks = await _start_waiters(event, order, [1, 2])
    tasks[0].cancel()
    with pytest.raises(asyncio.CancelledError):
        await tasks[0]
    event.set()
    assert event.is_set() is True
    await tasks[1]
    assert order == [2]