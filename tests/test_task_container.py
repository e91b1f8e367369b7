import asyncio

import pytest

from corokit.event import Event
from corokit.task_container import GarbageCollect, TaskContainer, TaskContainerOptions


async def _drain(tc):
    while not tc.empty():
        await asyncio.sleep(0)


def test_none_executor_raises():
    with pytest.raises(ValueError):
        TaskContainer(None)


def test_non_loop_executor_raises():
    with pytest.raises(TypeError):
        TaskContainer(object())


def test_negative_reserve_rejected():
    with pytest.raises(ValueError):
        TaskContainerOptions(reserve_size=-1)


@pytest.mark.asyncio
async def test_default_capacity_is_eight():
    tc = TaskContainer(asyncio.get_running_loop())
    assert tc.capacity() == 8
    assert tc.empty()


@pytest.mark.asyncio
async def test_started_tasks_all_run():
    tc = TaskContainer(asyncio.get_running_loop())
    seen = []

    async def work(i):
        await asyncio.sleep(0)
        seen.append(i)

    for i in range(5):
        tc.start(work(i))
    assert tc.size() == 5
    await tc.garbage_collect_and_yield_until_empty()
    assert sorted(seen) == [0, 1, 2, 3, 4]
    assert tc.empty()


@pytest.mark.asyncio
async def test_finished_tasks_await_collection():
    tc = TaskContainer(asyncio.get_running_loop())

    async def work():
        return None

    for _ in range(3):
        tc.start(work(), GarbageCollect.NO)
    await _drain(tc)
    assert tc.delete_task_size() == 3
    assert not tc.delete_tasks_empty()
    assert tc.garbage_collect() == 3
    assert tc.delete_tasks_empty()
    assert tc.garbage_collect() == 0


@pytest.mark.asyncio
async def test_container_grows_when_full():
    tc = TaskContainer(asyncio.get_running_loop(), TaskContainerOptions(reserve_size=2, growth_factor=2))
    gate = Event()

    async def blocked():
        await gate

    for _ in range(3):
        tc.start(blocked(), GarbageCollect.NO)
    assert tc.size() == 3
    assert tc.capacity() == 4
    gate.set()
    await tc.garbage_collect_and_yield_until_empty()
    assert tc.empty()


@pytest.mark.asyncio
async def test_growth_factor_one_still_makes_room():
    tc = TaskContainer(asyncio.get_running_loop(), TaskContainerOptions(reserve_size=1, growth_factor=1))
    gate = Event()

    async def blocked():
        await gate

    tc.start(blocked())
    tc.start(blocked())
    assert tc.capacity() >= tc.size()
    gate.set()
    await tc.garbage_collect_and_yield_until_empty()
    assert tc.empty()


@pytest.mark.asyncio
async def test_slots_are_reused_after_collection():
    tc = TaskContainer(asyncio.get_running_loop(), TaskContainerOptions(reserve_size=2))

    async def work():
        return None

    tc.start(work())
    tc.start(work())
    await _drain(tc)
    before = tc.capacity()
    tc.start(work())
    tc.start(work())
    assert tc.capacity() == before
    await tc.garbage_collect_and_yield_until_empty()
    assert tc.empty()


@pytest.mark.asyncio
async def test_user_exception_is_reported_not_raised(capsys):
    tc = TaskContainer(asyncio.get_running_loop())

    async def boom():
        raise RuntimeError("boom")

    tc.start(boom())
    await tc.garbage_collect_and_yield_until_empty()
    assert tc.empty()
    assert "boom" in capsys.readouterr().err


def test_start_on_loop_that_is_not_running():
    loop = asyncio.new_event_loop()
    try:
        tc = TaskContainer(loop)
        seen = []

        async def work(i):
            seen.append(i)

        for i in range(4):
            tc.start(work(i))
        assert tc.size() == 4
        loop.run_until_complete(tc.garbage_collect_and_yield_until_empty())
        assert sorted(seen) == [0, 1, 2, 3]
        assert tc.empty()
    finally:
        loop.close()