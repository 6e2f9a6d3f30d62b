"""Tests for the background task queue."""

import asyncio

import pytest

from autoblog.services.background import BackgroundTasks


@pytest.mark.asyncio
async def test_submit_runs_without_awaiting():
    background = BackgroundTasks()
    done = asyncio.Event()

    async def work():
        done.set()

    background.submit(work(), name="work")
    assert len(background) == 1

    await background.drain()
    assert done.is_set()
    assert len(background) == 0


@pytest.mark.asyncio
async def test_failures_are_contained():
    background = BackgroundTasks()

    async def fail():
        raise RuntimeError("tracking failed")

    task = background.submit(fail(), name="fail")
    await background.drain()

    assert task.done()
    assert isinstance(task.exception(), RuntimeError)
    assert len(background) == 0


@pytest.mark.asyncio
async def test_drain_waits_for_tasks_submitted_while_draining():
    background = BackgroundTasks()
    finished = []

    async def child():
        finished.append("child")

    async def parent():
        await asyncio.sleep(0)
        background.submit(child())
        finished.append("parent")

    background.submit(parent())
    await background.drain()

    assert sorted(finished) == ["child", "parent"]


def test_submit_requires_running_loop():
    background = BackgroundTasks()

    async def work():
        pass

    coro = work()
    with pytest.raises(RuntimeError):
        background.submit(coro)
    coro.close()
