import asyncio

import pytest

from cfgkit.locks import AsyncRWLock


@pytest.mark.asyncio
async def test_async_read_write():
    lock = AsyncRWLock({"x": 1})
    async with lock.write() as data:
        data["x"] = 2
    async with lock.read() as data:
        assert data == {"x": 2}


@pytest.mark.asyncio
async def test_async_readers_run_concurrently():
    lock = AsyncRWLock(0)
    both = asyncio.Event()

    async def reader():
        async with lock.read():
            if lock.readers == 2:
                both.set()
            await asyncio.wait_for(both.wait(), timeout=5)

    await asyncio.gather(reader(), reader())
    assert both.is_set()


@pytest.mark.asyncio
async def test_async_reader_waits_for_writer():
    lock = AsyncRWLock({"age": 1})
    seen = []

    async def reader():
        async with lock.read() as data:
            seen.append(data["age"])

    async with lock.write() as data:
        task = asyncio.create_task(reader())
        await asyncio.sleep(0.05)
        assert not task.done()
        data["age"] = 2

    await asyncio.wait_for(task, timeout=5)
    assert seen == [2]


@pytest.mark.asyncio
async def test_async_replace():
    lock = AsyncRWLock("old")
    assert await lock.replace("new") == "old"
    async with lock.read() as value:
        assert value == "new"


@pytest.mark.asyncio
async def test_async_reacquire_from_writer_task_raises():
    lock = AsyncRWLock(0)
    async with lock.write():
        with pytest.raises(RuntimeError):
            await lock.acquire_read()
    assert not lock.locked


@pytest.mark.asyncio
async def test_cancelled_writer_does_not_block_readers():
    lock = AsyncRWLock(0)
    await lock.acquire_read()

    writer = asyncio.create_task(lock.acquire_write())
    await asyncio.sleep(0.05)
    writer.cancel()
    with pytest.raises(asyncio.CancelledError):
        await writer

    async with lock.read():
        assert lock.readers == 2
    await lock.release_read()
