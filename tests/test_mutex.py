import asyncio
import threading

import pytest

from maybe_fut.runtime import block_on
from maybe_fut.sync.mutex import Mutex, PoisonError, WouldBlockError

ACQUIRE = ["lock", "try_lock"]


def test_mutex_new_sync():
    mutex = Mutex(42)
    assert mutex.is_std()
    assert isinstance(mutex.unwrap_std(), type(threading.Lock()))


@pytest.mark.asyncio
async def test_mutex_new_async():
    mutex = Mutex(42)
    assert mutex.is_async()
    assert isinstance(mutex.unwrap_async(), asyncio.Lock)


@pytest.mark.parametrize("method", ACQUIRE)
def test_should_acquire_sync_mutex(method):
    mutex = Mutex(42)
    acquire = getattr(mutex, method)
    seen = []
    for new_value in (None, 43, None):
        guard = block_on(acquire())
        if new_value is not None:
            guard.value = new_value
        seen.append(guard.value)
        guard.release()
    assert seen == [42, 43, 43]


@pytest.mark.parametrize("method", ACQUIRE)
@pytest.mark.asyncio
async def test_should_acquire_async_mutex(method):
    mutex = Mutex(42)
    acquire = getattr(mutex, method)
    seen = []
    for new_value in (None, 43, None):
        guard = await acquire()
        if new_value is not None:
            guard.value = new_value
        seen.append(guard.value)
        guard.release()
    assert seen == [42, 43, 43]


def test_mutex_poisoned_sync():
    mutex = Mutex(42)
    guard = block_on(mutex.lock())
    mutex.clear_poison()
    assert not mutex.is_poisoned()
    guard.release()


def test_try_lock_would_block_sync():
    mutex = Mutex(1)
    guard = block_on(mutex.lock())
    with pytest.raises(WouldBlockError):
        block_on(mutex.try_lock())
    guard.release()
    with block_on(mutex.try_lock()) as again:
        assert again.value == 1


@pytest.mark.asyncio
async def test_try_lock_would_block_async():
    mutex = Mutex(1)
    guard = await mutex.lock()
    with pytest.raises(WouldBlockError):
        await mutex.try_lock()
    guard.release()
    async with await mutex.try_lock() as again:
        assert again.value == 1


def test_exception_in_guard_poisons_sync_mutex():
    mutex = Mutex([1])
    with pytest.raises(ValueError):
        with block_on(mutex.lock()) as guard:
            guard.value.append(2)
            raise ValueError("boom")
    assert mutex.is_poisoned()
    for method in ACQUIRE:
        with pytest.raises(PoisonError):
            block_on(getattr(mutex, method)())
    mutex.clear_poison()
    assert not mutex.is_poisoned()
    with block_on(mutex.lock()) as guard:
        assert guard.value == [1, 2]


@pytest.mark.asyncio
async def test_async_mutex_is_never_poisoned():
    mutex = Mutex(5)
    with pytest.raises(ValueError):
        async with await mutex.lock():
            raise ValueError("boom")
    assert not mutex.is_poisoned()
    async with await mutex.lock() as guard:
        assert guard.value == 5


def test_released_guard_rejects_access():
    guard = block_on(Mutex("data").lock())
    assert str(guard) == "data"
    guard.release()
    guard.release()
    with pytest.raises(RuntimeError):
        _ = guard.value


def test_sync_mutex_across_threads():
    mutex = Mutex(0)

    def work():
        for _ in range(200):
            with block_on(mutex.lock()) as guard:
                guard.value += 1

    threads = [threading.Thread(target=work) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    with block_on(mutex.lock()) as guard:
        assert guard.value == 800


@pytest.mark.asyncio
async def test_async_lock_waits_for_release():
    mutex = Mutex(0)
    guard = await mutex.lock()

    async def bump():
        async with await mutex.lock() as inner:
            inner.value += 1

    task = asyncio.create_task(bump())
    await asyncio.sleep(0)
    assert not task.done()
    guard.value = 10
    guard.release()
    await task
    async with await mutex.lock() as final:
        assert final.value == 11