import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from maybe_fut.runtime import SyncRuntime, block_on
from maybe_fut.sync.barrier import Barrier


def test_should_create_barrier_sync():
    barrier = Barrier(1)
    assert barrier.is_std() is True
    assert barrier.unwrap_std().parties == 1


@pytest.mark.asyncio
async def test_should_create_barrier_async():
    barrier = Barrier(1)
    assert barrier.is_async() is True
    assert barrier.unwrap_async().parties == 1


def test_should_create_barrier_wait_result_sync():
    result = SyncRuntime.block_on(Barrier(1).wait())
    assert result.is_async is False
    assert result.is_leader() is True


@pytest.mark.asyncio
async def test_should_create_barrier_wait_result_async():
    result = await Barrier(1).wait()
    assert result.is_async is True
    assert result.is_leader() is True


def test_zero_parties_behaves_like_one():
    barrier = Barrier(0)
    assert barrier.unwrap_std().parties == 1
    assert block_on(barrier.wait()).is_leader() is True


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Barrier(-1)


def test_barrier_is_reusable():
    barrier = Barrier(1)
    assert [block_on(barrier.wait()).is_leader() for _ in range(3)] == [True, True, True]


def test_threads_have_exactly_one_leader():
    barrier = Barrier(3)
    with ThreadPoolExecutor(max_workers=3) as pool:
        futures = [pool.submit(block_on, barrier.wait()) for _ in range(3)]
        results = [future.result(timeout=10) for future in futures]
    assert sorted(result.is_leader() for result in results) == [False, False, True]
    assert [result.is_async for result in results] == [False, False, False]


@pytest.mark.asyncio
async def test_tasks_have_exactly_one_leader():
    barrier = Barrier(4)
    results = await asyncio.gather(*(barrier.wait() for _ in range(4)))
    assert sorted(result.is_leader() for result in results) == [False, False, False, True]
    assert all(result.is_async for result in results)