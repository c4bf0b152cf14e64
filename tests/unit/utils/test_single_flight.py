"""Tests for single-flight lazy initialization."""

import asyncio

import pytest

from docsearch.utils.single_flight import SingleFlight


class TestSingleFlight:

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_load(self):
        calls = 0

        async def loader():
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.01)
            return object()

        cell = SingleFlight("thing")
        results = await asyncio.gather(*(cell.get(loader) for _ in range(10)))

        assert calls == 1
        assert all(r is results[0] for r in results)
        assert cell.ready
        assert cell.value is results[0]

    @pytest.mark.asyncio
    async def test_cached_after_load(self):
        calls = 0

        async def loader():
            nonlocal calls
            calls += 1
            return "value"

        cell = SingleFlight()
        assert await cell.get(loader) == "value"
        assert await cell.get(loader) == "value"
        assert calls == 1

    @pytest.mark.asyncio
    async def test_failure_reaches_every_waiter_then_retries(self):
        attempts = 0

        async def failing():
            nonlocal attempts
            attempts += 1
            await asyncio.sleep(0.01)
            raise RuntimeError("boom")

        cell = SingleFlight()
        results = await asyncio.gather(
            *(cell.get(failing) for _ in range(3)), return_exceptions=True
        )

        assert attempts == 1
        assert all(isinstance(r, RuntimeError) for r in results)
        assert not cell.ready
        assert not cell.in_flight

        async def succeeding():
            return 42

        assert await cell.get(succeeding) == 42
        assert cell.ready

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_cancel_load(self):
        calls = 0

        async def loader():
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.05)
            return "done"

        cell = SingleFlight()
        first = asyncio.create_task(cell.get(loader))
        second = asyncio.create_task(cell.get(loader))
        await asyncio.sleep(0)
        assert cell.in_flight

        first.cancel()
        assert await second == "done"
        assert calls == 1
        with pytest.raises(asyncio.CancelledError):
            await first

    @pytest.mark.asyncio
    async def test_set_and_reset(self):
        async def loader():
            return "loaded"

        cell = SingleFlight()
        cell.set("preset")
        assert await cell.get(loader) == "preset"

        cell.reset()
        assert not cell.ready
        assert cell.value is None
        assert await cell.get(loader) == "loaded"

    @pytest.mark.asyncio
    async def test_failure_with_no_waiters_left_is_not_replayed(self):
        attempts = 0

        async def failing():
            nonlocal attempts
            attempts += 1
            await asyncio.sleep(0.05)
            raise RuntimeError("boom")

        async def succeeding():
            return "fresh"

        cell = SingleFlight()
        only_waiter = asyncio.create_task(cell.get(failing))
        await asyncio.sleep(0)
        only_waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await only_waiter

        await asyncio.sleep(0.1)
        assert not cell.in_flight

        assert await cell.get(succeeding) == "fresh"
        assert attempts == 1

    @pytest.mark.asyncio
    async def test_load_completing_after_waiter_cancelled_is_cached(self):
        calls = 0

        async def loader():
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.02)
            return "done"

        cell = SingleFlight()
        waiter = asyncio.create_task(cell.get(loader))
        await asyncio.sleep(0)
        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter

        await asyncio.sleep(0.05)
        assert cell.ready
        assert await cell.get(loader) == "done"
        assert calls == 1
