"""Unit tests for the per-user lock registry."""

import asyncio
import pytest

from fitness.locks import UserLockRegistry


class TestUserLockRegistry:
    @pytest.mark.asyncio
    async def test_same_user_is_serialized(self):
        locks = UserLockRegistry()
        events = []

        async def worker(tag):
            async with locks.lock("u1"):
                events.append(f"{tag}-start")
                await asyncio.sleep(0.01)
                events.append(f"{tag}-end")

        await asyncio.gather(worker("a"), worker("b"))

        assert events in (
            ["a-start", "a-end", "b-start", "b-end"],
            ["b-start", "b-end", "a-start", "a-end"],
        )

    @pytest.mark.asyncio
    async def test_different_users_run_concurrently(self):
        locks = UserLockRegistry()
        inside = asyncio.Event()

        async def holder():
            async with locks.lock("u1"):
                await asyncio.wait_for(inside.wait(), timeout=1)

        async def other():
            async with locks.lock("u2"):
                inside.set()

        await asyncio.gather(holder(), other())

    @pytest.mark.asyncio
    async def test_lock_dropped_after_release(self):
        locks = UserLockRegistry()

        async with locks.lock("u1"):
            assert "u1" in locks
            assert len(locks) == 1

        assert "u1" not in locks
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_lock_released_on_error(self):
        locks = UserLockRegistry()

        with pytest.raises(RuntimeError):
            async with locks.lock("u1"):
                raise RuntimeError("boom")

        assert len(locks) == 0
        async with locks.lock("u1"):
            pass
