"""Tests for the weekly reset job."""

import pytest
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from jobs.weekly_reset import WeeklyResetJob


class TestWeeklyResetJob:
    @pytest.mark.asyncio
    async def test_resets_every_user(self, tracking_service, tracking_store):
        users = [str(ObjectId()) for _ in range(3)]
        for user_id in users:
            await tracking_service.create_task(user_id, "A", "", reps=5)
            await tracking_service.create_task(user_id, "B", "", reps=5)
            await tracking_service.toggle_completed(user_id, "A")

        job = WeeklyResetJob(tracking_service=tracking_service, tracking_store=tracking_store)
        results = await job.run(today=date(2026, 10, 16))

        assert results["usersProcessed"] == 3
        assert results["totalTasksArchived"] == 3
        assert results["errors"] == []

        for user_id in users:
            history = await tracking_service.get_progress_history(user_id)
            assert history[0]["weekStart"] == datetime(2026, 10, 11, tzinfo=timezone.utc)
            assert not any(t["completed"] for t in await tracking_service.get_tasks(user_id))

    @pytest.mark.asyncio
    async def test_failure_for_one_user_does_not_stop_others(self):
        store = MagicMock()
        store.find_user_ids = AsyncMock(return_value=["u1", "u2"])
        service = MagicMock()
        service.reset_weekly_tasks = AsyncMock(
            side_effect=[RuntimeError("db down"), {"completedTasks": [{"name": "A"}]}]
        )

        job = WeeklyResetJob(tracking_service=service, tracking_store=store)
        results = await job.run()

        assert results["usersProcessed"] == 1
        assert results["totalTasksArchived"] == 1
        assert len(results["errors"]) == 1
        assert "u1" in results["errors"][0]

    @pytest.mark.asyncio
    async def test_processes_more_than_ten_thousand_users(self, fake_db, tracking_store):
        fake_db["tracking"].docs.extend(
            {"_id": ObjectId(), "userId": ObjectId()} for _ in range(10_001)
        )
        service = MagicMock()
        service.reset_weekly_tasks = AsyncMock(return_value={"completedTasks": []})

        job = WeeklyResetJob(tracking_service=service, tracking_store=tracking_store)
        results = await job.run(today=date(2026, 10, 16))

        assert results["usersProcessed"] == 10_001
        assert service.reset_weekly_tasks.await_count == 10_001
        assert results["errors"] == []

    @pytest.mark.asyncio
    async def test_no_users(self, tracking_service, tracking_store):
        job = WeeklyResetJob(tracking_service=tracking_service, tracking_store=tracking_store)

        results = await job.run()

        assert results["usersProcessed"] == 0
        assert "durationSeconds" in results


def test_module_docs_warn_about_api_race():
    import jobs.weekly_reset as weekly_reset

    assert "create_task" in weekly_reset.__doc__
    assert "own per-user locks" in weekly_reset.__doc__
