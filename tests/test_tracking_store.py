"""Unit tests for TrackingStore (Motor calls against a mocked collection)."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from pymongo import ReturnDocument

from fitness.tracking.services.tracking_store import TrackingStore


@pytest.fixture
def store(mock_db):
    return TrackingStore(mock_db)


class TestFindByUser:
    @pytest.mark.asyncio
    async def test_queries_by_object_id(self, store, mock_collection, sample_user_id):
        mock_collection.find_one.return_value = None

        result = await store.find_by_user(sample_user_id)

        assert result is None
        mock_collection.find_one.assert_called_once_with({"userId": ObjectId(sample_user_id)})


class TestCreate:
    @pytest.mark.asyncio
    async def test_upserts_with_set_on_insert(self, store, mock_collection, sample_user_id):
        mock_collection.find_one_and_update.return_value = {"userId": ObjectId(sample_user_id)}

        await store.create(sample_user_id)

        call_args = mock_collection.find_one_and_update.call_args
        assert call_args[0][0] == {"userId": ObjectId(sample_user_id)}
        on_insert = call_args[0][1]["$setOnInsert"]
        assert on_insert["userGoal"] == ""
        assert on_insert["weeklyTasks"] == []
        assert on_insert["progressHistory"] == []
        # Only $setOnInsert: an existing document is never touched
        assert set(call_args[0][1]) == {"$setOnInsert"}
        assert call_args[1]["upsert"] is True
        assert call_args[1]["return_document"] == ReturnDocument.AFTER


class TestUpdate:
    @pytest.mark.asyncio
    async def test_sets_fields_and_updated_at(self, store, mock_collection, sample_user_id):
        await store.update(sample_user_id, {"userGoal": "strength"})

        call_args = mock_collection.update_one.call_args
        assert call_args[0][0] == {"userId": ObjectId(sample_user_id)}
        update = call_args[0][1]["$set"]
        assert update["userGoal"] == "strength"
        assert "updatedAt" in update


class TestFindUserIds:
    @pytest.mark.asyncio
    async def test_returns_string_ids(self, store, mock_collection):
        ids = [ObjectId(), ObjectId()]
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[{"_id": ObjectId(), "userId": i} for i in ids])
        mock_collection.find.return_value = cursor

        result = await store.find_user_ids()

        assert result == [str(i) for i in ids]
        mock_collection.find.assert_called_once_with({}, {"userId": 1})
        cursor.to_list.assert_awaited_once_with(length=None)

    @pytest.mark.asyncio
    async def test_returns_every_user(self, fake_db):
        store = TrackingStore(fake_db)
        fake_db["tracking"].docs.extend(
            {"_id": ObjectId(), "userId": ObjectId()} for _ in range(10_001)
        )

        result = await store.find_user_ids()

        assert len(result) == 10_001
