"""Shared test fixtures for the fitness backend tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from fitness.locks import UserLockRegistry
from fitness.tracking.services.tracking_store import TrackingStore
from fitness.tracking.services.tracking_service import TrackingService
from fitness.pointing.services.point_service import PointService
from tests.fakes import FakeDatabase


@pytest.fixture
def sample_user_id():
    return str(ObjectId())


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, update_one
    # etc. stay as AsyncMock.
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def user_locks():
    return UserLockRegistry()


@pytest.fixture
def tracking_store(fake_db):
    return TrackingStore(fake_db)


@pytest.fixture
def tracking_service(tracking_store, user_locks):
    return TrackingService(store=tracking_store, locks=user_locks)


@pytest.fixture
def point_service(fake_db, user_locks):
    return PointService(fake_db, locks=user_locks)


@pytest.fixture
def sample_task():
    return {
        "name": "Bench Press",
        "description": "Flat barbell bench",
        "reps": 8,
        "sets": 3,
        "weight": 135.0,
        "completed": False,
        "previousDifficulty": "JustRight",
    }
