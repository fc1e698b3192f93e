"""HTTP tests for the pointing routes (auth and services overridden)."""

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from api import app
from fitness.dependencies import require_auth
from fitness.locks import UserLockRegistry
from fitness.pointing.dependencies import get_point_service
from fitness.pointing.services.point_service import PointService
from tests.fakes import FakeDatabase


BASE = "/api/pointing"


@pytest.fixture
def user_id():
    return str(ObjectId())


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def point_service(fake_db):
    return PointService(fake_db, locks=UserLockRegistry())


@pytest.fixture
def client(user_id, point_service):
    app.dependency_overrides[require_auth] = lambda: user_id
    app.dependency_overrides[get_point_service] = lambda: point_service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestPointsLifecycle:
    def test_create_get_delete(self, client, user_id):
        created = client.post(BASE)

        assert created.status_code == 200
        assert created.json() == {
            "msg": "Created point for current user",
            "result": {"userId": user_id, "points": 0, "verifiedPosts": []},
        }

        assert client.get(BASE).json()["result"]["points"] == 0

        deleted = client.delete(BASE)
        assert deleted.json() == {"msg": f"Points Deleted for {user_id}"}
        assert client.get(BASE).status_code == 404

    def test_create_twice_is_409(self, client):
        client.post(BASE)

        response = client.post(BASE)

        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "POINTS_EXIST"


class TestAward:
    def test_award_with_post(self, client):
        post_id = str(ObjectId())
        client.post(BASE)

        response = client.patch(BASE, json={"amount": 10, "verifiedPost": post_id})

        assert response.status_code == 200
        assert response.json()["msg"] == "points awarded"
        assert response.json()["result"]["verifiedPosts"] == [post_id]

    def test_negative_total_is_403(self, client):
        client.post(BASE)

        response = client.patch(BASE, json={"amount": -1})

        assert response.status_code == 403
        assert response.json()["detail"]["message"] == "resulting amount would be less than 0"

    def test_invalid_post_id_is_400(self, client):
        client.post(BASE)

        response = client.patch(BASE, json={"amount": 1, "verifiedPost": "not-an-id"})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_POST_ID"


class TestTop:
    def test_leaderboard(self, client, fake_db):
        for score in (3, 9, 1):
            fake_db["points"].docs.append(
                {"_id": ObjectId(), "userId": ObjectId(), "points": score, "verifiedPosts": []}
            )

        response = client.get(f"{BASE}/top")

        assert response.status_code == 200
        data = response.json()
        assert data["msg"] == "Top 5 points"
        assert [r["points"] for r in data["result"]] == [9, 3, 1]
