"""Tests for bearer-token auth through the real require_auth dependency."""

import pytest
from datetime import datetime, timedelta, timezone
from bson import ObjectId
from fastapi.testclient import TestClient
from jose import jwt

from api import app
from common.auth import JWTAuth
from fitness.config import Settings
from fitness.dependencies import init_auth_services
from fitness.locks import UserLockRegistry
from fitness.tracking.dependencies import get_tracking_service
from fitness.tracking.services.tracking_store import TrackingStore
from fitness.tracking.services.tracking_service import TrackingService
from tests.fakes import FakeDatabase


SECRET = "test-secret"
URL = "/api/tracking/profile"


def _token(sub, secret=SECRET, expires_in=timedelta(minutes=5)):
    payload = {"sub": sub, "exp": datetime.now(timezone.utc) + expires_in}
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def client():
    init_auth_services(Settings(JWT_SECRET=SECRET))
    service = TrackingService(store=TrackingStore(FakeDatabase()), locks=UserLockRegistry())
    app.dependency_overrides[get_tracking_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestRequireAuth:
    def test_valid_token(self, client):
        user_id = str(ObjectId())

        response = client.post(URL, headers={"Authorization": f"Bearer {_token(user_id)}"})

        assert response.status_code == 200
        assert response.json()["trackingProfile"]["userId"] == user_id

    def test_missing_header(self, client):
        response = client.post(URL)

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "AUTH_REQUIRED"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_wrong_scheme(self, client):
        response = client.post(URL, headers={"Authorization": f"Token {_token(str(ObjectId()))}"})

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "INVALID_AUTH_SCHEME"

    def test_bad_signature(self, client):
        token = _token(str(ObjectId()), secret="other-secret")

        response = client.post(URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "INVALID_TOKEN"

    def test_expired_token(self, client):
        token = _token(str(ObjectId()), expires_in=timedelta(minutes=-1))

        response = client.post(URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_subject_must_be_object_id(self, client):
        response = client.post(URL, headers={"Authorization": f"Bearer {_token('alice')}"})

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "INVALID_TOKEN"


class TestJWTAuth:
    @pytest.mark.asyncio
    async def test_round_trip(self):
        auth = JWTAuth(secret=SECRET)
        user_id = str(ObjectId())

        token = await auth.create_token(user_id)
        claims = await auth.verify_token(token)
        assert claims["sub"] == user_id

    @pytest.mark.asyncio
    async def test_other_secret_rejected(self):
        token = await JWTAuth(secret="other-secret").create_token(str(ObjectId()))

        with pytest.raises(ValueError):
            await JWTAuth(secret=SECRET).verify_token(token)


def test_missing_secret_rejected():
    with pytest.raises(ValueError):
        init_auth_services(Settings(JWT_SECRET=None))
