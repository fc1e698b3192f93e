"""
FastAPI dependencies for the fitness application.

Wires stores and services at startup and provides the auth dependency.
"""

import logging
from typing import Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.auth import AuthProvider, JWTAuth, create_auth_dependency
from fitness.config import Settings
from fitness.locks import UserLockRegistry
from fitness.tracking.dependencies import init_tracking_services
from fitness.pointing.dependencies import init_pointing_services

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────
# Global instances
# ─────────────────────────────────────────────────────────────────

_auth_provider: Optional[AuthProvider] = None
_user_locks: Optional[UserLockRegistry] = None


# ─────────────────────────────────────────────────────────────────
# Initialization
# ─────────────────────────────────────────────────────────────────

def init_auth_services(settings: Settings) -> None:
    """
    Initialize the bearer-token provider.

    Raises:
        ValueError: JWT_SECRET is not configured
    """
    global _auth_provider

    if not settings.JWT_SECRET:
        raise ValueError("JWT_SECRET is required to verify bearer tokens")

    _auth_provider = JWTAuth(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        access_token_expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
    )


def init_all_services(db: AsyncIOMotorDatabase, settings: Settings) -> None:
    """
    Initialize every service with the database connection.

    Called once at application startup. Tracking and pointing share one
    lock registry so a user's writes are serialized per process.
    """
    global _user_locks

    init_auth_services(settings)

    _user_locks = UserLockRegistry()

    init_tracking_services(
        db=db,
        locks=_user_locks,
        collection_name=settings.TRACKING_COLLECTION,
    )
    init_pointing_services(
        db=db,
        locks=_user_locks,
        collection_name=settings.POINTS_COLLECTION,
    )

    logger.info("All services initialized")


# ─────────────────────────────────────────────────────────────────
# Getters
# ─────────────────────────────────────────────────────────────────

def get_auth_provider() -> AuthProvider:
    """Get the bearer-token provider."""
    if _auth_provider is None:
        raise RuntimeError("Auth services not initialized. Call init_auth_services first.")
    return _auth_provider


# Resolves the authenticated user id; subjects must be Mongo ObjectIds
require_auth = create_auth_dependency(get_auth_provider, is_valid_subject=ObjectId.is_valid)
