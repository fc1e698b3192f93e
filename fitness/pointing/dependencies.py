"""
FastAPI dependencies for Pointing system.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from fitness.locks import UserLockRegistry
from fitness.pointing.services.point_service import PointService


_point_service: Optional[PointService] = None


def init_pointing_services(
    db: AsyncIOMotorDatabase,
    locks: UserLockRegistry,
    collection_name: str = "points",
) -> None:
    """
    Initialize pointing services with database connection.

    Called once at application startup.
    """
    global _point_service

    _point_service = PointService(db=db, collection_name=collection_name, locks=locks)


def get_point_service() -> PointService:
    """Get point service instance."""
    if _point_service is None:
        raise RuntimeError("Pointing services not initialized. Call init_pointing_services first.")
    return _point_service
