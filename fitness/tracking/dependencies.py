"""
FastAPI dependencies for Tracking system.

Provides dependency injection for tracking-related services.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from fitness.locks import UserLockRegistry
from fitness.tracking.services.tracking_store import TrackingStore
from fitness.tracking.services.tracking_service import TrackingService


_tracking_store: Optional[TrackingStore] = None
_tracking_service: Optional[TrackingService] = None


def init_tracking_services(
    db: AsyncIOMotorDatabase,
    locks: UserLockRegistry,
    collection_name: str = "tracking",
) -> None:
    """
    Initialize tracking services with database connection.

    Called once at application startup.

    Args:
        db: MongoDB database connection
        locks: Shared per-user lock registry
        collection_name: Collection holding tracking documents
    """
    global _tracking_store, _tracking_service

    _tracking_store = TrackingStore(db=db, collection_name=collection_name)
    _tracking_service = TrackingService(store=_tracking_store, locks=locks)


def get_tracking_service() -> TrackingService:
    """Get tracking service instance."""
    if _tracking_service is None:
        raise RuntimeError("Tracking services not initialized. Call init_tracking_services first.")
    return _tracking_service
