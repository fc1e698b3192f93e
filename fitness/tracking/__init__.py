"""
Tracking System

Weekly exercise tasks per user: task CRUD, completion, weekly reset with
progress archival, and difficulty-based suggestions.
"""

from fitness.tracking.services.tracking_store import TrackingStore
from fitness.tracking.services.tracking_service import TrackingService

__all__ = [
    "TrackingStore",
    "TrackingService",
]
