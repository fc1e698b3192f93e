"""Tracking services."""

from fitness.tracking.services.tracking_store import TrackingStore
from fitness.tracking.services.tracking_service import TrackingService, get_week_start
from fitness.tracking.services.suggestions import suggest_change

__all__ = [
    "TrackingStore",
    "TrackingService",
    "get_week_start",
    "suggest_change",
]
