"""Pointing services."""

from fitness.pointing.services.point_service import PointService

__all__ = ["PointService"]
