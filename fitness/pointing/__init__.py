"""
Pointing System

Per-user point ledger with verified-post tracking and a leaderboard.
"""

from fitness.pointing.services.point_service import PointService

__all__ = ["PointService"]
