"""
Fitness application settings.

Extends the base settings with tracking and pointing configuration.
"""

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Fitness-specific settings."""

    # ==========================================================================
    # API
    # ==========================================================================
    API_PREFIX: str = "/api"

    # ==========================================================================
    # Collections
    # ==========================================================================
    TRACKING_COLLECTION: str = "tracking"
    POINTS_COLLECTION: str = "points"

    # ==========================================================================
    # Pointing
    # ==========================================================================
    # Number of users returned by the leaderboard endpoint
    TOP_POINTS_LIMIT: int = 5


# Global settings instance
settings = Settings()
