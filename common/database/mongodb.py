"""
MongoDB connection holder built on Motor.

Owns the async client for one database. Stores and services get the
AsyncIOMotorDatabase handle from ``db`` and pick their own collections.

Example:
    from common.database import MongoDB

    mongo = MongoDB()
    await mongo.connect(uri="mongodb://localhost:27017", database_name="fitness")
    store = TrackingStore(mongo.db)
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class MongoDB:
    """Motor client wrapper for a single database."""

    def __init__(self):
        self._client: Optional[AsyncIOMotorClient] = None
        self._database_name: Optional[str] = None

    async def connect(self, uri: str, database_name: str) -> None:
        """
        Open the client and ping the server.

        Args:
            uri: MongoDB connection string
            database_name: Database holding the tracking and points collections
        """
        # Credentials sit before the "@"
        host = uri.split("@")[-1]
        logger.info(f"Connecting to MongoDB at {host} (database {database_name})")

        client = AsyncIOMotorClient(uri)
        try:
            await client.admin.command("ping")
        except Exception as e:
            logger.error(f"MongoDB ping failed: {e}")
            client.close()
            raise

        self._client = client
        self._database_name = database_name
        logger.info("MongoDB connected")

    async def disconnect(self) -> None:
        """Close the client if open."""
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._database_name = None
        logger.info("MongoDB connection closed")

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """The Motor database handle."""
        if self._client is None:
            raise RuntimeError("Database not connected")
        return self._client[self._database_name]
