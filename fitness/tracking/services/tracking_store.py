"""
Tracking document storage.

One document per user in the tracking collection. Pure persistence:
lookups are by user id only and no validation happens here.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

logger = logging.getLogger(__name__)


class TrackingStore:
    """Reads and writes per-user tracking documents."""

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "tracking"):
        """
        Initialize TrackingStore.

        Args:
            db: MongoDB database connection
            collection_name: Collection holding tracking documents
        """
        self._db = db
        self._collection = db[collection_name]

    async def find_by_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get the tracking document for a user, or None."""
        logger.debug(f"Loading tracking document for user {user_id}")
        return await self._collection.find_one({"userId": ObjectId(user_id)})

    async def create(self, user_id: str) -> Dict[str, Any]:
        """
        Create the tracking document for a user if it does not exist.

        Uses an upsert so concurrent first calls converge on one document.

        Returns:
            The stored document (existing or newly created)
        """
        now = datetime.now(timezone.utc)

        doc = await self._collection.find_one_and_update(
            {"userId": ObjectId(user_id)},
            {
                "$setOnInsert": {
                    "userId": ObjectId(user_id),
                    "userGoal": "",
                    "weeklyTasks": [],
                    "progressHistory": [],
                    "createdAt": now,
                    "updatedAt": now,
                }
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )

        logger.debug(f"Ensured tracking document for user {user_id}")
        return doc

    async def update(self, user_id: str, fields: Dict[str, Any]) -> None:
        """
        Overwrite the given top-level fields of a user's document.

        Args:
            user_id: User ID
            fields: Field name -> new value
        """
        await self._collection.update_one(
            {"userId": ObjectId(user_id)},
            {"$set": {**fields, "updatedAt": datetime.now(timezone.utc)}},
        )
        logger.debug(f"Updated tracking fields {sorted(fields)} for user {user_id}")

    async def find_user_ids(self) -> List[str]:
        """Get the ids of every user with a tracking document."""
        cursor = self._collection.find({}, {"userId": 1})
        docs = await cursor.to_list(length=None)
        return [str(doc["userId"]) for doc in docs]
