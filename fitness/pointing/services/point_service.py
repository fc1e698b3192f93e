"""
Point ledger service.

Keeps one points document per user with a running total and the set of
posts already verified for that user. A verified post can award points
once and revoke them once; totals never go below zero.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from common.utils.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
)
from fitness.locks import UserLockRegistry

logger = logging.getLogger(__name__)


class PointService:
    """
    Handles point document storage and award rules.
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        collection_name: str = "points",
        locks: Optional[UserLockRegistry] = None,
    ):
        """
        Initialize PointService.

        Args:
            db: MongoDB database connection
            collection_name: Collection holding points documents
            locks: Per-user lock registry (a private one is created if omitted)
        """
        self._db = db
        self._points_collection = db[collection_name]
        self._locks = locks or UserLockRegistry()

    async def create(self, user_id: str) -> Dict[str, Any]:
        """
        Create a zero-point document for a user.

        Raises:
            ConflictException: User already has a points document
        """
        now = datetime.now(timezone.utc)
        points_doc = {
            "userId": ObjectId(user_id),
            "points": 0,
            "verifiedPosts": [],
            "createdAt": now,
            "updatedAt": now,
        }

        async with self._locks.lock(user_id):
            # Returns the pre-existing document, or None when this call inserted
            existing = await self._points_collection.find_one_and_update(
                {"userId": ObjectId(user_id)},
                {"$setOnInsert": points_doc},
                upsert=True,
                return_document=ReturnDocument.BEFORE,
            )

        if existing:
            raise ConflictException(
                message=f"{user_id} already has an associated points doc",
                code="POINTS_EXIST",
            )

        logger.info(f"Created points document for user {user_id}")
        return self._format_points(points_doc)

    async def delete(self, user_id: str) -> str:
        """Delete a user's points document."""
        result = await self._points_collection.delete_one({"userId": ObjectId(user_id)})
        logger.info(f"Deleted {result.deleted_count} points document(s) for user {user_id}")
        return f"Points Deleted for {user_id}"

    async def get_points(self, user_id: str) -> Dict[str, Any]:
        """
        Get a user's points document.

        Raises:
            NotFoundException: User has no points document
        """
        points_doc = await self._points_collection.find_one({"userId": ObjectId(user_id)})
        if not points_doc:
            raise NotFoundException(
                message=f"Points not found for {user_id}",
                code="POINTS_NOT_FOUND",
            )
        return self._format_points(points_doc)

    async def award_points(
        self,
        user_id: str,
        amount: int,
        verified_post: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Add (or with a negative amount, remove) points.

        With ``verified_post``, a non-negative award verifies a post that
        was not verified yet, and a negative award un-verifies a post that
        was. Every other combination is rejected.

        Args:
            user_id: User ID
            amount: Points to add (negative to revoke)
            verified_post: Optional post ID the award is tied to

        Returns:
            Updated points document

        Raises:
            NotFoundException: User has no points document
            ForbiddenException: Invalid verification change or negative total
        """
        async with self._locks.lock(user_id):
            points_doc = await self._points_collection.find_one({"userId": ObjectId(user_id)})
            if not points_doc:
                raise NotFoundException(
                    message=f"Points not found for {user_id}",
                    code="POINTS_NOT_FOUND",
                )

            verified_posts: List[ObjectId] = list(points_doc.get("verifiedPosts", []))

            if verified_post is not None:
                post_id = ObjectId(verified_post)
                already_verified = post_id in verified_posts

                if amount >= 0 and not already_verified:
                    verified_posts.append(post_id)
                elif amount < 0 and already_verified:
                    verified_posts = [p for p in verified_posts if p != post_id]
                else:
                    raise ForbiddenException(
                        message=f"invalid award: tried to award {amount} to {user_id} using {verified_post}",
                        code="INVALID_POINT_AWARD",
                    )

            new_total = points_doc.get("points", 0) + amount
            if new_total < 0:
                raise ForbiddenException(
                    message="resulting amount would be less than 0",
                    code="NEGATIVE_POINTS",
                )

            await self._points_collection.update_one(
                {"userId": ObjectId(user_id)},
                {
                    "$set": {
                        "points": new_total,
                        "verifiedPosts": verified_posts,
                        "updatedAt": datetime.now(timezone.utc),
                    }
                },
            )

        logger.info(f"Awarded {amount} points to user {user_id} (total {new_total})")
        return {
            "userId": user_id,
            "points": new_total,
            "verifiedPosts": [str(p) for p in verified_posts],
        }

    async def get_top(self, limit: int = 5) -> List[Dict[str, Any]]:
        """Get the highest point totals, highest first."""
        cursor = self._points_collection.find({})
        cursor = cursor.sort("points", -1)
        cursor = cursor.limit(limit)

        docs = await cursor.to_list(length=limit)
        return [self._format_points(d) for d in docs]

    def _format_points(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Format a points document for API responses."""
        return {
            "userId": str(doc["userId"]),
            "points": doc.get("points", 0),
            "verifiedPosts": [str(p) for p in doc.get("verifiedPosts", [])],
        }
