"""
Pydantic models for Pointing system request/response validation.
"""

from typing import Optional, List
from pydantic import BaseModel, Field


class PointsModel(BaseModel):
    """A user's point total."""
    userId: str
    points: int
    verifiedPosts: List[str] = []


class AwardPointsRequest(BaseModel):
    """Request body for awarding or revoking points."""
    amount: int
    verifiedPost: Optional[str] = Field(None, description="Post ID the award is tied to")


class PointsResponse(BaseModel):
    """Response carrying one user's points."""
    msg: str
    result: PointsModel


class MessageResponse(BaseModel):
    """Plain message response."""
    msg: str


class TopPointsResponse(BaseModel):
    """Leaderboard response."""
    msg: str
    result: List[PointsModel]
