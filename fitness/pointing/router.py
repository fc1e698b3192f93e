"""
FastAPI router for Pointing system endpoints.

Provides the current user's point ledger and the leaderboard.
"""

import logging
from typing import Annotated

from bson import ObjectId
from fastapi import APIRouter, Depends

from common.utils.exceptions import BadRequestException
from fitness.config import settings
from fitness.dependencies import require_auth
from fitness.pointing.dependencies import get_point_service
from fitness.pointing.services.point_service import PointService
from fitness.pointing.models import (
    AwardPointsRequest,
    PointsResponse,
    MessageResponse,
    TopPointsResponse,
)

logger = logging.getLogger(__name__)

UserId = Annotated[str, Depends(require_auth)]
Points = Annotated[PointService, Depends(get_point_service)]


async def create_user_points(user_id: UserId, point_service: Points):
    result = await point_service.create(user_id)
    return PointsResponse(msg="Created point for current user", result=result)


async def delete_user_points(user_id: UserId, point_service: Points):
    msg = await point_service.delete(user_id)
    return MessageResponse(msg=msg)


async def get_user_points(user_id: UserId, point_service: Points):
    result = await point_service.get_points(user_id)
    return PointsResponse(msg="Points for current user", result=result)


async def award_user_points(body: AwardPointsRequest, user_id: UserId, point_service: Points):
    """
    Award or revoke points for the current user.

    When verifiedPost is given the award is tied to that post.
    """
    if body.verifiedPost is not None and not ObjectId.is_valid(body.verifiedPost):
        raise BadRequestException(
            message=f"Invalid post id: {body.verifiedPost}",
            code="INVALID_POST_ID",
        )

    result = await point_service.award_points(user_id, body.amount, body.verifiedPost)
    return PointsResponse(msg="points awarded", result=result)


async def get_top_points(user_id: UserId, point_service: Points):
    result = await point_service.get_top(settings.TOP_POINTS_LIMIT)
    return TopPointsResponse(msg=f"Top {settings.TOP_POINTS_LIMIT} points", result=result)


# ─────────────────────────────────────────────────────────────────
# Route table
# ─────────────────────────────────────────────────────────────────

ROUTES = [
    ("POST", "", create_user_points, PointsResponse),
    ("DELETE", "", delete_user_points, MessageResponse),
    ("GET", "", get_user_points, PointsResponse),
    ("PATCH", "", award_user_points, PointsResponse),
    ("GET", "/top", get_top_points, TopPointsResponse),
]


def build_router() -> APIRouter:
    """Register the pointing route table on a fresh router."""
    router = APIRouter(prefix="/pointing", tags=["pointing"])
    for method, path, endpoint, response_model in ROUTES:
        router.add_api_route(
            path,
            endpoint,
            methods=[method],
            response_model=response_model,
        )
    logger.debug(f"Registered {len(ROUTES)} pointing routes")
    return router
