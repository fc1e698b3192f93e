"""
FastAPI router for Tracking system endpoints.

Handlers are plain functions; the route table at the bottom maps
(method, path) to handler and response model and is registered by
build_router() at startup.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from fitness.dependencies import require_auth
from fitness.tracking.dependencies import get_tracking_service
from fitness.tracking.services.tracking_service import TrackingService
from fitness.tracking.models import (
    CreateTaskRequest,
    UpdateTaskRequest,
    SetGoalRequest,
    PromptChangeRequest,
    MessageResponse,
    TaskResponse,
    TasksResponse,
    GoalResponse,
    CompletionStatusResponse,
    ToggleCompletedResponse,
    AllCompletedResponse,
    PercentageResponse,
    HistoryResponse,
    PromptChangeResponse,
    TrackingProfileResponse,
)

logger = logging.getLogger(__name__)

UserId = Annotated[str, Depends(require_auth)]
Tracking = Annotated[TrackingService, Depends(get_tracking_service)]


async def create_tracking_profile(user_id: UserId, tracking_service: Tracking):
    """Create the current user's tracking profile if it does not exist."""
    profile = await tracking_service.create_tracking_record(user_id)
    return TrackingProfileResponse(
        msg="Tracking profile created successfully!",
        trackingProfile=profile,
    )


async def get_completion_percentage(user_id: UserId, tracking_service: Tracking):
    """Get the share of this week's tasks that are completed."""
    percentage = await tracking_service.completion_percentage(user_id)
    return PercentageResponse(msg="Percentage of tasks completed", percentage=percentage)


async def get_all_completed(user_id: UserId, tracking_service: Tracking):
    """Check whether every task this week is completed."""
    completed = await tracking_service.all_tasks_completed(user_id)
    return AllCompletedResponse(msg="Weekly completion status", completed=completed)


async def get_tasks(user_id: UserId, tracking_service: Tracking):
    tasks = await tracking_service.get_tasks(user_id)
    return TasksResponse(msg="Tasks retrieved successfully!", tasks=tasks)


async def create_task(body: CreateTaskRequest, user_id: UserId, tracking_service: Tracking):
    """Add a task to this week's list."""
    task = await tracking_service.create_task(
        user_id,
        name=body.taskName,
        description=body.taskDescription,
        reps=body.reps,
        sets=body.sets,
        weight=body.startingWeight,
    )
    return TaskResponse(msg="Task successfully created!", task=task)


async def update_task(
    taskName: str,
    body: UpdateTaskRequest,
    user_id: UserId,
    tracking_service: Tracking,
):
    """
    Update a task's reps, sets or weight.

    Only provided fields will be updated (partial update).
    """
    task = await tracking_service.update_task(
        user_id,
        taskName,
        body.model_dump(exclude_unset=True),
    )
    return TaskResponse(msg="Task successfully updated!", task=task)


async def delete_task(taskName: str, user_id: UserId, tracking_service: Tracking):
    msg = await tracking_service.delete_task(user_id, taskName)
    return MessageResponse(msg=msg)


async def set_goal(body: SetGoalRequest, user_id: UserId, tracking_service: Tracking):
    """Set the training goal used for difficulty suggestions."""
    goal = await tracking_service.set_goal(user_id, body.goal)
    return GoalResponse(msg="User goal successfully updated!", goal=goal)


async def toggle_task_completion(taskName: str, user_id: UserId, tracking_service: Tracking):
    completed = await tracking_service.toggle_completed(user_id, taskName)
    state = "completed" if completed else "incomplete"
    return ToggleCompletedResponse(msg=f"Task '{taskName}' marked as {state}!", completed=completed)


async def is_task_completed(taskName: str, user_id: UserId, tracking_service: Tracking):
    completed = await tracking_service.is_completed(user_id, taskName)
    return CompletionStatusResponse(taskName=taskName, completed=completed)


async def reset_weekly_tasks(user_id: UserId, tracking_service: Tracking):
    """Archive completed tasks and mark every task incomplete."""
    await tracking_service.reset_weekly_tasks(user_id)
    return MessageResponse(msg="Weekly tasks reset and progress archived!")


async def get_progress_history(user_id: UserId, tracking_service: Tracking):
    history = await tracking_service.get_progress_history(user_id)
    return HistoryResponse(msg="Progress history retrieved successfully!", history=history)


async def prompt_change(
    taskName: str,
    body: PromptChangeRequest,
    user_id: UserId,
    tracking_service: Tracking,
):
    """
    Report how hard a task felt.

    Returns a suggestion when the same extreme difficulty is reported
    twice in a row.
    """
    msg, task = await tracking_service.prompt_change(user_id, taskName, body.currentDifficulty)
    return PromptChangeResponse(msg=msg, task=task)


# ─────────────────────────────────────────────────────────────────
# Route table
# ─────────────────────────────────────────────────────────────────

ROUTES = [
    ("POST", "/profile", create_tracking_profile, TrackingProfileResponse),
    ("GET", "/percentage", get_completion_percentage, PercentageResponse),
    ("GET", "/completed", get_all_completed, AllCompletedResponse),
    ("GET", "/tasks", get_tasks, TasksResponse),
    ("POST", "/tasks", create_task, TaskResponse),
    ("POST", "/tasks/reset", reset_weekly_tasks, MessageResponse),
    ("PATCH", "/tasks/{taskName}", update_task, TaskResponse),
    ("DELETE", "/tasks/{taskName}", delete_task, MessageResponse),
    ("POST", "/tasks/{taskName}/completed", toggle_task_completion, ToggleCompletedResponse),
    ("GET", "/tasks/{taskName}/completed", is_task_completed, CompletionStatusResponse),
    ("POST", "/tasks/{taskName}/prompt", prompt_change, PromptChangeResponse),
    ("POST", "/goal", set_goal, GoalResponse),
    ("GET", "/history", get_progress_history, HistoryResponse),
]


def build_router() -> APIRouter:
    """Register the tracking route table on a fresh router."""
    router = APIRouter(prefix="/tracking", tags=["tracking"])
    for method, path, endpoint, response_model in ROUTES:
        router.add_api_route(
            path,
            endpoint,
            methods=[method],
            response_model=response_model,
        )
    logger.debug(f"Registered {len(ROUTES)} tracking routes")
    return router
