"""
Pydantic models for Tracking system request/response validation.

Defines the difficulty scale, task and history shapes, and the request
bodies for task operations.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    """Difficulty a user reports after doing a task."""
    DIFFICULT = "Difficult"
    JUST_RIGHT = "JustRight"
    EASY = "Easy"


# ─────────────────────────────────────────────────────────────────
# Shared shapes
# ─────────────────────────────────────────────────────────────────

class TaskModel(BaseModel):
    """A weekly exercise task."""
    name: str
    description: str
    reps: int
    sets: Optional[int] = None
    weight: Optional[float] = None
    completed: bool = False
    previousDifficulty: Difficulty = Difficulty.JUST_RIGHT


class ProgressEntryModel(BaseModel):
    """One archived week."""
    weekStart: datetime
    completedTasks: List[TaskModel]


class TrackingProfileModel(BaseModel):
    """A user's tracking record."""
    userId: str
    userGoal: str = ""
    weeklyTasks: List[TaskModel] = []
    progressHistory: List[ProgressEntryModel] = []


# ─────────────────────────────────────────────────────────────────
# Requests
# ─────────────────────────────────────────────────────────────────

class CreateTaskRequest(BaseModel):
    """Request body for creating a task."""
    taskName: str = Field(..., min_length=1, max_length=100)
    taskDescription: str = Field("", max_length=500)
    reps: int = Field(..., ge=0)
    sets: Optional[int] = Field(None, ge=0)
    startingWeight: Optional[float] = Field(None, ge=0)


class UpdateTaskRequest(BaseModel):
    """
    Request body for updating a task.

    Only fields present in the body are applied.
    """
    reps: Optional[int] = Field(None, ge=0)
    sets: Optional[int] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0)


class SetGoalRequest(BaseModel):
    """Request body for setting the training goal."""
    goal: str = Field(..., max_length=100, description="strength | muscle | endurance | free text")


class PromptChangeRequest(BaseModel):
    """Request body for reporting how hard a task felt."""
    currentDifficulty: Difficulty


# ─────────────────────────────────────────────────────────────────
# Responses
# ─────────────────────────────────────────────────────────────────

class MessageResponse(BaseModel):
    """Plain message response."""
    msg: str


class TaskResponse(BaseModel):
    """Response carrying a single task."""
    msg: str
    task: TaskModel


class TasksResponse(BaseModel):
    """Response for the weekly task list."""
    msg: str
    tasks: List[TaskModel]


class GoalResponse(BaseModel):
    """Response for goal update."""
    msg: str
    goal: str


class CompletionStatusResponse(BaseModel):
    """Response for a single task's completion state."""
    taskName: str
    completed: bool


class ToggleCompletedResponse(BaseModel):
    """Response for toggling completion."""
    msg: str
    completed: bool


class AllCompletedResponse(BaseModel):
    """Response for whole-week completion."""
    msg: str
    completed: bool


class PercentageResponse(BaseModel):
    """Response for completion percentage."""
    msg: str
    percentage: float


class HistoryResponse(BaseModel):
    """Response for archived weeks."""
    msg: str
    history: List[ProgressEntryModel]


class PromptChangeResponse(BaseModel):
    """Response for difficulty feedback."""
    msg: str
    task: TaskModel


class TrackingProfileResponse(BaseModel):
    """Response for profile creation."""
    msg: str
    trackingProfile: TrackingProfileModel
