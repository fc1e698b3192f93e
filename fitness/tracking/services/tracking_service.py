"""
Weekly exercise tracking service.

Owns the task lifecycle for one user: create, update, complete, weekly
reset with archival, and difficulty feedback. Every write is a
read-modify-write of the user's tracking document, done under that
user's lock.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, List, Dict, Any, Tuple

from common.utils.exceptions import NotFoundException, ValidationException
from fitness.locks import UserLockRegistry
from fitness.tracking.models import Difficulty
from fitness.tracking.services.suggestions import suggest_change, NO_SUGGESTION
from fitness.tracking.services.tracking_store import TrackingStore

logger = logging.getLogger(__name__)

UPDATABLE_TASK_FIELDS = ("reps", "sets", "weight")


def get_week_start(today: date) -> datetime:
    """
    Get the Sunday that starts the week containing ``today``.

    Returns:
        Midnight UTC of that Sunday
    """
    days_since_sunday = (today.weekday() + 1) % 7
    sunday = today - timedelta(days=days_since_sunday)
    return datetime.combine(sunday, time.min, tzinfo=timezone.utc)


class TrackingService:
    """
    Handles weekly task tracking for users.
    """

    def __init__(
        self,
        store: TrackingStore,
        locks: Optional[UserLockRegistry] = None,
    ):
        """
        Initialize TrackingService.

        Args:
            store: Tracking document storage
            locks: Per-user lock registry (a private one is created if omitted)
        """
        self._store = store
        self._locks = locks or UserLockRegistry()

    # ─────────────────────────────────────────────────────────────────
    # Records
    # ─────────────────────────────────────────────────────────────────

    async def create_tracking_record(self, user_id: str) -> Dict[str, Any]:
        """
        Create the user's tracking record if missing.

        Idempotent: an existing record is returned unchanged.
        """
        doc = await self._store.create(user_id)
        return self._format_record(doc)

    async def _get_record(self, user_id: str) -> Dict[str, Any]:
        doc = await self._store.find_by_user(user_id)
        if not doc:
            raise NotFoundException(
                message=f"Tracking document for user {user_id} does not exist!",
                code="TRACKING_NOT_FOUND",
            )
        return doc

    @staticmethod
    def _find_task(doc: Dict[str, Any], user_id: str, task_name: str) -> Dict[str, Any]:
        for task in doc.get("weeklyTasks", []):
            if task["name"] == task_name:
                return task
        raise NotFoundException(
            message=f"Task {task_name} does not exist for user {user_id}!",
            code="TASK_NOT_FOUND",
        )

    # ─────────────────────────────────────────────────────────────────
    # Task CRUD
    # ─────────────────────────────────────────────────────────────────

    async def create_task(
        self,
        user_id: str,
        name: str,
        description: str,
        reps: int,
        sets: Optional[int] = None,
        weight: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Append a new task to the user's weekly list.

        Creates the tracking record first if needed. Task names are not
        checked for uniqueness.

        Returns:
            The created task
        """
        task = {
            "name": name,
            "description": description,
            "reps": reps,
            "sets": sets,
            "weight": weight,
            "completed": False,
            "previousDifficulty": Difficulty.JUST_RIGHT.value,
        }

        async with self._locks.lock(user_id):
            doc = await self._store.create(user_id)
            weekly_tasks = doc.get("weeklyTasks", []) + [task]
            await self._store.update(user_id, {"weeklyTasks": weekly_tasks})

        logger.info(f"Created task '{name}' for user {user_id}")
        return dict(task)

    async def update_task(
        self,
        user_id: str,
        task_name: str,
        updates: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Apply a partial update to a task.

        Only keys present in ``updates`` change; absent keys keep their
        stored value.

        Args:
            user_id: User ID
            task_name: Name of the task to update
            updates: Any of reps, sets, weight

        Returns:
            The updated task

        Raises:
            NotFoundException: Record or task missing
            ValidationException: Unknown field or reps set to None
        """
        unknown = set(updates) - set(UPDATABLE_TASK_FIELDS)
        if unknown:
            raise ValidationException(
                message=f"Cannot update task fields: {', '.join(sorted(unknown))}",
                code="INVALID_TASK_UPDATE",
            )
        if "reps" in updates and updates["reps"] is None:
            raise ValidationException(message="reps cannot be null", code="INVALID_TASK_UPDATE")

        async with self._locks.lock(user_id):
            doc = await self._get_record(user_id)
            task = self._find_task(doc, user_id, task_name)

            for field in UPDATABLE_TASK_FIELDS:
                if field in updates:
                    task[field] = updates[field]

            await self._store.update(user_id, {"weeklyTasks": doc["weeklyTasks"]})

        logger.info(f"Updated task '{task_name}' for user {user_id}: {sorted(updates)}")
        return dict(task)

    async def delete_task(self, user_id: str, task_name: str) -> str:
        """
        Remove every task with the given name.

        Deleting a name that is not in the list is a no-op.

        Raises:
            NotFoundException: Record missing
        """
        async with self._locks.lock(user_id):
            doc = await self._get_record(user_id)
            weekly_tasks = doc.get("weeklyTasks", [])
            remaining = [t for t in weekly_tasks if t["name"] != task_name]

            if len(remaining) != len(weekly_tasks):
                await self._store.update(user_id, {"weeklyTasks": remaining})
                logger.info(f"Deleted task '{task_name}' for user {user_id}")

        return "Task successfully deleted!"

    async def get_tasks(self, user_id: str) -> List[Dict[str, Any]]:
        """Get the user's weekly task list."""
        doc = await self._get_record(user_id)
        return [dict(t) for t in doc.get("weeklyTasks", [])]

    async def set_goal(self, user_id: str, goal: str) -> str:
        """Overwrite the user's training goal, creating the record if needed."""
        async with self._locks.lock(user_id):
            await self._store.create(user_id)
            await self._store.update(user_id, {"userGoal": goal})

        logger.info(f"Set goal '{goal}' for user {user_id}")
        return goal

    # ─────────────────────────────────────────────────────────────────
    # Completion
    # ─────────────────────────────────────────────────────────────────

    async def toggle_completed(self, user_id: str, task_name: str) -> bool:
        """
        Flip a task's completed flag.

        Returns:
            The new completed state
        """
        async with self._locks.lock(user_id):
            doc = await self._get_record(user_id)
            task = self._find_task(doc, user_id, task_name)
            task["completed"] = not task.get("completed", False)
            await self._store.update(user_id, {"weeklyTasks": doc["weeklyTasks"]})

        logger.info(f"Task '{task_name}' for user {user_id} completed={task['completed']}")
        return task["completed"]

    async def is_completed(self, user_id: str, task_name: str) -> bool:
        doc = await self._get_record(user_id)
        return bool(self._find_task(doc, user_id, task_name).get("completed", False))

    async def all_tasks_completed(self, user_id: str) -> bool:
        """True when every weekly task is completed (also for an empty list)."""
        doc = await self._get_record(user_id)
        return all(t.get("completed", False) for t in doc.get("weeklyTasks", []))

    async def completion_percentage(self, user_id: str) -> float:
        """
        Share of weekly tasks completed, in percent with 2 decimals.

        Returns 0 when the user has no record or no tasks.
        """
        doc = await self._store.find_by_user(user_id)
        weekly_tasks = doc.get("weeklyTasks", []) if doc else []

        if not weekly_tasks:
            return 0

        completed = sum(1 for t in weekly_tasks if t.get("completed", False))
        percentage = Decimal(completed) * 100 / Decimal(len(weekly_tasks))
        return float(percentage.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))

    # ─────────────────────────────────────────────────────────────────
    # Weekly lifecycle
    # ─────────────────────────────────────────────────────────────────

    async def reset_weekly_tasks(
        self,
        user_id: str,
        today: Optional[date] = None,
    ) -> Dict[str, Any]:
        """
        Archive this week's completed tasks and start a fresh week.

        Appends one progress entry holding snapshots of the completed
        tasks, then marks every task incomplete. Difficulty feedback and
        all other task fields carry over.

        Args:
            user_id: User ID
            today: Date to archive under (defaults to today, UTC)

        Returns:
            The archived progress entry
        """
        today = today or datetime.now(timezone.utc).date()

        async with self._locks.lock(user_id):
            doc = await self._store.create(user_id)
            weekly_tasks = doc.get("weeklyTasks", [])

            entry = {
                "weekStart": get_week_start(today),
                "completedTasks": [dict(t) for t in weekly_tasks if t.get("completed", False)],
            }
            progress_history = doc.get("progressHistory", []) + [entry]
            reset_tasks = [{**t, "completed": False} for t in weekly_tasks]

            await self._store.update(
                user_id,
                {
                    "weeklyTasks": reset_tasks,
                    "progressHistory": progress_history,
                },
            )

        logger.info(
            f"Reset weekly tasks for user {user_id}: "
            f"archived {len(entry['completedTasks'])}/{len(weekly_tasks)} completed"
        )
        return entry

    async def get_progress_history(self, user_id: str) -> List[Dict[str, Any]]:
        """Get archived weeks, oldest first."""
        doc = await self._get_record(user_id)
        return doc.get("progressHistory", [])

    # ─────────────────────────────────────────────────────────────────
    # Difficulty feedback
    # ─────────────────────────────────────────────────────────────────

    async def prompt_change(
        self,
        user_id: str,
        task_name: str,
        current_difficulty: Difficulty,
    ) -> Tuple[str, Dict[str, Any]]:
        """
        Record how hard a task felt and suggest an adjustment.

        The task's previousDifficulty always advances to the reported
        value, whether or not a suggestion fires.

        Returns:
            (suggestion text or "No changes suggested!", updated task)
        """
        current_difficulty = Difficulty(current_difficulty)

        async with self._locks.lock(user_id):
            doc = await self._get_record(user_id)
            task = self._find_task(doc, user_id, task_name)

            previous = Difficulty(task.get("previousDifficulty", Difficulty.JUST_RIGHT.value))
            suggestion = suggest_change(doc.get("userGoal", ""), previous, current_difficulty)

            task["previousDifficulty"] = current_difficulty.value
            await self._store.update(user_id, {"weeklyTasks": doc["weeklyTasks"]})

        logger.info(
            f"Difficulty for '{task_name}' (user {user_id}): "
            f"{previous.value} -> {current_difficulty.value}, suggestion={suggestion is not None}"
        )
        return suggestion or NO_SUGGESTION, dict(task)

    # ─────────────────────────────────────────────────────────────────
    # Formatting
    # ─────────────────────────────────────────────────────────────────

    def _format_record(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Format a tracking document for API responses."""
        return {
            "userId": str(doc["userId"]),
            "userGoal": doc.get("userGoal", ""),
            "weeklyTasks": doc.get("weeklyTasks", []),
            "progressHistory": doc.get("progressHistory", []),
        }
