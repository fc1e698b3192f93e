"""
Weekly reset background job.

Archives every user's completed tasks into their progress history and
starts a fresh week. This job should be run once a week, at the start of
Sunday UTC, via CRON.

The job holds its own per-user locks, not the API's. A reset racing an
API write for the same user (for example create_task) can overwrite it,
so schedule the job for a quiet window.

Usage:
    Run via CRON:
        5 0 * * 0 cd /path/to/project && python -m jobs.weekly_reset

    Or run directly:
        python -m jobs.weekly_reset
"""

import asyncio
import logging
import sys
from datetime import date, datetime, timezone
from typing import Optional, Dict, Any

from motor.motor_asyncio import AsyncIOMotorClient

from fitness.config import settings
from fitness.tracking.services.tracking_store import TrackingStore
from fitness.tracking.services.tracking_service import TrackingService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


class WeeklyResetJob:
    """
    Runs the weekly reset for every user with a tracking record.

    A failure for one user is logged and recorded; the remaining users are
    still processed.
    """

    def __init__(self, tracking_service: TrackingService, tracking_store: TrackingStore):
        """
        Initialize the weekly reset job.

        Args:
            tracking_service: Service performing the per-user reset
            tracking_store: Store used to enumerate users
        """
        self._tracking_service = tracking_service
        self._tracking_store = tracking_store

    async def run(self, today: Optional[date] = None) -> Dict[str, Any]:
        """
        Execute the weekly reset.

        Args:
            today: Date to archive under (defaults to today, UTC)

        Returns:
            Dict with job results including counts and any errors
        """
        logger.info("Starting weekly reset job")
        start_time = datetime.now(timezone.utc)
        today = today or start_time.date()

        results = {
            "startTime": start_time.isoformat(),
            "usersProcessed": 0,
            "totalTasksArchived": 0,
            "errors": [],
        }

        try:
            user_ids = await self._tracking_store.find_user_ids()
            logger.info(f"Found {len(user_ids)} users with tracking records")

            for user_id in user_ids:
                try:
                    entry = await self._tracking_service.reset_weekly_tasks(user_id, today=today)
                    results["usersProcessed"] += 1
                    results["totalTasksArchived"] += len(entry["completedTasks"])
                except Exception as e:
                    error_msg = f"Failed to reset user {user_id}: {str(e)}"
                    logger.error(error_msg)
                    results["errors"].append(error_msg)

        except Exception as e:
            error_msg = f"Job failed: {str(e)}"
            logger.error(error_msg)
            results["errors"].append(error_msg)

        end_time = datetime.now(timezone.utc)
        results["endTime"] = end_time.isoformat()
        results["durationSeconds"] = (end_time - start_time).total_seconds()

        logger.info(
            f"Weekly reset job completed. "
            f"Processed: {results['usersProcessed']} users, "
            f"Errors: {len(results['errors'])}"
        )

        return results


async def main():
    """Main entry point for the weekly reset job."""
    client = AsyncIOMotorClient(settings.MONGODB_URI)
    db = client[settings.MONGODB_DATABASE]

    store = TrackingStore(db=db, collection_name=settings.TRACKING_COLLECTION)
    job = WeeklyResetJob(
        tracking_service=TrackingService(store=store),
        tracking_store=store,
    )

    try:
        results = await job.run()

        print("\n=== Weekly Reset Job Results ===")
        print(f"Start Time: {results['startTime']}")
        print(f"End Time: {results['endTime']}")
        print(f"Duration: {results['durationSeconds']:.2f} seconds")
        print(f"Users Processed: {results['usersProcessed']}")
        print(f"Tasks Archived: {results['totalTasksArchived']}")

        if results["errors"]:
            print(f"\nErrors ({len(results['errors'])}):")
            for error in results["errors"]:
                print(f"  - {error}")

        sys.exit(1 if results["errors"] else 0)

    finally:
        client.close()


if __name__ == "__main__":
    asyncio.run(main())
