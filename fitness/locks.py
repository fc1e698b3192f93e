"""
Per-user mutation locks.

Every tracking or points write is a read-modify-write of one user's
document. Holding the user's lock across the whole sequence keeps two
concurrent requests for the same user from losing each other's update.
Locks are per process; users never contend with each other.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict


class UserLockRegistry:
    """Hands out one asyncio.Lock per user id, dropped once nobody holds or awaits it."""

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = {}

    @asynccontextmanager
    async def lock(self, user_id: str) -> AsyncIterator[None]:
        user_lock = self._locks.get(user_id)
        if user_lock is None:
            user_lock = asyncio.Lock()
            self._locks[user_id] = user_lock
        self._users[user_id] = self._users.get(user_id, 0) + 1

        try:
            async with user_lock:
                yield
        finally:
            self._users[user_id] -= 1
            if self._users[user_id] == 0:
                del self._users[user_id]
                del self._locks[user_id]

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._locks

    def __len__(self) -> int:
        return len(self._locks)
