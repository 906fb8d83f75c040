from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Optional, Sequence

from .models import SessionEntry, UserModel
from .sqlite.storage import SQLiteStorage

logger = logging.getLogger(__name__)


class AsyncStorage:
    """Runs :class:`SQLiteStorage` calls in worker threads for asyncio hosts."""

    def __init__(self, storage: SQLiteStorage) -> None:
        self._storage = storage
        self._write_lock = asyncio.Lock()

    @property
    def storage(self) -> SQLiteStorage:
        return self._storage

    async def init(self) -> None:
        """Initialise database schema."""
        async with self._write_lock:
            await asyncio.to_thread(self._storage.init)

    async def get_user(self, user_id: int) -> Optional[UserModel]:
        return await asyncio.to_thread(self._storage.get_user, user_id)

    async def get_user_by_name(self, username: str) -> Optional[UserModel]:
        return await asyncio.to_thread(self._storage.get_user_by_name, username)

    async def get_user_by_email(self, email: str) -> Optional[UserModel]:
        return await asyncio.to_thread(self._storage.get_user_by_email, email)

    async def insert_user(self, user: UserModel) -> int:
        async with self._write_lock:
            return await asyncio.to_thread(self._storage.insert_user, user)

    async def update_user(self, user: UserModel, fields: Optional[Sequence[str]] = None) -> None:
        async with self._write_lock:
            await asyncio.to_thread(self._storage.update_user, user, fields)

    async def delete_user(self, user_id: int) -> None:
        async with self._write_lock:
            await asyncio.to_thread(self._storage.delete_user, user_id)

    async def insert_session(self, entry: SessionEntry) -> None:
        async with self._write_lock:
            await asyncio.to_thread(self._storage.insert_session, entry)

    async def get_session(self, key: str) -> Optional[SessionEntry]:
        return await asyncio.to_thread(self._storage.get_session, key)

    async def delete_session(self, key: str) -> None:
        async with self._write_lock:
            await asyncio.to_thread(self._storage.delete_session, key)

    async def clean_up(self, now: Optional[datetime] = None) -> int:
        async with self._write_lock:
            removed = await asyncio.to_thread(self._storage.clean_up, now)
        if removed:
            logger.info("Cleaned up %d expired sessions", removed)
        return removed

    async def delete_for_user(self, user_id: int) -> int:
        async with self._write_lock:
            return await asyncio.to_thread(self._storage.delete_for_user, user_id)
