"""FastAPI wiring: one process-wide :class:`AsyncStorage` for request handlers."""

from __future__ import annotations

import logging
from typing import Annotated, Optional

from fastapi import Depends

from .async_store import AsyncStorage
from .settings import StorageSettings
from .sqlite.storage import SQLiteStorage

logger = logging.getLogger(__name__)

_STORAGE: Optional[AsyncStorage] = None


def initialise_storage(settings: Optional[StorageSettings] = None) -> AsyncStorage:
    """Return the shared storage, creating it from ``settings`` or the environment on first use.

    The schema is not created here; hosts await :meth:`AsyncStorage.init`
    during startup.
    """
    global _STORAGE
    if _STORAGE is None:
        settings = settings or StorageSettings.from_env()
        _STORAGE = AsyncStorage(SQLiteStorage.from_settings(settings))
        logger.info(
            "Auth storage configured: db=%s users=%s sessions=%s",
            settings.db_path,
            settings.users_table_name,
            settings.sessions_table_name,
        )
    return _STORAGE


def set_storage(storage: AsyncStorage) -> None:
    global _STORAGE
    _STORAGE = storage


def reset_storage() -> None:
    global _STORAGE
    _STORAGE = None


def get_storage() -> AsyncStorage:
    """Dependency for ``Depends(get_storage)``; takes no arguments so FastAPI injects nothing."""
    return initialise_storage()


StorageDep = Annotated[AsyncStorage, Depends(get_storage)]
