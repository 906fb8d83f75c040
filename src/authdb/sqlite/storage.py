from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

from ..models import USER_TIME_FIELDS, SessionEntry, UserModel
from ..sql_storage import SQLSessionStorage, SQLUserStorage
from .bridge import SQLiteBridge
from .queries import SQLiteQueries

if TYPE_CHECKING:  # pragma: no cover
    from ..settings import StorageSettings

logger = logging.getLogger(__name__)


def _ensure_pragmas(connection: sqlite3.Connection) -> None:
    connection.execute("PRAGMA journal_mode = WAL;")


class SQLiteStorage:
    """SQLite-backed user and session storage.

    All operations are forwarded to the generic SQL storages except
    :meth:`update_user`, which writes only the requested columns when the
    queries support partial updates.
    """

    def __init__(
        self,
        db_path: str,
        replace_mapping: Optional[Mapping[str, str]] = None,
        *,
        user_field_updates: bool = True,
    ) -> None:
        path = Path(db_path)
        if not path.is_absolute():
            path = Path.cwd() / path
        self._db_path = str(path)

        if user_field_updates:
            self.queries = SQLiteQueries(replace_mapping)
        else:
            self.queries = SQLiteQueries(replace_mapping, update_fields_template="")
        self.bridge = SQLiteBridge()
        self._users = SQLUserStorage(self._connect, self.queries, self.bridge)
        self._sessions = SQLSessionStorage(self._connect, self.queries, self.bridge)
        logger.info("SQLite storage created for %s", self._db_path)

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> SQLiteStorage:
        return cls(
            settings.db_path,
            settings.replace_mapping(),
            user_field_updates=settings.user_field_updates,
        )

    @property
    def db_path(self) -> str:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._db_path)
        _ensure_pragmas(connection)
        return connection

    def init(self) -> None:
        Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self.init_users()
        self.init_sessions()
        logger.info("Auth database initialised at %s", self._db_path)

    def init_users(self) -> None:
        self._users.init_users()

    def get_user(self, user_id: int) -> Optional[UserModel]:
        return self._users.get_user(user_id)

    def get_user_by_name(self, username: str) -> Optional[UserModel]:
        return self._users.get_user_by_name(username)

    def get_user_by_email(self, email: str) -> Optional[UserModel]:
        return self._users.get_user_by_email(email)

    def insert_user(self, user: UserModel) -> int:
        return self._users.insert_user(user)

    def update_user(self, user: UserModel, fields: Optional[Iterable[str]] = None) -> None:
        """Update ``user``; with ``fields`` only those columns, in that order.

        ``fields`` may be any iterable of canonical field names. A name
        outside the user record raises :class:`UnknownFieldError` before
        anything is executed.
        """
        fields = list(fields or ())
        if not fields or not self.queries.supports_user_fields():
            self._users.update_user(user, fields)
            return
        query = self.queries.update_user(fields)
        params: list[Any] = []
        for name in fields:
            value = user.get_field(name)
            if name in USER_TIME_FIELDS:
                value = self.bridge.marshal_time(value)
            params.append(value)
        params.append(user.id)
        self._users.execute_update(query, params, user.id)

    def delete_user(self, user_id: int) -> None:
        self._users.delete_user(user_id)

    def init_sessions(self) -> None:
        self._sessions.init_sessions()

    def insert_session(self, entry: SessionEntry) -> None:
        self._sessions.insert_session(entry)

    def get_session(self, key: str) -> Optional[SessionEntry]:
        return self._sessions.get_session(key)

    def delete_session(self, key: str) -> None:
        self._sessions.delete_session(key)

    def clean_up(self, now: Optional[datetime] = None) -> int:
        return self._sessions.clean_up(now)

    def delete_for_user(self, user_id: int) -> int:
        return self._sessions.delete_for_user(user_id)
