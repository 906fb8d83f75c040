from __future__ import annotations

import logging
from contextlib import closing
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Sequence

from .errors import (
    AmbiguousCredentialsError,
    FailureKind,
    SessionExistsError,
    UserExistsError,
)
from .interfaces import SessionQueries, SQLBridge, UserQueries
from .models import USER_BOOL_FIELDS, USER_FIELD_ATTRIBUTES, USER_TIME_FIELDS, SessionEntry, UserModel

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[], Any]

# Physical columns are named like the UserModel attributes.
DEFAULT_USER_ROW_NAMES: Mapping[str, str] = MappingProxyType(dict(USER_FIELD_ATTRIBUTES))


class _SQLExecutor:
    """Runs one statement per short-lived connection from ``connect``."""

    def __init__(self, connect: ConnectionFactory) -> None:
        self._connect = connect

    def _execute(self, query: str, params: Sequence[Any] = ()) -> tuple[int, Optional[int]]:
        with closing(self._connect()) as connection:
            cursor = connection.cursor()
            try:
                cursor.execute(query, tuple(params))
                connection.commit()
            except Exception:
                connection.rollback()
                raise
            return cursor.rowcount, cursor.lastrowid

    def _execute_all(self, statements: Sequence[str]) -> None:
        with closing(self._connect()) as connection:
            cursor = connection.cursor()
            try:
                for statement in statements:
                    cursor.execute(statement)
                connection.commit()
            except Exception:
                connection.rollback()
                raise

    def _fetchone(self, query: str, params: Sequence[Any] = ()) -> Optional[dict[str, Any]]:
        with closing(self._connect()) as connection:
            cursor = connection.cursor()
            cursor.execute(query, tuple(params))
            row = cursor.fetchone()
            if row is None:
                return None
            columns = [description[0] for description in cursor.description]
            return dict(zip(columns, row))


class SQLUserStorage(_SQLExecutor):
    """User storage for any DB-API driver using ``?`` parameters."""

    def __init__(self, connect: ConnectionFactory, queries: UserQueries, bridge: SQLBridge) -> None:
        super().__init__(connect)
        self.queries = queries
        self.bridge = bridge

    def init_users(self) -> None:
        statements = self.queries.init_users()
        self._execute_all(statements)
        logger.info("User tables initialised (%d statements)", len(statements))

    def get_user(self, user_id: int) -> Optional[UserModel]:
        return self._row_to_user(self._fetchone(self.queries.get_user(), (user_id,)))

    def get_user_by_name(self, username: str) -> Optional[UserModel]:
        return self._row_to_user(self._fetchone(self.queries.get_user_by_name(), (username,)))

    def get_user_by_email(self, email: str) -> Optional[UserModel]:
        return self._row_to_user(self._fetchone(self.queries.get_user_by_email(), (email,)))

    def insert_user(self, user: UserModel) -> int:
        try:
            _, user_id = self._execute(self.queries.insert_user(), self.user_args(user))
        except Exception as exc:
            if self.bridge.classify_insert_failure(exc) is FailureKind.DUPLICATE_KEY:
                raise UserExistsError(user.username, user.email) from exc
            raise
        user.id = int(user_id)
        return user.id

    def update_user(self, user: UserModel, fields: Optional[Sequence[str]] = None) -> None:
        """Write every column of ``user``; ``fields`` is ignored here."""
        params = (*self.user_args(user), user.id)
        self.execute_update(self.queries.update_user(), params, user.id)

    def execute_update(self, query: str, params: Sequence[Any], user_id: int) -> None:
        try:
            self._execute(query, params)
        except Exception as exc:
            if self.bridge.classify_update_failure(exc) is FailureKind.AMBIGUOUS_CREDENTIALS:
                raise AmbiguousCredentialsError(user_id) from exc
            raise

    def delete_user(self, user_id: int) -> None:
        self._execute(self.queries.delete_user(), (user_id,))

    def user_args(self, user: UserModel) -> tuple[Any, ...]:
        return (
            user.username,
            user.password,
            user.email,
            user.first_name,
            user.last_name,
            user.is_superuser,
            user.is_staff,
            user.is_active,
            self.bridge.marshal_time(user.date_joined),
            self.bridge.marshal_time(user.last_login),
        )

    def _row_to_user(self, row: Optional[dict[str, Any]]) -> Optional[UserModel]:
        if row is None:
            return None
        values: dict[str, Any] = {}
        for field_name, attribute in USER_FIELD_ATTRIBUTES.items():
            value = row[self.queries.row_names[field_name]]
            if field_name in USER_TIME_FIELDS:
                value = self.bridge.resolve_scanned_time(value)
            elif field_name in USER_BOOL_FIELDS:
                value = bool(value)
            values[attribute] = value
        return UserModel(**values)


class SQLSessionStorage(_SQLExecutor):
    """Session storage for any DB-API driver using ``?`` parameters."""

    def __init__(self, connect: ConnectionFactory, queries: SessionQueries, bridge: SQLBridge) -> None:
        super().__init__(connect)
        self.queries = queries
        self.bridge = bridge

    def init_sessions(self) -> None:
        statements = self.queries.init_sessions()
        self._execute_all(statements)
        logger.info("Session tables initialised (%d statements)", len(statements))

    def insert_session(self, entry: SessionEntry) -> None:
        params = (entry.key, entry.user_id, self.bridge.marshal_time(entry.expire_date))
        try:
            self._execute(self.queries.insert_session(), params)
        except Exception as exc:
            if self.bridge.classify_insert_failure(exc) is FailureKind.DUPLICATE_KEY:
                raise SessionExistsError(entry.key) from exc
            raise

    def get_session(self, key: str) -> Optional[SessionEntry]:
        row = self._fetchone(self.queries.get_session(), (key,))
        if row is None:
            return None
        return SessionEntry(
            key=row["session_key"],
            user_id=row["user_id"],
            expire_date=self.bridge.resolve_scanned_time(row["expire_date"]),
        )

    def delete_session(self, key: str) -> None:
        self._execute(self.queries.delete_session(), (key,))

    def clean_up(self, now: Optional[datetime] = None) -> int:
        """Remove all sessions that expired before ``now`` and return how many were removed."""
        reference = now if now is not None else datetime.now(timezone.utc)
        removed, _ = self._execute(self.queries.clean_up_sessions(), (self.bridge.marshal_time(reference),))
        logger.debug("Removed %d expired sessions", removed)
        return removed

    def delete_for_user(self, user_id: int) -> int:
        removed, _ = self._execute(self.queries.delete_sessions_for_user(), (user_id,))
        return removed
