from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from ..errors import InvalidRowNamesError, UnknownFieldError, UnresolvedPlaceholderError
from ..models import USER_FIELD_ATTRIBUTES
from ..replacer import SQLTemplateReplacer
from ..sql_storage import DEFAULT_USER_ROW_NAMES
from . import statements as sql

logger = logging.getLogger(__name__)

DEFAULT_SQLITE_USER_ROW_NAMES = DEFAULT_USER_ROW_NAMES


def _checked_row_names(row_names: Mapping[str, str]) -> Mapping[str, str]:
    missing = [name for name in USER_FIELD_ATTRIBUTES if name not in row_names]
    unexpected = sorted(name for name in row_names if name not in USER_FIELD_ATTRIBUTES)
    if missing or unexpected:
        raise InvalidRowNamesError(missing, unexpected)
    return MappingProxyType(dict(row_names))


class SQLiteQueries:
    """Resolved SQLite statements for users and sessions.

    Every statement is resolved once, here in the constructor. Only the
    partial update is assembled per call, because its SET clause depends on
    the requested fields. Pass ``update_fields_template=""`` to disable
    partial updates entirely.

    A skeleton that still contains a placeholder without a dictionary entry
    fails construction with :class:`UnresolvedPlaceholderError`, and a
    ``row_names`` table that does not map exactly the user record fields
    with :class:`InvalidRowNamesError`.
    """

    def __init__(
        self,
        replace_mapping: Optional[Mapping[str, str]] = None,
        *,
        row_names: Mapping[str, str] = DEFAULT_SQLITE_USER_ROW_NAMES,
        update_fields_template: str = sql.SQLITE_UPDATE_USER_FIELDS,
    ) -> None:
        self._replacer = SQLTemplateReplacer(replace_mapping)
        self._row_names = _checked_row_names(row_names)

        self._init_users = [
            self._resolve(sql.SQLITE_USERS_INIT),
            self._resolve(sql.SQLITE_USERNAME_INDEX),
            self._resolve(sql.SQLITE_USER_EMAIL_INDEX),
        ]
        self._get_user = self._resolve(sql.SQLITE_QUERY_USERID)
        self._get_user_by_name = self._resolve(sql.SQLITE_QUERY_USERNAME)
        self._get_user_by_email = self._resolve(sql.SQLITE_QUERY_USERMAIL)
        self._insert_user = self._resolve(sql.SQLITE_INSERT_USER)
        self._update_user = self._resolve(sql.SQLITE_UPDATE_USER)
        self._delete_user = self._resolve(sql.SQLITE_DELETE_USER)
        self._update_fields = self._resolve_update_fields(update_fields_template)

        self._init_sessions = [
            self._resolve(sql.SQLITE_SESSIONS_INIT),
            self._resolve(sql.SQLITE_SESSION_USER_INDEX),
            self._resolve(sql.SQLITE_SESSION_EXPIRE_INDEX),
        ]
        self._insert_session = self._resolve(sql.SQLITE_INSERT_SESSION)
        self._get_session = self._resolve(sql.SQLITE_QUERY_SESSION)
        self._delete_session = self._resolve(sql.SQLITE_DELETE_SESSION)
        self._clean_up_sessions = self._resolve(sql.SQLITE_CLEANUP_SESSIONS)
        self._delete_sessions_for_user = self._resolve(sql.SQLITE_DELETE_SESSIONS_FOR_USER)

    @property
    def replacer(self) -> SQLTemplateReplacer:
        return self._replacer

    @property
    def row_names(self) -> Mapping[str, str]:
        return self._row_names

    def _resolve(self, skeleton: str, *, allowed: Sequence[str] = ()) -> str:
        missing = [token for token in self._replacer.unresolved(skeleton) if token not in allowed]
        statement = self._replacer.apply(skeleton)
        if missing:
            raise UnresolvedPlaceholderError(statement, missing)
        return statement

    def _resolve_update_fields(self, skeleton: str) -> str:
        if not skeleton:
            return ""
        statement = self._resolve(skeleton, allowed=(sql.UPDATE_CONTENT_TOKEN,))
        if sql.UPDATE_CONTENT_TOKEN not in statement:
            raise UnresolvedPlaceholderError(statement, [sql.UPDATE_CONTENT_TOKEN])
        return statement

    def init_users(self) -> list[str]:
        return list(self._init_users)

    def get_user(self) -> str:
        return self._get_user

    def get_user_by_name(self) -> str:
        return self._get_user_by_name

    def get_user_by_email(self) -> str:
        return self._get_user_by_email

    def insert_user(self) -> str:
        return self._insert_user

    def column_for(self, field_name: str) -> str:
        try:
            return self._row_names[field_name]
        except KeyError:
            raise UnknownFieldError(field_name) from None

    def update_user(self, fields: Sequence[str] = ()) -> str:
        """Return the update statement for ``fields``.

        Without fields, or when partial updates are disabled, this is the full
        update. Otherwise the SET clause lists one ``column=?`` per field in
        the given order, followed by the trailing id parameter.
        """
        if not fields or not self.supports_user_fields():
            return self._update_user
        updates = ",".join(f"{self.column_for(name)}=?" for name in fields)
        statement = self._update_fields.replace(sql.UPDATE_CONTENT_TOKEN, updates, 1)
        logger.debug("Built partial user update: %s", statement)
        return statement

    def delete_user(self) -> str:
        return self._delete_user

    def supports_user_fields(self) -> bool:
        return self._update_fields != ""

    def init_sessions(self) -> list[str]:
        return list(self._init_sessions)

    def insert_session(self) -> str:
        return self._insert_session

    def get_session(self) -> str:
        return self._get_session

    def delete_session(self) -> str:
        return self._delete_session

    def clean_up_sessions(self) -> str:
        return self._clean_up_sessions

    def delete_sessions_for_user(self) -> str:
        return self._delete_sessions_for_user
