from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from .errors import FailureKind
from .models import SessionEntry, UserModel


class UserStorage(Protocol):
    def init_users(self) -> None: ...
    def get_user(self, user_id: int) -> Optional[UserModel]: ...
    def get_user_by_name(self, username: str) -> Optional[UserModel]: ...
    def get_user_by_email(self, email: str) -> Optional[UserModel]: ...
    def insert_user(self, user: UserModel) -> int: ...
    def update_user(self, user: UserModel, fields: Optional[Sequence[str]] = None) -> None: ...
    def delete_user(self, user_id: int) -> None: ...


class SessionStorage(Protocol):
    def init_sessions(self) -> None: ...
    def insert_session(self, entry: SessionEntry) -> None: ...
    def get_session(self, key: str) -> Optional[SessionEntry]: ...
    def delete_session(self, key: str) -> None: ...
    def clean_up(self, now: Optional[datetime] = None) -> int: ...
    def delete_for_user(self, user_id: int) -> int: ...


class UserQueries(Protocol):
    """Statement text for the user operations, bound to one engine flavour."""

    @property
    def row_names(self) -> Mapping[str, str]: ...
    def init_users(self) -> list[str]: ...
    def get_user(self) -> str: ...
    def get_user_by_name(self) -> str: ...
    def get_user_by_email(self) -> str: ...
    def insert_user(self) -> str: ...
    def update_user(self, fields: Sequence[str] = ()) -> str: ...
    def delete_user(self) -> str: ...
    def supports_user_fields(self) -> bool: ...


class SessionQueries(Protocol):
    def init_sessions(self) -> list[str]: ...
    def insert_session(self) -> str: ...
    def get_session(self) -> str: ...
    def delete_session(self) -> str: ...
    def clean_up_sessions(self) -> str: ...
    def delete_sessions_for_user(self) -> str: ...


class SQLBridge(Protocol):
    """Engine specific conversions used by the generic SQL storage."""

    def time_scan_type(self) -> type: ...
    def resolve_scanned_time(self, value: Any) -> datetime: ...
    def marshal_time(self, value: datetime) -> Any: ...
    def classify_insert_failure(self, error: Exception) -> FailureKind: ...
    def classify_update_failure(self, error: Exception) -> FailureKind: ...
