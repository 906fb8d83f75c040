from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Optional

from .errors import TimeMismatchError, UnknownFieldError

# Canonical field name -> UserModel attribute.
USER_FIELD_ATTRIBUTES = MappingProxyType(
    {
        "ID": "id",
        "Username": "username",
        "Password": "password",
        "Email": "email",
        "FirstName": "first_name",
        "LastName": "last_name",
        "IsSuperUser": "is_superuser",
        "IsStaff": "is_staff",
        "IsActive": "is_active",
        "DateJoined": "date_joined",
        "LastLogin": "last_login",
    }
)

USER_TIME_FIELDS = frozenset({"DateJoined", "LastLogin"})
USER_BOOL_FIELDS = frozenset({"IsSuperUser", "IsStaff", "IsActive"})


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class UserModel:
    """A stored user.

    ``password`` holds the encoded password hash, never plain text. Both
    times must be timezone aware to be written.
    """

    username: str
    password: str
    email: str
    first_name: str = ""
    last_name: str = ""
    is_superuser: bool = False
    is_staff: bool = False
    is_active: bool = True
    date_joined: datetime = field(default_factory=_utc_now)
    last_login: datetime = field(default_factory=_utc_now)
    id: int = -1

    def get_field(self, name: str) -> Any:
        attribute = USER_FIELD_ATTRIBUTES.get(name)
        if attribute is None:
            raise UnknownFieldError(name)
        return getattr(self, attribute)


@dataclass(slots=True)
class SessionEntry:
    key: str
    user_id: int
    expire_date: datetime

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """Whether the session has not expired at ``now``, which must be timezone aware."""
        reference = now if now is not None else _utc_now()
        if reference.tzinfo is None or self.expire_date.tzinfo is None:
            raise TimeMismatchError("SessionEntry.is_valid: naive datetimes cannot be compared with stored times")
        return reference < self.expire_date
