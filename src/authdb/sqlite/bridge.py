from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Any

from ..errors import FailureKind, TimeMismatchError

# Extended result codes of SQLITE_CONSTRAINT for UNIQUE and PRIMARY KEY.
_SQLITE_CONSTRAINT_PRIMARYKEY = 1555
_SQLITE_CONSTRAINT_UNIQUE = 2067
_DUPLICATE_CODES = frozenset({_SQLITE_CONSTRAINT_PRIMARYKEY, _SQLITE_CONSTRAINT_UNIQUE})


class SQLiteBridge:
    """Time conversion and error classification for the sqlite3 driver.

    Times are stored as UTC text with microsecond precision so that the
    column sorts and compares chronologically. Only timezone aware values
    can be written; the stored text is UTC, so scanned times are returned
    aware in UTC.
    """

    def time_scan_type(self) -> type:
        return str

    def resolve_scanned_time(self, value: Any) -> datetime:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, (str, bytes)):
            text = value.decode("utf-8") if isinstance(value, bytes) else value
            try:
                parsed = datetime.fromisoformat(text.strip().replace("Z", "+00:00"))
            except ValueError as exc:
                raise TimeMismatchError(f"SQLiteBridge.resolve_scanned_time: {text!r} is not a timestamp") from exc
        else:
            raise TimeMismatchError(
                f"SQLiteBridge.resolve_scanned_time: expected datetime or str, got {type(value).__name__}"
            )
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    def marshal_time(self, value: datetime) -> str:
        if value.tzinfo is None or value.utcoffset() is None:
            raise TimeMismatchError(f"SQLiteBridge.marshal_time: {value!r} has no timezone")
        return value.astimezone(timezone.utc).replace(tzinfo=None).isoformat(sep=" ", timespec="microseconds")

    @staticmethod
    def is_duplicate(error: Exception) -> bool:
        if not isinstance(error, sqlite3.IntegrityError):
            return False
        return getattr(error, "sqlite_errorcode", None) in _DUPLICATE_CODES

    def classify_insert_failure(self, error: Exception) -> FailureKind:
        if self.is_duplicate(error):
            return FailureKind.DUPLICATE_KEY
        return FailureKind.UNCLASSIFIED

    def classify_update_failure(self, error: Exception) -> FailureKind:
        if self.is_duplicate(error):
            return FailureKind.AMBIGUOUS_CREDENTIALS
        return FailureKind.UNCLASSIFIED
