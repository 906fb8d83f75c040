"""Credential and session persistence on SQL engines."""

from typing import TYPE_CHECKING

from .errors import (
    AmbiguousCredentialsError,
    AuthStorageError,
    DuplicateKeyError,
    FailureKind,
    InvalidRowNamesError,
    SessionExistsError,
    TimeMismatchError,
    UnknownFieldError,
    UnresolvedPlaceholderError,
    UserExistsError,
)
from .models import SessionEntry, UserModel
from .replacer import DEFAULT_REPLACEMENTS, SQLTemplateReplacer
from .settings import StorageSettings
from .sql_storage import DEFAULT_USER_ROW_NAMES, SQLSessionStorage, SQLUserStorage
from .sqlite import SQLiteBridge, SQLiteQueries, SQLiteStorage

__all__ = [
    "AmbiguousCredentialsError",
    "AuthStorageError",
    "DEFAULT_REPLACEMENTS",
    "DEFAULT_USER_ROW_NAMES",
    "DuplicateKeyError",
    "FailureKind",
    "InvalidRowNamesError",
    "SQLSessionStorage",
    "SQLTemplateReplacer",
    "SQLUserStorage",
    "SQLiteBridge",
    "SQLiteQueries",
    "SQLiteStorage",
    "SessionEntry",
    "SessionExistsError",
    "StorageSettings",
    "TimeMismatchError",
    "UnknownFieldError",
    "UnresolvedPlaceholderError",
    "UserExistsError",
    "UserModel",
    "get_storage",
]

if TYPE_CHECKING:  # pragma: no cover
    from .dependencies import get_storage as _get_storage


def __getattr__(name: str):  # pragma: no cover - simple lazy import
    if name == "get_storage":
        from .dependencies import get_storage

        return get_storage
    raise AttributeError(name)
