"""Typed errors raised by the storage layer.

Engine errors that cannot be classified (connection loss, syntax errors,
locked databases) are not wrapped: they propagate as the driver raised them
so that hosts can apply their own retry and logging policy.
"""

from __future__ import annotations

from enum import Enum


class AuthStorageError(RuntimeError):
    """Base exception for storage failures."""


class DuplicateKeyError(AuthStorageError):
    """An insert collided with an existing row."""


class UserExistsError(DuplicateKeyError):
    def __init__(self, username: str, email: str) -> None:
        self.username = username
        self.email = email
        super().__init__(f"User with username {username!r} or email {email!r} already exists")


class SessionExistsError(DuplicateKeyError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__("Session key already exists")


class AmbiguousCredentialsError(AuthStorageError):
    """An update would give a user the username or email of another user."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"Update of user {user_id} collides with the credentials of another user")


class UnknownFieldError(AuthStorageError, KeyError):
    """A field name outside the user record was requested."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f'invalid field name "{field_name}": must be a field name of UserModel')

    def __str__(self) -> str:
        return self.args[0]


class UnresolvedPlaceholderError(AuthStorageError, ValueError):
    """A statement still contains a placeholder after substitution."""

    def __init__(self, statement: str, tokens: list[str]) -> None:
        self.statement = statement
        self.tokens = tokens
        super().__init__(f"Unresolved placeholders {', '.join(tokens)} in statement: {statement}")


class InvalidRowNamesError(AuthStorageError, ValueError):
    """A row-name table does not map exactly the fields of the user record."""

    def __init__(self, missing: list[str], unexpected: list[str]) -> None:
        self.missing = missing
        self.unexpected = unexpected
        super().__init__(f"Row-name table mismatch: missing {missing}, unexpected {unexpected}")


class TimeMismatchError(AuthStorageError, TypeError):
    """A value is not a usable time: not a timestamp, or missing its timezone."""


class FailureKind(Enum):
    """Engine independent outcome of classifying a failed statement."""

    DUPLICATE_KEY = "duplicate_key"
    AMBIGUOUS_CREDENTIALS = "ambiguous_credentials"
    UNCLASSIFIED = "unclassified"
