from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

from src.config.loader import get_bool_env, get_str_env

from .replacer import DEFAULT_REPLACEMENTS

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")


class StorageSettings(BaseModel):
    db_path: str = Field(default="authdb.db", description="Path of the SQLite database file.")
    users_table_name: str = Field(default=DEFAULT_REPLACEMENTS["USERS_TABLE_NAME"])
    sessions_table_name: str = Field(default=DEFAULT_REPLACEMENTS["SESSIONS_TABLE_NAME"])
    email_unique: bool = Field(default=True, description="Require a distinct email per user.")
    user_field_updates: bool = Field(default=True, description="Allow updates of selected user columns.")

    @field_validator("users_table_name", "sessions_table_name")
    @classmethod
    def validate_table_name(cls, value: str) -> str:
        value = value.strip()
        if not _IDENTIFIER.match(value):
            raise ValueError(f"Invalid table name {value!r}: only letters, digits and underscores are allowed")
        return value

    @field_validator("db_path")
    @classmethod
    def validate_db_path(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Database path must not be empty")
        return value

    def replace_mapping(self) -> dict[str, str]:
        return {
            "USERS_TABLE_NAME": self.users_table_name,
            "SESSIONS_TABLE_NAME": self.sessions_table_name,
            "EMAIL_UNIQUE": "UNIQUE" if self.email_unique else "",
        }

    @classmethod
    def from_env(cls) -> StorageSettings:
        defaults = cls()
        return cls(
            db_path=get_str_env("AUTHDB_PATH", defaults.db_path),
            users_table_name=get_str_env("AUTHDB_USERS_TABLE", defaults.users_table_name),
            sessions_table_name=get_str_env("AUTHDB_SESSIONS_TABLE", defaults.sessions_table_name),
            email_unique=get_bool_env("AUTHDB_EMAIL_UNIQUE", defaults.email_unique),
            user_field_updates=get_bool_env("AUTHDB_USER_FIELD_UPDATES", defaults.user_field_updates),
        )
