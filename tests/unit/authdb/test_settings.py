import pytest
from pydantic import ValidationError

from src.authdb.settings import StorageSettings


def test_defaults_match_default_dictionary():
    settings = StorageSettings()
    assert settings.replace_mapping() == {
        "USERS_TABLE_NAME": "auth_user",
        "SESSIONS_TABLE_NAME": "auth_session",
        "EMAIL_UNIQUE": "UNIQUE",
    }


def test_email_unique_disabled():
    assert StorageSettings(email_unique=False).replace_mapping()["EMAIL_UNIQUE"] == ""


@pytest.mark.parametrize("name", ["users; DROP TABLE x", "1users", "", "a-b"])
def test_invalid_table_names(name):
    with pytest.raises(ValidationError):
        StorageSettings(users_table_name=name)


def test_from_env(monkeypatch):
    monkeypatch.setenv("AUTHDB_PATH", "data/auth.db")
    monkeypatch.setenv("AUTHDB_SESSIONS_TABLE", " logins ")
    monkeypatch.setenv("AUTHDB_EMAIL_UNIQUE", "false")
    monkeypatch.setenv("AUTHDB_USER_FIELD_UPDATES", "no")
    settings = StorageSettings.from_env()
    assert settings.db_path == "data/auth.db"
    assert settings.sessions_table_name == "logins"
    assert settings.users_table_name == "auth_user"
    assert settings.email_unique is False
    assert settings.user_field_updates is False
