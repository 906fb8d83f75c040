from src.config.loader import get_bool_env, get_str_env


def test_get_str_env(monkeypatch):
    monkeypatch.setenv("AUTHDB_TEST_STR", "  value ")
    assert get_str_env("AUTHDB_TEST_STR") == "value"
    monkeypatch.delenv("AUTHDB_TEST_STR")
    assert get_str_env("AUTHDB_TEST_STR", "fallback") == "fallback"


def test_get_bool_env(monkeypatch):
    monkeypatch.setenv("AUTHDB_TEST_BOOL", "Yes")
    assert get_bool_env("AUTHDB_TEST_BOOL") is True
    monkeypatch.setenv("AUTHDB_TEST_BOOL", "0")
    assert get_bool_env("AUTHDB_TEST_BOOL", True) is False
    monkeypatch.delenv("AUTHDB_TEST_BOOL")
    assert get_bool_env("AUTHDB_TEST_BOOL", True) is True
