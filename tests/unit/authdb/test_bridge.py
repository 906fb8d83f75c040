import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from src.authdb.errors import FailureKind, TimeMismatchError
from src.authdb.sqlite.bridge import SQLiteBridge


@pytest.fixture
def connection():
    connection = sqlite3.connect(":memory:")
    connection.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, name TEXT NOT NULL UNIQUE, at DATETIME)")
    connection.execute("INSERT INTO t (id, name) VALUES (1, 'alice')")
    yield connection
    connection.close()


def _raise(connection, query, params=()):
    with pytest.raises(sqlite3.Error) as excinfo:
        connection.execute(query, params)
    return excinfo.value


def test_unique_violation_is_classified(connection):
    bridge = SQLiteBridge()
    error = _raise(connection, "INSERT INTO t (id, name) VALUES (2, 'alice')")
    assert bridge.classify_insert_failure(error) is FailureKind.DUPLICATE_KEY
    assert bridge.classify_update_failure(error) is FailureKind.AMBIGUOUS_CREDENTIALS


def test_primary_key_violation_is_classified(connection):
    error = _raise(connection, "INSERT INTO t (id, name) VALUES (1, 'bob')")
    assert SQLiteBridge().classify_insert_failure(error) is FailureKind.DUPLICATE_KEY


def test_other_errors_pass_through(connection):
    bridge = SQLiteBridge()
    not_null = _raise(connection, "INSERT INTO t (id, name) VALUES (3, NULL)")
    missing = _raise(connection, "SELECT * FROM missing")
    for error in (not_null, missing, ValueError("boom")):
        assert bridge.classify_insert_failure(error) is FailureKind.UNCLASSIFIED
        assert bridge.classify_update_failure(error) is FailureKind.UNCLASSIFIED


def test_time_round_trip(connection):
    bridge = SQLiteBridge()
    value = datetime(2024, 3, 1, 12, 30, 45, 123456, tzinfo=timezone(timedelta(hours=2)))
    connection.execute("UPDATE t SET at = ? WHERE id = 1", (bridge.marshal_time(value),))
    (stored,) = connection.execute("SELECT at FROM t WHERE id = 1").fetchone()
    assert isinstance(stored, bridge.time_scan_type())
    resolved = bridge.resolve_scanned_time(stored)
    assert resolved == value
    assert resolved.tzinfo is timezone.utc


def test_naive_times_are_rejected():
    bridge = SQLiteBridge()
    with pytest.raises(TimeMismatchError):
        bridge.marshal_time(datetime(2024, 1, 2, 3, 4, 5, 6))


def test_stored_text_is_read_as_utc():
    bridge = SQLiteBridge()
    assert bridge.marshal_time(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)) == "2024-01-02 03:04:05.000000"
    assert bridge.resolve_scanned_time("2024-01-02 03:04:05") == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert bridge.resolve_scanned_time(b"2024-01-02T03:04:05Z") == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_marshalled_times_compare_chronologically():
    bridge = SQLiteBridge()
    new_york = datetime(2024, 1, 1, 23, 0, tzinfo=timezone(timedelta(hours=-5)))
    london = datetime(2024, 1, 2, 1, 0, tzinfo=timezone.utc)
    assert new_york > london
    assert bridge.marshal_time(new_york) > bridge.marshal_time(london)


def test_resolve_rejects_non_time_values():
    bridge = SQLiteBridge()
    with pytest.raises(TimeMismatchError):
        bridge.resolve_scanned_time(12)
    with pytest.raises(TimeMismatchError):
        bridge.resolve_scanned_time("not a time")
