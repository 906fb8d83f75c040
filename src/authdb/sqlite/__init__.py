"""SQLite backend: statement catalog, queries, bridge and storage."""

from .bridge import SQLiteBridge
from .queries import DEFAULT_SQLITE_USER_ROW_NAMES, SQLiteQueries
from .storage import SQLiteStorage

__all__ = ["DEFAULT_SQLITE_USER_ROW_NAMES", "SQLiteBridge", "SQLiteQueries", "SQLiteStorage"]
