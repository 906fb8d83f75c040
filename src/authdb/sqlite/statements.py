"""SQLite statement skeletons.

Positional parameters bind in user record order (username, password, email,
first_name, last_name, is_superuser, is_staff, is_active, date_joined,
last_login) with the id last for updates and deletes.
"""

SQLITE_USERS_INIT = """CREATE TABLE IF NOT EXISTS $USERS_TABLE_NAME$ (
id INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
username VARCHAR(150) NOT NULL UNIQUE,
password VARCHAR(270) NOT NULL,
email VARCHAR(254) NOT NULL $EMAIL_UNIQUE$,
first_name VARCHAR(50) NOT NULL,
last_name VARCHAR(150) NOT NULL,
is_superuser BOOL NOT NULL,
is_staff BOOL NOT NULL,
is_active BOOL NOT NULL,
date_joined DATETIME NOT NULL,
last_login DATETIME NOT NULL
);"""

SQLITE_USERNAME_INDEX = """CREATE UNIQUE INDEX IF NOT EXISTS
idx_$USERS_TABLE_NAME$_username ON $USERS_TABLE_NAME$(username);"""

SQLITE_USER_EMAIL_INDEX = """CREATE $EMAIL_UNIQUE$ INDEX IF NOT EXISTS
idx_$USERS_TABLE_NAME$_email ON $USERS_TABLE_NAME$(email);"""

SQLITE_QUERY_USERID = "SELECT * FROM $USERS_TABLE_NAME$ WHERE id=?;"

SQLITE_QUERY_USERNAME = "SELECT * FROM $USERS_TABLE_NAME$ WHERE username=?;"

SQLITE_QUERY_USERMAIL = "SELECT * FROM $USERS_TABLE_NAME$ WHERE email=?;"

SQLITE_INSERT_USER = """INSERT INTO $USERS_TABLE_NAME$(
username, password, email, first_name, last_name, is_superuser, is_staff,
is_active, date_joined, last_login)
VALUES(?, ?, ?, ?, ?, ?, ?, ?, ?, ?);"""

SQLITE_UPDATE_USER = """UPDATE $USERS_TABLE_NAME$
SET username=?, password=?, email=?, first_name=?, last_name=?,
    is_superuser=?, is_staff=?, is_active=?, date_joined=?, last_login=?
WHERE id=?;"""

SQLITE_DELETE_USER = "DELETE FROM $USERS_TABLE_NAME$ WHERE id=?;"

UPDATE_CONTENT_TOKEN = "$UPDATE_CONTENT$"

SQLITE_UPDATE_USER_FIELDS = "UPDATE $USERS_TABLE_NAME$ SET $UPDATE_CONTENT$ WHERE id = ?;"

SQLITE_SESSIONS_INIT = """CREATE TABLE IF NOT EXISTS $SESSIONS_TABLE_NAME$ (
session_key CHAR(64) NOT NULL PRIMARY KEY,
user_id INTEGER NOT NULL,
expire_date DATETIME NOT NULL
);"""

SQLITE_SESSION_USER_INDEX = """CREATE INDEX IF NOT EXISTS
idx_$SESSIONS_TABLE_NAME$_user_id ON $SESSIONS_TABLE_NAME$(user_id);"""

SQLITE_SESSION_EXPIRE_INDEX = """CREATE INDEX IF NOT EXISTS
idx_$SESSIONS_TABLE_NAME$_expire_date ON $SESSIONS_TABLE_NAME$(expire_date);"""

SQLITE_INSERT_SESSION = """INSERT INTO $SESSIONS_TABLE_NAME$(session_key, user_id, expire_date)
VALUES(?, ?, ?);"""

SQLITE_QUERY_SESSION = "SELECT * FROM $SESSIONS_TABLE_NAME$ WHERE session_key=?;"

SQLITE_DELETE_SESSION = "DELETE FROM $SESSIONS_TABLE_NAME$ WHERE session_key=?;"

SQLITE_CLEANUP_SESSIONS = "DELETE FROM $SESSIONS_TABLE_NAME$ WHERE expire_date < ?;"

SQLITE_DELETE_SESSIONS_FOR_USER = "DELETE FROM $SESSIONS_TABLE_NAME$ WHERE user_id=?;"
