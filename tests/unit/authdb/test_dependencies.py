import asyncio

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from src.authdb.async_store import AsyncStorage
from src.authdb.dependencies import StorageDep, get_storage, initialise_storage, reset_storage, set_storage
from src.authdb.models import UserModel
from src.authdb.settings import StorageSettings
from src.authdb.sqlite.storage import SQLiteStorage


@pytest.fixture
def client(tmp_path):
    store = AsyncStorage(SQLiteStorage(str(tmp_path / "auth_api.db")))
    asyncio.run(store.init())
    asyncio.run(store.insert_user(UserModel(username="dave", password="hash", email="dave@example.com")))
    set_storage(store)

    app = FastAPI()

    @app.get("/users/{username}")
    async def read_user(username: str, storage: StorageDep) -> dict:
        user = await storage.get_user_by_name(username)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")
        return {"id": user.id, "email": user.email}

    with TestClient(app) as test_client:
        yield test_client

    reset_storage()


def test_dependency_provides_storage(client: TestClient):
    response = client.get("/users/dave")
    assert response.status_code == 200
    assert response.json()["email"] == "dave@example.com"

    response = client.get("/users/erin")
    assert response.status_code == 404


def test_initialise_storage_from_env(tmp_path, monkeypatch):
    reset_storage()
    monkeypatch.setenv("AUTHDB_PATH", str(tmp_path / "env.db"))
    monkeypatch.setenv("AUTHDB_USERS_TABLE", "accounts")
    try:
        store = initialise_storage()
        assert store.storage.db_path == str(tmp_path / "env.db")
        assert store.storage.queries.get_user() == "SELECT * FROM accounts WHERE id=?;"
        assert get_storage() is store
    finally:
        reset_storage()


def test_initialise_storage_with_explicit_settings(tmp_path):
    reset_storage()
    settings = StorageSettings(db_path=str(tmp_path / "explicit.db"), sessions_table_name="logins")
    try:
        store = initialise_storage(settings)
        assert store.storage.queries.get_session() == "SELECT * FROM logins WHERE session_key=?;"
        assert initialise_storage(StorageSettings(db_path=str(tmp_path / "other.db"))) is store
    finally:
        reset_storage()
