from datetime import datetime, timedelta, timezone

import pytest

from src.authdb.async_store import AsyncStorage
from src.authdb.errors import UserExistsError
from src.authdb.models import SessionEntry, UserModel
from src.authdb.sqlite.storage import SQLiteStorage


@pytest.mark.asyncio
async def test_user_lifecycle(tmp_path):
    store = AsyncStorage(SQLiteStorage(str(tmp_path / "auth_async.db")))
    await store.init()

    user = UserModel(username="carol", password="hash", email="carol@example.com")
    user_id = await store.insert_user(user)
    assert (await store.get_user_by_name("carol")).id == user_id

    with pytest.raises(UserExistsError):
        await store.insert_user(UserModel(username="carol", password="hash", email="c2@example.com"))

    user.first_name = "Carol"
    await store.update_user(user, ["FirstName"])
    stored = await store.get_user_by_email("carol@example.com")
    assert stored.first_name == "Carol"

    await store.delete_user(user_id)
    assert await store.get_user(user_id) is None


@pytest.mark.asyncio
async def test_session_lifecycle(tmp_path):
    store = AsyncStorage(SQLiteStorage(str(tmp_path / "auth_async.db")))
    await store.init()

    now = datetime.now(timezone.utc)
    entry = SessionEntry(key="k1", user_id=7, expire_date=now + timedelta(minutes=5))
    stale = SessionEntry(key="k2", user_id=7, expire_date=now - timedelta(minutes=5))
    await store.insert_session(entry)
    await store.insert_session(stale)

    assert await store.clean_up() == 1
    assert await store.get_session("k1") == entry
    await store.delete_session("k1")
    assert await store.get_session("k1") is None
    assert await store.delete_for_user(7) == 0
