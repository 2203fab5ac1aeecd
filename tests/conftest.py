"""
Shared fixtures: a throwaway SQLite database per test and an ASGI client
whose ``db_session`` dependency points at it.
"""

import json

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from auth.dependencies import db_session
from auth.jwt import create_token
from database.kv_store import KeyValueStore
from database.session import init_db
from main import create_app


@pytest.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}")
    await init_db(engine)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def client(session_factory):
    app = create_app()

    async def _session_override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[db_session] = _session_override
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers():
    def _headers(user_id: str) -> dict:
        return {"Authorization": f"Bearer {create_token(user_id)}"}

    return _headers


@pytest.fixture
def seed_auth_record(session_factory):
    """Store the auth service's id- and username-keyed copies of a user."""

    async def _seed(user_id: str, username: str, password_hash: str = "old-hash") -> dict:
        record = {"id": user_id, "username": username, "password": password_hash}
        data = json.dumps(record).encode()
        async with session_factory() as session:
            store = KeyValueStore(session, "/usersdata")
            await store.put(f"/users/id/{user_id}", data)
            await store.put(f"/users/{username}", data)
            await store.commit()
        return record

    return _seed


@pytest.fixture
def read_key(session_factory):
    async def _read(bucket: str, key: str) -> bytes:
        async with session_factory() as session:
            return await KeyValueStore(session, bucket).get(key)

    return _read
