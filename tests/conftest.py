"""
Shared fixtures: an application bound to a throwaway SQLite database and an
httpx client talking to it in-process.
"""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from auth.password import hash_password
from config.settings import Settings
from database.helpers import create_user
from database.session import init_db
from main import create_app

TEST_SECRET = "test-secret"


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'users.db'}",
        secret_key=TEST_SECRET,
        bcrypt_rounds=4,
        create_tables=False,
    )


@pytest_asyncio.fixture()
async def app(settings):
    application = create_app(settings)
    await init_db(application.state.engine)
    yield application
    await application.state.engine.dispose()


@pytest_asyncio.fixture()
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture()
def seed_users(app):
    """Insert ``n`` users named seed_01.. directly through the store."""

    async def _seed(n: int) -> list[int]:
        password_hash = hash_password("seed", rounds=4)
        ids = []
        async with app.state.session_factory() as session:
            for i in range(1, n + 1):
                user = await create_user(
                    session,
                    username=f"seed_{i:02d}",
                    password_hash=password_hash,
                    name=f"Seed {i}",
                )
                ids.append(user.id)
            await session.commit()
        return ids

    return _seed


async def register(client: httpx.AsyncClient, username: str, password: str) -> httpx.Response:
    return await client.post("/register", data={"username": username, "password": password})


async def login(client: httpx.AsyncClient, username: str, password: str) -> httpx.Response:
    return await client.post("/login", data={"username": username, "password": password})
