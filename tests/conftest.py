"""Shared fixtures: an app wired to a throwaway SQLite database."""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from config.settings import Settings
from database.session import create_schema
from main import create_app

TEST_SECRET = "test-signing-secret-0123456789abcdef"


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "jwt_secret": TEST_SECRET,
        "database_url": f"sqlite+aiosqlite:///{tmp_path / 'todos.db'}",
        "env": "dev",
        "bcrypt_rounds": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest_asyncio.fixture
async def app(settings):
    application = create_app(settings)
    await create_schema(application.state.engine)
    yield application
    await application.state.engine.dispose()


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.fixture
def register(client):
    """Register a user and return ``(user_id, token)``."""

    async def _register(name: str, email: str, password: str = "secret123"):
        resp = await client.post(
            "/register", json={"name": name, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return body["user_id"], body["token"]

    return _register
