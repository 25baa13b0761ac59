"""
Tests for the environment-gated database reset.
"""

import httpx
import pytest

from conftest import make_settings
from database.session import create_schema
from main import create_app


class TestReset:
    @pytest.mark.asyncio
    async def test_reset_wipes_everything_in_dev(self, client, register):
        _, token = await register("Ann", "ann@x.com")
        await client.post(
            "/todos",
            json={"title": "a", "description": "b"},
            headers={"Authorization": f"Bearer {token}"},
        )

        resp = await client.post("/admin/reset")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Database reset to initial state"}

        login = await client.post("/login", json={"email": "ann@x.com", "password": "secret123"})
        assert login.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize("env", ["production", "staging", "DEV"])
    async def test_reset_refused_outside_dev(self, tmp_path, env):
        app = create_app(make_settings(tmp_path, env=env))
        await create_schema(app.state.engine)
        transport = httpx.ASGITransport(app=app)
        try:
            async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
                resp = await c.post("/admin/reset")
        finally:
            await app.state.engine.dispose()
        assert resp.status_code == 403
        assert resp.json() == {"message": "Reset only allowed on dev"}
