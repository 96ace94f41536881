"""Pytest configuration for readme-render tests."""

import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from readme_render.settings import Settings


@pytest_asyncio.fixture
async def client():
    """HTTP client bound to the app with a small, fixed input limit."""
    from readme_render.main import app

    previous = getattr(app.state, "settings", None)
    app.state.settings = Settings(app_env="test", max_input_bytes=2048, log_level="INFO")
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.state.settings = previous
