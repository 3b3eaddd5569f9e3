"""Shared fixtures for the chat API tests."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from portfolio_chat.chat import service
from portfolio_chat.config import Settings, get_settings
from portfolio_chat.main import app


@pytest.fixture
def settings():
    return Settings(_env_file=None, minimax_api_key="test-key")


@pytest.fixture
def override_settings(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    yield settings
    app.dependency_overrides.clear()


@pytest.fixture
def completion_calls(monkeypatch):
    """Replace the MiniMax call with a stub answering "Hi there!"; records each call."""
    calls = []

    async def fake_complete(message, api_key, **kwargs):
        calls.append((message, api_key))
        return "Hi there!"

    monkeypatch.setattr(service, "complete", fake_complete)
    return calls


@pytest_asyncio.fixture
async def client(override_settings):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
