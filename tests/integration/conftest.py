"""Integration test fixtures.

Provides a fully wired AppState around a real httpx client (network mocked
with respx) and an ASGI client bound to the Starlette app. Settings-related
fixtures come from tests/conftest.py.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from jumpscared.server import create_app
from jumpscared.state import build_state

if TYPE_CHECKING:
    from jumpscared.config import Settings
    from jumpscared.state import AppState


@pytest.fixture()
async def app_state(settings: Settings) -> AppState:
    """AppState wired exactly as the lifespan does it."""
    async with httpx.AsyncClient(follow_redirects=False) as client:
        yield build_state(settings, client)


@pytest.fixture()
async def api_client(app_state: AppState) -> httpx.AsyncClient:
    """Client that talks to the Starlette app in-process."""
    app = create_app(state=app_state)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client
