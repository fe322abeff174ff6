"""Integration test fixtures.

The application runs in-process behind httpx's ASGI transport, with the
city API client pointed at the fake upstream directory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from city_recipes.factory import create_app


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from city_recipes.clients.city_api import CityApiClient
    from city_recipes.core.config import Settings


@pytest.fixture
def app(test_settings: Settings, city_client: CityApiClient) -> FastAPI:
    """Application wired to the fake upstream directory."""
    app = create_app(test_settings)
    app.state.city_client = city_client
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client talking to the application in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
