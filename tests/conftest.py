"""Shared test fixtures for the City Recipes service tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx
import pytest
from loguru import logger

from city_recipes.clients.city_api import CityApiClient
from city_recipes.core.config import Settings
from city_recipes.core.config.settings import (
    AppSettings,
    CityApiSettings,
    LoggingSettings,
    MetricsSettings,
    ObservabilitySettings,
)
from city_recipes.services.recipes import RecipeStore
from tests.fixtures.city_api import FakeCityDirectory


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator


# YAML overrides from config/environments/test apply to Settings() calls
os.environ.setdefault("APP_ENV", "test")

UPSTREAM_URL = "http://city-api.test"


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at the fake upstream, with metrics off."""
    return Settings(
        APP_ENV="test",
        app=AppSettings(name="test-app", version="0.0.1-test"),
        logging=LoggingSettings(level="DEBUG", format="json"),
        observability=ObservabilitySettings(metrics=MetricsSettings(enabled=False)),
        city_api=CityApiSettings(url=UPSTREAM_URL, timeout=2.0),
    )


@pytest.fixture
def store() -> RecipeStore:
    """Fresh, empty recipe store."""
    return RecipeStore()


@pytest.fixture
def directory() -> FakeCityDirectory:
    """Fake upstream directory knowing paris and lyon."""
    return FakeCityDirectory()


@pytest.fixture
async def city_client(
    test_settings: Settings,
    directory: FakeCityDirectory,
) -> AsyncGenerator[CityApiClient]:
    """City API client wired to the fake directory."""
    http = httpx.AsyncClient(transport=directory.transport())
    client = CityApiClient(test_settings, http_client=http)
    await client.initialize()
    try:
        yield client
    finally:
        await client.shutdown()
        await http.aclose()


@pytest.fixture(autouse=True)
def reset_loguru() -> Generator[None]:
    """Drop sinks added by tests that configure logging."""
    yield
    logger.remove()
