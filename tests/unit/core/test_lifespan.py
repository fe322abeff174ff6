"""Unit tests for application lifespan handlers."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI

from city_recipes.core.config import Settings
from city_recipes.core.events import lifespan
from city_recipes.core.events.lifespan import _init_city_client, _shutdown


pytestmark = pytest.mark.unit


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    app = FastAPI()
    app.state.settings = test_settings
    app.state.city_client = None
    return app


class TestInitCityClient:
    """Tests for _init_city_client."""

    async def test_creates_and_initializes_client(
        self, app: FastAPI, test_settings: Settings
    ):
        """Should store an initialized client on app.state."""
        mock_client = MagicMock()
        mock_client.initialize = AsyncMock()

        with patch(
            "city_recipes.core.events.lifespan.CityApiClient",
            return_value=mock_client,
        ) as mock_cls:
            await _init_city_client(app, test_settings)

        mock_cls.assert_called_once_with(test_settings)
        mock_client.initialize.assert_awaited_once()
        assert app.state.city_client is mock_client

    async def test_keeps_preset_client(self, app: FastAPI, test_settings: Settings):
        """Should not replace a client already on app.state."""
        preset = MagicMock()
        app.state.city_client = preset

        with patch("city_recipes.core.events.lifespan.CityApiClient") as mock_cls:
            await _init_city_client(app, test_settings)

        mock_cls.assert_not_called()
        assert app.state.city_client is preset

    async def test_failure_leaves_client_unset(
        self, app: FastAPI, test_settings: Settings
    ):
        """Should degrade to no client when initialization fails."""
        mock_client = MagicMock()
        mock_client.initialize = AsyncMock(side_effect=RuntimeError("boom"))

        with patch(
            "city_recipes.core.events.lifespan.CityApiClient",
            return_value=mock_client,
        ):
            await _init_city_client(app, test_settings)

        assert app.state.city_client is None


class TestShutdown:
    """Tests for _shutdown."""

    async def test_closes_client(self, app: FastAPI):
        """Should shut the client down and clear it."""
        mock_client = MagicMock()
        mock_client.shutdown = AsyncMock()
        app.state.city_client = mock_client

        await _shutdown(app)

        mock_client.shutdown.assert_awaited_once()
        assert app.state.city_client is None

    async def test_without_client(self, app: FastAPI):
        """Should do nothing when no client exists."""
        await _shutdown(app)

        assert app.state.city_client is None


class TestLifespan:
    """Tests for the lifespan context manager."""

    async def test_startup_and_shutdown(self, app: FastAPI):
        """Should configure logging, open the client and close it on exit."""
        mock_client = MagicMock()
        mock_client.initialize = AsyncMock()
        mock_client.shutdown = AsyncMock()

        with (
            patch("city_recipes.core.events.lifespan.setup_logging") as mock_logging,
            patch(
                "city_recipes.core.events.lifespan.CityApiClient",
                return_value=mock_client,
            ),
        ):
            async with lifespan(app):
                assert app.state.city_client is mock_client

        mock_logging.assert_called_once_with(
            log_level="DEBUG",
            log_format="json",
            is_development=False,
            log_file=None,
        )
        mock_client.shutdown.assert_awaited_once()
        assert app.state.city_client is None
