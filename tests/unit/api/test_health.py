"""Unit tests for health check endpoints."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from city_recipes.api.v1.endpoints.health import health_check, readiness_check
from city_recipes.core.config import Settings


pytestmark = pytest.mark.unit


def _request(city_client: object | None) -> MagicMock:
    request = MagicMock()
    request.app.state.city_client = city_client
    return request


class TestHealthCheck:
    """Tests for health_check()."""

    async def test_healthy(self, test_settings: Settings):
        """Should always report healthy with version and environment."""
        response = await health_check(test_settings)

        assert response.status == "healthy"
        assert response.version == "0.0.1-test"
        assert response.environment == "test"
        assert response.timestamp.tzinfo is not None


class TestReadinessCheck:
    """Tests for readiness_check()."""

    async def test_ready_with_client(self, test_settings: Settings):
        """Should be ready once the city client exists."""
        response = await readiness_check(_request(MagicMock()), test_settings)

        assert response.status == "ready"
        assert response.dependencies == {"city_api": "initialized"}

    async def test_degraded_without_client(self, test_settings: Settings):
        """Should report degraded without a city client."""
        response = await readiness_check(_request(None), test_settings)

        assert response.status == "degraded"
        assert response.dependencies == {"city_api": "not_initialized"}
