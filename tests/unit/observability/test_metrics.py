"""Unit tests for Prometheus metrics setup."""

from __future__ import annotations

import pytest
from fastapi import FastAPI, status
from prometheus_client import CollectorRegistry
from starlette.testclient import TestClient

from city_recipes.core.config import Settings
from city_recipes.core.config.settings import (
    ApiSettings,
    MetricsSettings,
    ObservabilitySettings,
)
from city_recipes.observability.metrics import setup_metrics


pytestmark = pytest.mark.unit


def _with_metrics(settings: Settings, *, prefix: str = "") -> Settings:
    return settings.model_copy(
        update={
            "api": ApiSettings(v1_prefix=prefix),
            "observability": ObservabilitySettings(metrics=MetricsSettings(enabled=True)),
        }
    )


def _paths(app: FastAPI) -> set[str]:
    return set(app.openapi()["paths"])


def _recipes_app() -> FastAPI:
    app = FastAPI()

    @app.get("/cities/{cityId}/recipes")
    async def list_recipes(cityId: str):  # noqa: N803
        return []

    @app.post("/cities/{cityId}/recipes", status_code=status.HTTP_201_CREATED)
    async def create_recipe(cityId: str):  # noqa: N803
        return {"id": 1}

    return app


class TestSetupMetrics:
    """Tests for setup_metrics."""

    def test_disabled(self, test_settings: Settings):
        """Should do nothing when metrics are disabled."""
        app = FastAPI()

        assert setup_metrics(app, test_settings, registry=CollectorRegistry()) is None
        assert "/metrics" not in _paths(app)

    def test_exposes_endpoint(self, test_settings: Settings):
        """Should serve request metrics in Prometheus format."""
        app = _recipes_app()

        instrumentator = setup_metrics(
            app, _with_metrics(test_settings), registry=CollectorRegistry()
        )

        with TestClient(app) as client:
            client.get("/cities/paris/recipes")
            response = client.get("/metrics")

        assert instrumentator is not None
        assert response.status_code == 200
        assert "city_recipes_http_" in response.text
        assert "http_requests_total" in response.text
        assert 'handler="/cities/{cityId}/recipes"' in response.text

    def test_counts_created_recipes(self, test_settings: Settings):
        """Should count successful recipe creations only."""
        app = _recipes_app()
        setup_metrics(app, _with_metrics(test_settings), registry=CollectorRegistry())

        with TestClient(app) as client:
            client.post("/cities/paris/recipes")
            client.post("/cities/lyon/recipes")
            client.get("/cities/paris/recipes")
            response = client.get("/metrics")

        assert "city_recipes_recipes_created_total 2.0" in response.text

    def test_prefixed_endpoint(self, test_settings: Settings):
        """Should expose metrics under the API prefix."""
        app = FastAPI()

        setup_metrics(
            app,
            _with_metrics(test_settings, prefix="/api"),
            registry=CollectorRegistry(),
        )

        assert "/api/metrics" in _paths(app)

    def test_apps_with_separate_registries(self, test_settings: Settings):
        """Should serve several instrumented apps in one process."""
        settings = _with_metrics(test_settings)
        registries = [CollectorRegistry(), CollectorRegistry()]
        responses = []

        for registry in registries:
            app = _recipes_app()
            setup_metrics(app, settings, registry=registry)
            with TestClient(app) as client:
                client.post("/cities/paris/recipes")
                responses.append(client.get("/metrics"))

        assert [r.status_code for r in responses] == [200, 200]
        for response in responses:
            assert "city_recipes_recipes_created_total 1.0" in response.text
            assert "http_requests_inprogress" not in response.text
