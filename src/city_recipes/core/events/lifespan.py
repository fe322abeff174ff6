"""Startup and shutdown of the City Recipes service.

Startup applies the logging settings and opens the city API client. A
failing client does not stop the service: the recipe list and the probes
keep working, and city-dependent routes answer 503 until a restart.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from city_recipes.clients.city_api import CityApiClient
from city_recipes.core.config import Settings, get_settings
from city_recipes.observability.logging import get_logger, setup_logging


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _init_city_client(app: FastAPI, settings: Settings) -> None:
    """Open the city API client unless one is already on ``app.state``."""
    if getattr(app.state, "city_client", None) is not None:
        return

    client = CityApiClient(settings)
    try:
        await client.initialize()
    except Exception:
        logger.exception("City API client failed to start; city lookups disabled")
        app.state.city_client = None
    else:
        app.state.city_client = client


async def _startup(app: FastAPI, settings: Settings) -> None:
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        version=settings.app.version,
        environment=settings.APP_ENV,
        city_api=settings.city_api.url,
    )

    await _init_city_client(app, settings)

    logger.info("Application startup complete")


async def _shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")

    client: CityApiClient | None = getattr(app.state, "city_client", None)
    if client is not None:
        app.state.city_client = None
        await client.shutdown()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """FastAPI lifespan hook, using the settings ``create_app`` stored."""
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
