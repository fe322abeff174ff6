"""FastAPI dependencies for service access.

The recipe store is created with the application and the city API client
during startup; both live in app.state.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Path, Request

from city_recipes.clients.city_api import City, CityApiClient, CityApiError
from city_recipes.core.config import Settings
from city_recipes.core.exceptions import (
    BadGatewayError,
    NotFoundError,
    ServiceUnavailableError,
)
from city_recipes.observability.logging import get_logger
from city_recipes.services.recipes import RecipeStore


logger = get_logger(__name__)

CityIdPath = Annotated[str, Path(alias="cityId", description="ID of the city")]


async def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was built with."""
    settings: Settings = request.app.state.settings
    return settings


async def get_recipe_store(request: Request) -> RecipeStore:
    """Get the recipe store from app state."""
    store: RecipeStore = request.app.state.recipe_store
    return store


async def get_city_client(request: Request) -> CityApiClient:
    """Get the city API client from app state.

    Raises:
        ServiceUnavailableError: 503 if the client is not initialized.
    """
    client: CityApiClient | None = getattr(request.app.state, "city_client", None)
    if client is None:
        msg = "City directory not available"
        raise ServiceUnavailableError(msg)
    return client


async def fetch_city(client: CityApiClient, city_id: str) -> City:
    """Look a city up in the upstream directory.

    Raises:
        NotFoundError: 404 if the directory does not know the city.
        BadGatewayError: 502 if the directory fails.
    """
    try:
        city = await client.get_city(city_id)
    except CityApiError as e:
        logger.warning("City lookup failed", city_id=city_id, error=str(e))
        msg = "Failed to fetch city data"
        raise BadGatewayError(msg) from e

    if city is None:
        raise NotFoundError.for_resource("City", city_id)
    return city


async def get_existing_city(
    city_id: CityIdPath,
    client: Annotated[CityApiClient, Depends(get_city_client)],
) -> City:
    """Resolve the ``cityId`` path parameter to a known city."""
    return await fetch_city(client, city_id)
