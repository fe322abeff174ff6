"""City information endpoint.

Provides:
- GET /cities/{cityId}/infos merging directory data, the two-day forecast
  and the city's recipes
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from city_recipes.api.dependencies import (
    CityIdPath,
    get_city_client,
    get_existing_city,
    get_recipe_store,
)
from city_recipes.clients.city_api import City, CityApiClient, WeatherUnavailableError
from city_recipes.core.exceptions import BadGatewayError, ErrorResponse
from city_recipes.observability.logging import get_logger
from city_recipes.schemas.city import CityInfoResponse
from city_recipes.schemas.recipe import RecipeResponse
from city_recipes.services.recipes import RecipeStore


logger = get_logger(__name__)

router = APIRouter(tags=["Cities"])


@router.get(
    "/cities/{cityId}/infos",
    response_model=CityInfoResponse,
    summary="Get city information",
    description=(
        "Information for a specific city, including its weather forecast "
        "for today and tomorrow and the recipes submitted for it."
    ),
    responses={
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "City not found",
        },
        status.HTTP_502_BAD_GATEWAY: {
            "model": ErrorResponse,
            "description": "City directory or weather API failed",
        },
    },
)
async def get_city_infos(
    city_id: CityIdPath,
    city: Annotated[City, Depends(get_existing_city)],
    client: Annotated[CityApiClient, Depends(get_city_client)],
    store: Annotated[RecipeStore, Depends(get_recipe_store)],
) -> CityInfoResponse:
    """Return a city's details, forecast and recipes."""
    try:
        forecast = await client.get_forecast(city_id)
    except WeatherUnavailableError as e:
        logger.warning("Forecast unavailable", city_id=city_id, error=str(e))
        msg = "Failed to fetch weather data"
        raise BadGatewayError(msg, error="WEATHER_UNAVAILABLE") from e

    return CityInfoResponse(
        coordinates=(city.coordinates.lat, city.coordinates.lon),
        population=city.population,
        known_for=city.known_for,
        weather_predictions=forecast,
        recipes=[RecipeResponse.from_recipe(r) for r in store.list(city_id)],
    )
