"""Upstream city directory and weather API client package."""

from city_recipes.clients.city_api.client import CityApiClient
from city_recipes.clients.city_api.exceptions import (
    CityApiError,
    CityApiResponseError,
    CityApiTimeoutError,
    CityApiUnavailableError,
    WeatherUnavailableError,
)
from city_recipes.clients.city_api.models import City, Coordinates, WeatherReading


__all__ = [
    "City",
    "CityApiClient",
    "CityApiError",
    "CityApiResponseError",
    "CityApiTimeoutError",
    "CityApiUnavailableError",
    "Coordinates",
    "WeatherReading",
    "WeatherUnavailableError",
]
