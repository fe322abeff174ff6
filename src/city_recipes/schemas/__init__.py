"""Pydantic schemas for request/response validation."""

from city_recipes.schemas.base import APIRequest, APIResponse, DownstreamResponse
from city_recipes.schemas.city import CityInfoResponse, ForecastDay, WeatherPrediction
from city_recipes.schemas.health import HealthResponse, ReadinessResponse
from city_recipes.schemas.recipe import CreateRecipeRequest, RecipeResponse
from city_recipes.schemas.root import RootResponse


__all__ = [
    "APIRequest",
    "APIResponse",
    "CityInfoResponse",
    "CreateRecipeRequest",
    "DownstreamResponse",
    "ForecastDay",
    "HealthResponse",
    "ReadinessResponse",
    "RecipeResponse",
    "RootResponse",
    "WeatherPrediction",
]
