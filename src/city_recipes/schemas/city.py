"""City information response schemas."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from city_recipes.schemas.base import APIResponse
from city_recipes.schemas.recipe import RecipeResponse


class ForecastDay(StrEnum):
    """Days covered by the weather forecast."""

    TODAY = "today"
    TOMORROW = "tomorrow"


class WeatherPrediction(APIResponse):
    """Forecast temperatures for one day."""

    when: ForecastDay = Field(..., description="Forecast day")
    min: float = Field(..., description="Minimum temperature")
    max: float = Field(..., description="Maximum temperature")


class CityInfoResponse(APIResponse):
    """City details merged with its forecast and recipes."""

    coordinates: tuple[float, float] = Field(
        ...,
        description="[latitude, longitude]",
        examples=[[48.8566, 2.3522]],
    )
    population: int = Field(..., description="Number of inhabitants")
    known_for: list[str] = Field(
        default_factory=list,
        description="Notable facts about the city",
    )
    weather_predictions: list[WeatherPrediction] = Field(
        ...,
        min_length=2,
        max_length=2,
        description="Forecast for today and tomorrow",
    )
    recipes: list[RecipeResponse] = Field(
        default_factory=list,
        description="Recipes submitted for the city, oldest first",
    )
