"""Upstream city API payloads."""

from __future__ import annotations

from pydantic import Field

from city_recipes.schemas.base import DownstreamResponse


class Coordinates(DownstreamResponse):
    """Geographic position of a city."""

    lat: float
    lon: float


class City(DownstreamResponse):
    """City record from the upstream directory."""

    coordinates: Coordinates
    population: int
    known_for: list[str] = Field(default_factory=list)


class WeatherReading(DownstreamResponse):
    """Temperature range for one forecast day."""

    min: float
    max: float
