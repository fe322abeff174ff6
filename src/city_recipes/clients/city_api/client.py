"""City directory and weather API HTTP client.

This module provides an async HTTP client for the upstream service that
knows which cities exist and forecasts their weather.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
import orjson
from pydantic import ValidationError

from city_recipes.clients.city_api.exceptions import (
    CityApiResponseError,
    CityApiTimeoutError,
    CityApiUnavailableError,
    WeatherUnavailableError,
)
from city_recipes.clients.city_api.models import City, WeatherReading
from city_recipes.observability.logging import get_logger
from city_recipes.schemas.city import ForecastDay, WeatherPrediction


if TYPE_CHECKING:
    from city_recipes.core.config import Settings


logger = get_logger(__name__)


class CityApiClient:
    """HTTP client for the upstream city directory and weather API.

    Example:
        ```python
        client = CityApiClient(settings)
        await client.initialize()

        city = await client.get_city("paris")
        forecast = await client.get_forecast("paris")

        await client.shutdown()
        ```
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Application settings holding the upstream URL and timeout.
            http_client: Optional preconfigured HTTP client. Injected clients
                are not closed on shutdown.
        """
        self._settings = settings
        self._http = http_client
        self._owns_http_client = http_client is None

    @property
    def cities_url(self) -> str:
        return self._settings.cities_url

    @property
    def weather_url(self) -> str:
        return self._settings.weather_url

    async def initialize(self) -> None:
        """Create the HTTP client if one was not injected."""
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.city_api.timeout),
                headers={"Accept": "application/json"},
            )
        logger.info("CityApiClient initialized", base_url=self._settings.city_api.url)

    async def shutdown(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_http_client and self._http is not None:
            await self._http.aclose()
            self._http = None
        logger.debug("CityApiClient shutdown")

    async def get_city(self, city_id: str) -> City | None:
        """Fetch a city from the directory.

        Args:
            city_id: City identifier.

        Returns:
            The city, or None if the directory does not know it.

        Raises:
            CityApiUnavailableError: If the API cannot be reached.
            CityApiTimeoutError: If the request times out.
            CityApiResponseError: For non-404 error responses or bad payloads.
        """
        url = f"{self.cities_url}/{quote(city_id, safe='')}"
        response = await self._get(url)

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.debug("City not found upstream", city_id=city_id)
            return None

        if response.is_error:
            logger.warning(
                "City API returned error",
                city_id=city_id,
                status_code=response.status_code,
            )
            msg = f"City API returned HTTP {response.status_code}"
            raise CityApiResponseError(response.status_code, msg)

        try:
            return City.model_validate(orjson.loads(response.content))
        except (orjson.JSONDecodeError, ValidationError) as e:
            msg = f"Invalid city payload for '{city_id}': {e}"
            raise CityApiResponseError(response.status_code, msg) from e

    async def get_weather(self, city_id: str, when: ForecastDay) -> WeatherPrediction:
        """Fetch the forecast for one day.

        Raises:
            WeatherUnavailableError: On any transport, HTTP or payload failure.
        """
        try:
            response = await self._get(
                self.weather_url,
                params={"cityId": city_id, "when": when.value},
            )
            response.raise_for_status()
            reading = WeatherReading.model_validate(orjson.loads(response.content))
        except (
            CityApiUnavailableError,
            httpx.HTTPStatusError,
            orjson.JSONDecodeError,
            ValidationError,
        ) as e:
            logger.warning(
                "Weather lookup failed",
                city_id=city_id,
                when=when.value,
                error=str(e),
            )
            raise WeatherUnavailableError(city_id, when.value, str(e)) from e

        return WeatherPrediction(when=when, min=reading.min, max=reading.max)

    async def get_forecast(self, city_id: str) -> list[WeatherPrediction]:
        """Fetch today's and tomorrow's forecasts concurrently.

        Returns:
            Two predictions, today first.
        """
        today, tomorrow = await asyncio.gather(
            self.get_weather(city_id, ForecastDay.TODAY),
            self.get_weather(city_id, ForecastDay.TOMORROW),
        )
        return [today, tomorrow]

    async def _get(
        self,
        url: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        if self._http is None:
            msg = "Client not initialized. Call initialize() first."
            raise RuntimeError(msg)

        try:
            return await self._http.get(url, params=params)
        except httpx.TimeoutException as e:
            logger.warning("Request to city API timed out", url=url)
            raise CityApiTimeoutError(str(e)) from e
        except httpx.RequestError as e:
            logger.warning("Failed to connect to city API", url=url, error=str(e))
            msg = f"Failed to connect to city API: {e}"
            raise CityApiUnavailableError(msg) from e
