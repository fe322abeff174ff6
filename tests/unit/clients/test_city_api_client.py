"""Unit tests for the city API client.

Tests cover:
- Client lifecycle (initialize/shutdown)
- City lookups and error mapping
- Weather lookups and the two-day forecast
"""

from __future__ import annotations

import httpx
import pytest

from city_recipes.clients.city_api import (
    City,
    CityApiClient,
    CityApiResponseError,
    CityApiTimeoutError,
    CityApiUnavailableError,
    WeatherUnavailableError,
)
from city_recipes.core.config import Settings
from city_recipes.schemas.city import ForecastDay, WeatherPrediction
from tests.fixtures.city_api import FakeCityDirectory


pytestmark = pytest.mark.unit


def _client_with(handler, settings: Settings) -> CityApiClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CityApiClient(settings, http_client=http)


# =============================================================================
# Lifecycle
# =============================================================================


class TestLifecycle:
    """Tests for client initialization and shutdown."""

    async def test_initialize_creates_http_client(self, test_settings: Settings):
        """Should create its own HTTP client with the configured timeout."""
        client = CityApiClient(test_settings)

        await client.initialize()

        assert client._http is not None
        assert client._http.timeout.read == test_settings.city_api.timeout
        await client.shutdown()

    async def test_shutdown_closes_owned_client(self, test_settings: Settings):
        """Should close and drop the client it created."""
        client = CityApiClient(test_settings)
        await client.initialize()
        http = client._http

        await client.shutdown()

        assert client._http is None
        assert http is not None
        assert http.is_closed

    async def test_shutdown_keeps_injected_client_open(self, test_settings: Settings):
        """Should leave injected clients to their owner."""
        http = httpx.AsyncClient()
        client = CityApiClient(test_settings, http_client=http)
        await client.initialize()

        await client.shutdown()

        assert not http.is_closed
        await http.aclose()

    async def test_requires_initialize(self, test_settings: Settings):
        """Should refuse requests before initialize()."""
        client = CityApiClient(test_settings)

        with pytest.raises(RuntimeError, match="not initialized"):
            await client.get_city("paris")

    def test_urls_derive_from_settings(self, test_settings: Settings):
        """Should build endpoint URLs from the configured base URL."""
        client = CityApiClient(test_settings)

        assert client.cities_url == "http://city-api.test/cities"
        assert client.weather_url == "http://city-api.test/weather"


# =============================================================================
# get_city
# =============================================================================


class TestGetCity:
    """Tests for CityApiClient.get_city."""

    async def test_returns_city(self, city_client: CityApiClient):
        """Should parse the directory payload."""
        city = await city_client.get_city("paris")

        assert isinstance(city, City)
        assert city.coordinates.lat == 48.8566
        assert city.coordinates.lon == 2.3522
        assert city.population == 2148000
        assert city.known_for == ["Eiffel Tower", "Louvre"]

    async def test_unknown_city_returns_none(self, city_client: CityApiClient):
        """Should map 404 to None."""
        assert await city_client.get_city("atlantis") is None

    async def test_quotes_city_id(
        self,
        city_client: CityApiClient,
        directory: FakeCityDirectory,
    ):
        """Should percent-encode the id as one path segment."""
        await city_client.get_city("new york/east")

        assert directory.requests[-1].url.raw_path == b"/cities/new%20york%2Feast"

    async def test_upstream_error_raises(
        self,
        city_client: CityApiClient,
        directory: FakeCityDirectory,
    ):
        """Should raise CityApiResponseError for non-404 errors."""
        directory.city_status = 500

        with pytest.raises(CityApiResponseError) as exc_info:
            await city_client.get_city("paris")

        assert exc_info.value.status_code == 500

    async def test_invalid_payload_raises(self, test_settings: Settings):
        """Should reject payloads missing required fields."""
        client = _client_with(
            lambda _: httpx.Response(200, json={"name": "Paris"}),
            test_settings,
        )
        await client.initialize()

        with pytest.raises(CityApiResponseError, match="Invalid city payload"):
            await client.get_city("paris")

    async def test_non_json_payload_raises(self, test_settings: Settings):
        """Should reject bodies that are not JSON."""
        client = _client_with(
            lambda _: httpx.Response(200, content=b"<html></html>"),
            test_settings,
        )
        await client.initialize()

        with pytest.raises(CityApiResponseError):
            await client.get_city("paris")

    async def test_timeout_raises(self, test_settings: Settings):
        """Should map httpx timeouts to CityApiTimeoutError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = _client_with(handler, test_settings)
        await client.initialize()

        with pytest.raises(CityApiTimeoutError):
            await client.get_city("paris")

    async def test_connection_error_raises(self, test_settings: Settings):
        """Should map transport errors to CityApiUnavailableError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client_with(handler, test_settings)
        await client.initialize()

        with pytest.raises(CityApiUnavailableError, match="Failed to connect"):
            await client.get_city("paris")


# =============================================================================
# Weather
# =============================================================================


class TestGetWeather:
    """Tests for CityApiClient.get_weather."""

    async def test_returns_prediction(
        self,
        city_client: CityApiClient,
        directory: FakeCityDirectory,
    ):
        """Should tag the reading with the requested day."""
        prediction = await city_client.get_weather("paris", ForecastDay.TOMORROW)

        assert prediction == WeatherPrediction(
            when=ForecastDay.TOMORROW, min=10.5, max=18.0
        )
        params = directory.requests[-1].url.params
        assert params["cityId"] == "paris"
        assert params["when"] == "tomorrow"

    async def test_upstream_error_raises(
        self,
        city_client: CityApiClient,
        directory: FakeCityDirectory,
    ):
        """Should raise WeatherUnavailableError on HTTP errors."""
        directory.weather_status = 503

        with pytest.raises(WeatherUnavailableError) as exc_info:
            await city_client.get_weather("paris", ForecastDay.TODAY)

        assert exc_info.value.city_id == "paris"
        assert exc_info.value.when == "today"

    async def test_invalid_payload_raises(self, test_settings: Settings):
        """Should raise WeatherUnavailableError on unusable payloads."""
        client = _client_with(
            lambda _: httpx.Response(200, json={"min": "cold"}),
            test_settings,
        )
        await client.initialize()

        with pytest.raises(WeatherUnavailableError):
            await client.get_weather("paris", ForecastDay.TODAY)

    async def test_timeout_raises(self, test_settings: Settings):
        """Should raise WeatherUnavailableError on timeouts."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        client = _client_with(handler, test_settings)
        await client.initialize()

        with pytest.raises(WeatherUnavailableError):
            await client.get_weather("paris", ForecastDay.TODAY)


class TestGetForecast:
    """Tests for CityApiClient.get_forecast."""

    async def test_returns_today_then_tomorrow(
        self,
        city_client: CityApiClient,
        directory: FakeCityDirectory,
    ):
        """Should request both days and order them today first."""
        forecast = await city_client.get_forecast("paris")

        assert [p.when for p in forecast] == [ForecastDay.TODAY, ForecastDay.TOMORROW]
        assert (forecast[0].min, forecast[0].max) == (12.0, 21.5)
        assert directory.paths() == ["/weather", "/weather"]

    async def test_any_failure_fails_forecast(
        self,
        city_client: CityApiClient,
        directory: FakeCityDirectory,
    ):
        """Should fail the whole forecast when one day fails."""
        del directory.weather["tomorrow"]

        with pytest.raises(WeatherUnavailableError):
            await city_client.get_forecast("paris")
