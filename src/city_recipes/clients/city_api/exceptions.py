"""City API client exceptions.

These exceptions are caught by the endpoint layer and converted to
appropriate HTTP responses.
"""

from __future__ import annotations


class CityApiError(Exception):
    """Base exception for city API client errors."""


class CityApiUnavailableError(CityApiError):
    """Raised when the city API cannot be reached."""


class CityApiTimeoutError(CityApiUnavailableError):
    """Raised when a request to the city API times out."""


class CityApiResponseError(CityApiError):
    """Raised when the city API returns an unexpected error response."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)


class WeatherUnavailableError(CityApiError):
    """Raised when a forecast cannot be fetched for a known city."""

    def __init__(self, city_id: str, when: str, reason: str) -> None:
        self.city_id = city_id
        self.when = when
        super().__init__(f"Weather for '{city_id}' ({when}) unavailable: {reason}")
