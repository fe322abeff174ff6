"""Custom middleware components."""

from city_recipes.core.middleware.logging import LoggingMiddleware
from city_recipes.core.middleware.request_id import RequestIDMiddleware
from city_recipes.core.middleware.timing import TimingMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "TimingMiddleware",
]
