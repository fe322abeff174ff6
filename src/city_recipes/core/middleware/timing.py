"""Response time header and slow request warnings."""

from __future__ import annotations

from time import perf_counter
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from city_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

# Seconds
SLOW_REQUEST_THRESHOLD = 1.0


def _elapsed_ms(started: float) -> float:
    return round((perf_counter() - started) * 1000, 2)


class TimingMiddleware(BaseHTTPMiddleware):
    """Report how long each request took in a response header.

    Requests slower than ``slow_threshold`` seconds are also logged as
    warnings, tagged with the matched route so that all ``/cities/{cityId}``
    lookups group together.
    """

    def __init__(
        self,
        app: ASGIApp,
        header_name: str = "X-Process-Time",
        slow_threshold: float = SLOW_REQUEST_THRESHOLD,
    ) -> None:
        super().__init__(app)
        self.header_name = header_name
        self.slow_threshold_ms = slow_threshold * 1000

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        started = perf_counter()
        response = await call_next(request)
        elapsed_ms = _elapsed_ms(started)

        response.headers[self.header_name] = f"{elapsed_ms}ms"

        if elapsed_ms > self.slow_threshold_ms:
            route = request.scope.get("route")
            logger.warning(
                "Slow request",
                method=request.method,
                path=request.url.path,
                route=getattr(route, "path", None),
                elapsed_ms=elapsed_ms,
                threshold_ms=self.slow_threshold_ms,
            )

        return response
