"""Access logging for the recipe and city endpoints.

Each request produces a "Request started" and a "Request completed" line.
The method, path and caller address are bound to the logging context first,
so that store and upstream client logs emitted in between carry them too.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from city_recipes.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from collections.abc import Collection

    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

# Health probes and metrics scrapes
DEFAULT_EXCLUDE_PATHS = frozenset({"/health", "/ready", "/metrics", "/favicon.ico"})


def client_address(request: Request) -> str:
    """Best guess at the caller's address behind the hosting proxy."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",", 1)[0].strip()

    return (
        request.headers.get("x-real-ip")
        or (request.client.host if request.client else None)
        or "unknown"
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log the start and outcome of every request outside ``exclude_paths``."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_paths: Collection[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = frozenset(
            DEFAULT_EXCLUDE_PATHS if exclude_paths is None else exclude_paths
        )

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        bind_context(
            method=request.method,
            path=request.url.path,
            client_ip=client_address(request),
        )
        logger.info(
            "Request started",
            query_params=str(request.query_params) if request.query_params else None,
        )

        response = await call_next(request)

        log = logger.warning if response.status_code >= 500 else logger.info
        log("Request completed", status_code=response.status_code)
        return response
