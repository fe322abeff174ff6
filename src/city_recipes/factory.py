"""Assembly of the City Recipes FastAPI application.

``create_app`` wires together, in this order: the recipe store on
``app.state``, error handlers, middleware, routes and metrics. The city API
client is opened later by the lifespan hook.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from city_recipes.api.v1.router import router as v1_router
from city_recipes.core.config import Settings, get_settings
from city_recipes.core.events import lifespan
from city_recipes.core.exceptions import setup_exception_handlers
from city_recipes.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    TimingMiddleware,
)
from city_recipes.observability.metrics import setup_metrics
from city_recipes.services.recipes import RecipeStore


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build an application with its own, empty recipe store.

    Args:
        settings: Defaults to the cached ``get_settings()``.
    """
    if settings is None:
        settings = get_settings()

    prefix = settings.api.v1_prefix
    # API docs stay private in production unless the service is hosted
    docs_prefix = prefix if settings.docs_enabled else None

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description=settings.app.description,
        debug=settings.app.debug,
        lifespan=lifespan,
        docs_url=None if docs_prefix is None else f"{docs_prefix}/docs",
        redoc_url=None if docs_prefix is None else f"{docs_prefix}/redoc",
        openapi_url=None if docs_prefix is None else f"{docs_prefix}/openapi.json",
        servers=[{"url": settings.public_url}] if settings.RENDER_EXTERNAL_URL else None,
    )

    app.state.settings = settings
    app.state.recipe_store = RecipeStore(
        min_length=settings.recipes.content_min_length,
        max_length=settings.recipes.content_max_length,
    )
    app.state.city_client = None

    setup_exception_handlers(app)
    _add_middleware(app, settings)
    app.include_router(v1_router, prefix=prefix)
    setup_metrics(app, settings)

    return app


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    """Install middleware; the last one added sees the request first.

    Resulting order for an incoming request: request id, timing, access log,
    gzip, then CORS when origins are configured.
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.api.cors_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    prefix = settings.api.v1_prefix
    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
            "/favicon.ico",
        },
    )
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
