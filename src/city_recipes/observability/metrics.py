"""Prometheus metrics for the HTTP API.

Request count, latency, request and response sizes are recorded per route
template under the ``city_recipes_http`` prefix, plus a counter of recipes
accepted through ``POST /cities/{cityId}/recipes``. Probe, docs and metrics
routes are not recorded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import REGISTRY, CollectorRegistry, Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from city_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import FastAPI

    from city_recipes.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "city_recipes"
METRIC_SUBSYSTEM = "http"

_UNRECORDED_ROUTES = (
    "/health",
    "/ready",
    "/metrics",
    "/openapi.json",
    "/docs",
    "/redoc",
)


def recipes_created(
    route: str,
    registry: CollectorRegistry,
) -> Callable[[metrics.Info], None]:
    """Count 201 responses from the recipe creation route."""
    counter = Counter(
        "recipes_created_total",
        "Recipes accepted into the store.",
        namespace=METRIC_NAMESPACE,
        registry=registry,
    )

    def instrumentation(info: metrics.Info) -> None:
        if (
            info.modified_handler == route
            and info.method == "POST"
            and info.response is not None
            and info.response.status_code == 201
        ):
            counter.inc()

    return instrumentation


def setup_metrics(
    app: FastAPI,
    settings: Settings,
    registry: CollectorRegistry = REGISTRY,
) -> Instrumentator | None:
    """Instrument ``app`` and serve the metrics at ``{prefix}/metrics``.

    Args:
        app: Application to instrument.
        settings: Provides the route prefix and the on/off switch.
        registry: Where collectors are registered. Tests pass a fresh one
            since a registry rejects duplicate metric names. The in-progress
            gauge is skipped for any other registry; the instrumentator
            always creates it in the global one.

    Returns:
        The instrumentator, or None when metrics are switched off.
    """
    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return None

    prefix = settings.api.v1_prefix
    labels = {
        "metric_namespace": METRIC_NAMESPACE,
        "metric_subsystem": METRIC_SUBSYSTEM,
        "registry": registry,
    }
    sized = {
        "should_include_handler": True,
        "should_include_method": True,
        "should_include_status": True,
    }

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=registry is REGISTRY,
        excluded_handlers=[f"{prefix}{route}" for route in _UNRECORDED_ROUTES],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
        registry=registry,
    )
    for instrumentation in (
        metrics.default(**labels),
        metrics.request_size(**sized, **labels),
        metrics.response_size(**sized, **labels),
        recipes_created(f"{prefix}/cities/{{cityId}}/recipes", registry),
    ):
        instrumentator.add(instrumentation)

    endpoint = f"{prefix}/metrics"
    instrumentator.instrument(app).expose(
        app,
        endpoint=endpoint,
        include_in_schema=True,
        tags=["Monitoring"],
    )

    logger.info("Prometheus metrics configured", endpoint=endpoint)
    return instrumentator


__all__ = ["recipes_created", "setup_metrics"]
