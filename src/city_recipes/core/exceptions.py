"""HTTP error model and exception handlers.

Every error leaves the service as::

    {"error": "NOT_FOUND", "message": "...", "details": null, "requestId": "..."}

Endpoints raise ``AppError`` subclasses; framework errors (unknown routes,
request validation, unexpected exceptions) are converted to the same shape.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from city_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = get_logger(__name__)


class ErrorDetail(BaseModel):
    """One problem with the request, e.g. a single invalid field."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class AppError(Exception):
    """Error with a known HTTP status, raised from endpoints and dependencies.

    Subclasses fix ``status_code`` and ``error``; the message is per raise.
    """

    status_code: ClassVar[int] = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        details: list[ErrorDetail] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "BAD_REQUEST"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "NOT_FOUND"

    @classmethod
    def for_resource(cls, resource: str, identifier: Any) -> NotFoundError:
        return cls(f"{resource} with identifier '{identifier}' not found")


class BadGatewayError(AppError):
    """The city directory or weather API failed us."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error = "UPSTREAM_ERROR"

    def __init__(self, message: str, error: str | None = None) -> None:
        super().__init__(message)
        if error is not None:
            self.error = error


class ServiceUnavailableError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error = "SERVICE_UNAVAILABLE"

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(message)


def _get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> ORJSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        details=details,
        request_id=_get_request_id(request),
    )
    return ORJSONResponse(body.model_dump(mode="json"), status_code=status_code)


async def _handle_app_error(request: Request, exc: AppError) -> ORJSONResponse:
    return _error_response(
        request, exc.status_code, exc.error, exc.message, exc.details
    )


async def _handle_http_error(
    request: Request,
    exc: StarletteHTTPException,
) -> ORJSONResponse:
    return _error_response(request, exc.status_code, "HTTP_ERROR", str(exc.detail))


async def _handle_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> ORJSONResponse:
    details = [
        ErrorDetail(
            code="VALIDATION_ERROR",
            message=problem["msg"],
            field=".".join(map(str, problem["loc"])),
        )
        for problem in exc.errors()
    ]
    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        details,
    )


async def _handle_unexpected_error(request: Request, exc: Exception) -> ORJSONResponse:
    logger.opt(exception=exc).error(
        "Unhandled exception", method=request.method, path=request.url.path
    )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Render every error raised while serving ``app`` as an ErrorResponse."""
    app.add_exception_handler(AppError, _handle_app_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)
