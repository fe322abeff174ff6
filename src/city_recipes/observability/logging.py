"""Loguru setup for the City Recipes service.

Two output styles:

- ``json``: one orjson-encoded object per line on stdout, for the hosting
  platform's log collector. Request context (``request_id``, ``method``,
  ``path``, ``client_ip``) and any keyword arguments given to the log call
  become top-level keys.
- ``text``: colorized single lines for a terminal, with the request context
  appended after the source location.

Standard library loggers (uvicorn, httpx) are routed through Loguru so
every line shares one format.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING

import orjson
from loguru import logger


if TYPE_CHECKING:
    from typing import Any


_request_context: ContextVar[dict[str, Any]] = ContextVar(
    "request_context", default={}
)

# Libraries that log every connection or request at INFO
QUIET_LOGGERS = (
    "asyncio",
    "httpcore",
    "httpx",
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
)

_TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
    "{context} - <level>{message}</level>\n"
)


class InterceptHandler(logging.Handler):
    """Forward standard library log records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so Loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _json_format(record: dict[str, Any]) -> str:
    extra = record["extra"]
    extra.update(_request_context.get())

    entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
    }
    entry.update((k, v) for k, v in extra.items() if k != "_json")

    if record["exception"]:
        exc_type, exc_value, _ = record["exception"]
        entry["exception"] = {
            "type": exc_type.__name__ if exc_type else None,
            "value": str(exc_value) if exc_value else None,
        }

    # The returned string is a format template; the JSON goes through a field
    extra["_json"] = orjson.dumps(entry, default=str).decode()
    return "{extra[_json]}\n"


def _text_format(record: dict[str, Any]) -> str:
    context = " ".join(f"{k}={v}" for k, v in _request_context.get().items())
    if context:
        context = " | " + context.replace("{", "{{").replace("}", "}}")

    fmt = _TEXT_FORMAT.replace("{context}", context)
    if record["exception"]:
        fmt += "{exception}\n"
    return fmt


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    is_development: bool = False,
    log_file: Path | str | None = None,
) -> None:
    """Replace all Loguru sinks according to the logging settings.

    Args:
        log_level: Minimum level name, case-insensitive.
        log_format: ``"json"`` or ``"text"``.
        is_development: Force text output regardless of ``log_format``.
        log_file: Also write JSON lines to this file, rotated at 100 MB and
            kept for a week.
    """
    level = log_level.upper()
    as_json = log_format == "json" and not is_development

    logger.remove()
    logger.add(
        sys.stdout,
        format=_json_format if as_json else _text_format,
        level=level,
        colorize=not as_json,
        backtrace=True,
        diagnose=not as_json,
    )

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            path,
            format=_json_format,
            level=level,
            rotation="100 MB",
            retention="7 days",
            compression="gz",
            backtrace=True,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return the shared Loguru logger tagged with ``name``."""
    return logger.bind(name=name)


def bind_context(**values: Any) -> None:
    """Add values to every record logged from the current request."""
    _request_context.set({**_request_context.get(), **values})


def unbind_context(*keys: str) -> None:
    """Drop the given keys from the request context."""
    current = _request_context.get()
    _request_context.set({k: v for k, v in current.items() if k not in keys})


def clear_context() -> None:
    """Reset the request context."""
    _request_context.set({})


def get_context() -> dict[str, Any]:
    """Return a copy of the request context."""
    return dict(_request_context.get())


__all__ = [
    "InterceptHandler",
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "setup_logging",
    "unbind_context",
]
