"""
core/logging.py
---------------
structlog setup for the tracker.

DEBUG=true  → coloured console lines
DEBUG=false → one JSON object per line
LOG_LEVEL   → overrides the level DEBUG implies (e.g. LOG_LEVEL=WARNING)

Every event logged while a request is served carries the request's method
and path, plus tenant_id / room_id when the URL names them:

    {"event": "Device created", "method": "POST",
     "path": "/tenants/<id>/devices", "tenant_id": "<id>", ...}

The log_request_context middleware binds these with structlog.contextvars;
merge_contextvars folds them into each event.
"""

import logging
import sys

import structlog
from fastapi import Request

from hotel_energy.core.config import settings


def _level() -> int:
    if settings.LOG_LEVEL:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if settings.DEBUG else logging.INFO


def configure_logging() -> None:
    log_level = _level()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    if not settings.DEBUG:
        # SQL echo and per-request access lines drown out service events
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.DEBUG
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__):
    return structlog.get_logger(name)


def request_log_context(method: str, path: str) -> dict[str, str]:
    context = {"method": method, "path": path}
    parts = [part for part in path.split("/") if part]
    if len(parts) >= 2 and parts[0] == "tenants":
        context["tenant_id"] = parts[1]
        if len(parts) >= 4 and parts[2] == "rooms":
            context["room_id"] = parts[3]
    return context


async def log_request_context(request: Request, call_next):
    """HTTP middleware: bind the request context for the handler's log events."""
    context = request_log_context(request.method, request.url.path)
    with structlog.contextvars.bound_contextvars(**context):
        return await call_next(request)
