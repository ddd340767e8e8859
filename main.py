"""
main.py
-------
FastAPI application factory and entry point.

Application lifecycle:
  1. App is created by create_application().
  2. lifespan context manager runs on startup / shutdown.
  3. Routers are registered with their URL prefixes.
  4. Exception handlers turn service failures and unparsable request bodies
     into 404/409/422 and normalise unexpected errors into 500.

Run with:
    uvicorn main:app --reload              # development
    uvicorn main:app --workers 4           # production (no --reload)
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hotel_energy.api.errors import (
    ServiceFailure,
    request_validation_handler,
    service_failure_handler,
)
from hotel_energy.api.invalidation import HEADER as INVALIDATION_HEADER
from hotel_energy.api.routes import devices, reports, rooms, tenants
from hotel_energy.core.config import settings
from hotel_energy.core.logging import (
    configure_logging,
    get_logger,
    log_request_context,
)
from hotel_energy.db.session import engine

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Startup / shutdown lifecycle hook.

    Startup:
      - Configure structured logging

    Shutdown:
      - Dispose the async engine (graceful connection pool drain)
    """
    configure_logging()
    logger.info(
        "Starting up",
        app=settings.APP_NAME,
        env=settings.APP_ENV,
        debug=settings.DEBUG,
    )
    yield
    logger.info("Shutting down — disposing DB engine")
    await engine.dispose()


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Multi-tenant hotel electrical-device tracking with per-room "
            "and per-hotel energy consumption analytics."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[INVALIDATION_HEADER],
    )

    # ── Request log context ──────────────────────────────────────────────────
    app.middleware("http")(log_request_context)

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(tenants.router)
    app.include_router(rooms.router)
    app.include_router(devices.router)
    app.include_router(reports.router)

    # ── Exception Handlers ────────────────────────────────────────────────────
    app.add_exception_handler(ServiceFailure, service_failure_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # ── Health Check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["Health"], summary="Service health check")
    async def health() -> dict:
        return {"status": "ok", "app": settings.APP_NAME, "env": settings.APP_ENV}

    return app


app = create_application()
