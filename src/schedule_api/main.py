"""FastAPI application entry point."""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from schedule_api.config import get_settings
from schedule_api.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from schedule_api.routers.schedules import router as schedules_router
from schedule_api.services.gtfs_static.store import ScheduleStore
from schedule_api.services.schedules.engine import ScheduleEngine

logger = get_logger(__name__)


def attach_store(app: FastAPI, store: ScheduleStore) -> None:
    """Publish a frozen store to request handlers."""
    app.state.store = store
    app.state.engine = ScheduleEngine(store)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Loads the GTFS store once before any request is served. A LoadError
    propagates and stops startup; no partial store is ever attached.
    """
    setup_logging()
    settings = get_settings()
    logger.info("Starting Route Schedule API", environment=settings.environment)

    if getattr(app.state, "store", None) is None:
        store = ScheduleStore.load(
            settings.trips_path,
            settings.stop_times_path,
            strict=settings.gtfs_load_strict,
        )
        attach_store(app, store)

    yield

    logger.info("Shutting down Route Schedule API")


def create_app(store: ScheduleStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Passing ``store`` skips loading from the configured GTFS files.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Route schedules served from an in-memory GTFS trips/stop_times index",
        lifespan=lifespan,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
    )
    app.state.store = None
    app.state.engine = None
    if store is not None:
        attach_store(app, store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.environment == "development" else [],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Request ID middleware
    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next: Any) -> Any:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        bind_request_context(request_id=request_id, path=request.url.path)

        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(schedules_router)

    @app.get("/health", tags=["meta"])
    async def health_check(request: Request) -> dict[str, Any]:
        """Health check endpoint returning store status."""
        settings = get_settings()
        store: ScheduleStore | None = request.app.state.store

        issues: list[str] = []
        store_check: dict[str, Any] = {"loaded": store is not None}
        if store is None:
            issues.append("Schedule store is not loaded")
        else:
            store_check.update(store.stats())
            report = store.report
            if report is not None:
                store_check["loadedAt"] = report.ended_at.isoformat() if report.ended_at else None
                store_check["durationMs"] = report.duration_ms
                store_check["skippedRows"] = report.skipped
                store_check["tables"] = report.counts
                if report.skipped:
                    issues.append(f"{report.skipped} malformed rows skipped during load")

        status = "unhealthy" if store is None else "degraded" if issues else "healthy"

        return {
            "service": settings.app_name,
            "status": status,
            "version": settings.app_version,
            "environment": settings.environment,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {"store": store_check},
            "issues": issues,
        }

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception", exc_info=exc, path=request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred",
            },
        )

    return app


app = create_app()
