"""
Application factory for FastAPI.

This module provides a factory function for creating FastAPI application instances.
The factory pattern allows for:
- Easy testing with custom settings
- Multiple app instances with different configurations
- Clear separation of app creation from route definitions

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings
    test_settings = Settings(environment="test", _env_file=None)
    test_app = create_app(settings=test_settings)
"""

import logging
import os
from typing import Optional

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from application.exceptions import (
    ImportFailedError,
    ParseError,
    StorageError,
    UnsupportedFormatError,
    WorkoutAlreadyCompletedError,
    WorkoutNotFoundError,
)
from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Initialize Sentry for error tracking
    _init_sentry(settings)

    # Create FastAPI app
    app = FastAPI(
        title="LiftLog API",
        description="Workout logging, import, personal records and progression API",
        version="1.0.0",
    )

    # Configure CORS middleware
    _configure_cors(app)

    # Map application errors to HTTP responses
    _register_exception_handlers(app)

    # Include API routers
    _include_routers(app)

    logger.info(f"LiftLog API created (environment={settings.environment}, data_dir={settings.data_dir})")
    return app


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
        )
        logger.info("Sentry initialized for liftlog-api")


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = [
        "http://localhost:3000",
        "http://localhost:8081",
    ]
    extra_origins = os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",")
    trusted_origins.extend([origin.strip() for origin in extra_origins if origin.strip()])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _import_error_body(exc: ImportFailedError) -> dict:
    body = {"detail": exc.message, "retryable": exc.retryable}
    if isinstance(exc, ParseError) and exc.errors:
        body["errors"] = exc.errors
    return body


def _register_exception_handlers(app: FastAPI) -> None:
    """Translate application exceptions raised by routers into HTTP errors."""

    @app.exception_handler(UnsupportedFormatError)
    async def unsupported_format_handler(request: Request, exc: UnsupportedFormatError):
        return JSONResponse(status_code=415, content=_import_error_body(exc))

    @app.exception_handler(ParseError)
    async def parse_error_handler(request: Request, exc: ParseError):
        return JSONResponse(status_code=422, content=_import_error_body(exc))

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage error on {request.url.path}: {exc.message}")
        return JSONResponse(status_code=503, content={"detail": "Storage is unavailable"})

    @app.exception_handler(WorkoutNotFoundError)
    async def workout_not_found_handler(request: Request, exc: WorkoutNotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(WorkoutAlreadyCompletedError)
    async def workout_completed_handler(request: Request, exc: WorkoutAlreadyCompletedError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        health_router,
        imports_router,
        workouts_router,
        exercises_router,
        personal_records_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    # Domain routers (with prefixes defined in each router)
    app.include_router(imports_router)
    app.include_router(workouts_router)
    app.include_router(exercises_router)
    app.include_router(personal_records_router)


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
