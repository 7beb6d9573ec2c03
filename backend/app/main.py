"""
FastAPI application entry point.

Uses structured logging from core.logging module.
"""

from typing import Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from core.cache import cache
from core.db import db
from core.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .config import get_settings
from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .middleware.security import SecurityHeadersMiddleware
from .routers import auth as auth_router
from .routers import media as media_router
from .routers import profile as profile_router


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to limit request body size."""

    def __init__(self, app, max_size_mb: int = 10):
        super().__init__(app)
        self.max_size = max_size_mb * 1024 * 1024
        self.max_size_mb = max_size_mb

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_size:
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={
                    "detail": f"Maximum request size is {self.max_size_mb}MB",
                    "status_code": status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                },
            )
        return await call_next(request)


settings = get_settings()
configure_logging(level="DEBUG" if settings.debug else "INFO")
logger = get_logger("api")


def validate_config_on_startup() -> None:
    """
    Log configuration problems. Errors are fatal in production only.

    Raises:
        RuntimeError: If production configuration is incomplete
    """
    errors, warnings = settings.validate_production_config()
    for warning in warnings:
        logger.warning("config_warning", message=warning)

    if not errors:
        return
    for error in errors:
        logger.error("config_error", error=error)
    if settings.is_production:
        raise RuntimeError("Invalid production configuration: " + "; ".join(errors))


def create_app() -> FastAPI:
    api_prefix = f"{settings.api_prefix}/v1"

    app = FastAPI(title=settings.app_name, debug=settings.debug)

    app.add_middleware(RequestSizeLimitMiddleware, max_size_mb=settings.max_request_size_mb)
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Accept-Encoding",
            "Origin",
            "X-Requested-With",
            "X-Request-ID",
        ],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=500)

    # Added last so it runs first and the logging middleware sees its id
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        """Initialize services on startup."""
        logger.info("app_startup", app_name=settings.app_name, env=settings.env)

        validate_config_on_startup()

        db.initialize(settings.database_url)
        if settings.auto_create_tables:
            db.create_all_tables()
            logger.info("database_tables_created")

        health = db.health_check()
        if not health["healthy"]:
            logger.error("database_unreachable", error=health["error"])
            raise RuntimeError("Database unreachable. Check DATABASE_URL.")
        logger.info("database_initialized", latency_ms=health["latency_ms"])

        cache.initialize()
        if cache.is_available:
            logger.info("cache_initialized", redis_host=settings.redis_host)
        else:
            logger.warning("cache_unavailable", message="Login and view caching are disabled")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("app_shutdown")
        cache.reset()
        db.reset()

    @app.get("/health", tags=["health"])
    def health_check():
        """Liveness probe. Returns no infrastructure details."""
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness check endpoint.

        The database is required; Redis is reported but optional.
        Returns 200 if ready, 503 if not ready.
        """
        checks = {
            "database": db.health_check()["healthy"],
            "cache": cache.is_available,
        }

        if not checks["database"]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": checks},
            )
        return {"status": "ready", "checks": checks}

    # API is accessible at /api/v1/*
    app.include_router(auth_router.router, prefix=api_prefix)
    app.include_router(profile_router.router, prefix=api_prefix)
    app.include_router(media_router.router, prefix=api_prefix)

    return app


app = create_app()
