"""
Custom exception handlers for FastAPI.

Security:
- Request IDs are logged server-side for tracing but NOT exposed to clients
- Generic error messages for 500 errors to prevent information disclosure
"""

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from core.errors import FormValidationError, NotAuthenticatedError, ProfileServiceError
from core.logging import get_logger

logger = get_logger("backend.errors")


def _get_request_id() -> str:
    """Current request ID from the logging context (server-side use only)."""
    return structlog.contextvars.get_contextvars().get("request_id", "-")


def _response_payload(detail: str, status_code: int) -> dict:
    return {
        "detail": detail,
        "status_code": status_code,
    }


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ProfileServiceError)
    async def profile_service_error_handler(request: Request, exc: ProfileServiceError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "profile_service_error",
            error_type=type(exc).__name__,
            detail=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
            request_id=_get_request_id(),
        )
        content = _response_payload(exc.message, exc.status_code)
        if isinstance(exc, FormValidationError):
            content["field"] = exc.field
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, NotAuthenticatedError) else None
        return JSONResponse(status_code=exc.status_code, content=content, headers=headers)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(str(exc.detail), exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
            for error in exc.errors()
        ]
        logger.warning("request_validation_error", errors=errors, request_id=_get_request_id())
        return JSONResponse(
            status_code=422,
            content={
                **_response_payload("Validation error", 422),
                "errors": errors,
            },
        )

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError):
        logger.warning(
            "validation_error",
            errors=exc.errors(),
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=422,
            content=_response_payload("Validation error", 422),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=500,
            content=_response_payload("Internal server error", 500),
        )
