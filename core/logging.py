"""
Structured logging for Student Profiles.

Every log line is a structlog event: a snake_case event name plus key/value
fields (``profile_updated user_id=3 skill_count=4``). Request-scoped fields
such as ``request_id`` and ``user_id`` live in contextvars and are merged
into each event automatically.

Development renders readable console lines; any other environment renders
one JSON object per line.
"""

import logging
import sys
import time
import uuid
from collections.abc import Callable, Mapping, MutableMapping
from functools import lru_cache, wraps
from typing import Any, TypeVar

import structlog
from structlog.types import Processor

F = TypeVar("F", bound=Callable[..., Any])

SERVICE_NAME = "student_profiles"

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "urllib3", "cloudinary")


def _renders_for_humans() -> bool:
    from .config import get_settings

    settings = get_settings()
    return settings.debug or settings.env == "development"


def _add_service(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> Mapping[str, Any] | str | bytes | bytearray | tuple[Any, ...]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def get_processors() -> list[Processor]:
    """Processor chain; the final renderer depends on the environment."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        _add_service,
    ]

    if _renders_for_humans():
        processors.append(
            structlog.dev.ConsoleRenderer(colors=False, exception_formatter=structlog.dev.plain_traceback)
        )
    else:
        processors.extend([structlog.processors.format_exc_info, structlog.processors.JSONRenderer()])
    return processors


@lru_cache(maxsize=1)
def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging through stdout and install the structlog chain once."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=get_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = SERVICE_NAME) -> structlog.stdlib.BoundLogger:
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


# =============================================================================
# Request-scoped fields
# =============================================================================


def bind_context(**fields: Any) -> None:
    """Attach fields to every later event in the current request."""
    structlog.contextvars.bind_contextvars(**fields)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LogContext:
    """
    Bind fields for the duration of a block.

    On exit the previous values come back, so an outer binding of the same
    key survives a nested block:

        with LogContext(public_id="avatars/ada"):
            logger.info("image_deleted")   # carries public_id
        logger.info("request_complete")    # does not
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._tokens: Mapping[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self._tokens = structlog.contextvars.bind_contextvars(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        structlog.contextvars.reset_contextvars(**self._tokens)
        return False


def log_timing(
    operation: str, logger: structlog.stdlib.BoundLogger | None = None
) -> Callable[[F], F]:
    """
    Log how long a blocking call took, as ``operation_timed`` or
    ``operation_failed`` with ``duration_ms``. Exceptions propagate.

        @log_timing("media_store")
        def store(self, content: bytes) -> StoredMedia: ...
    """

    def decorator(func: F) -> F:
        timing_logger = logger or get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                timing_logger.warning(
                    "operation_failed",
                    operation=operation,
                    duration_ms=_elapsed_ms(started),
                    error_type=type(e).__name__,
                )
                raise
            timing_logger.info("operation_timed", operation=operation, duration_ms=_elapsed_ms(started))
            return result

        return wrapper  # type: ignore

    return decorator


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 1)


# =============================================================================
# ASGI
# =============================================================================


class RequestLoggingMiddleware:
    """
    One ``request_started`` and one ``request_complete`` event per HTTP
    request. Runs inside ``RequestIDMiddleware``; when used alone it binds a
    short request id itself. The request's context is cleared afterwards.
    """

    def __init__(self, app):
        self.app = app
        self.logger = get_logger("http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if "request_id" not in structlog.contextvars.get_contextvars():
            bind_context(request_id=uuid.uuid4().hex[:8])

        method = scope.get("method", "")
        path = scope.get("path", "")
        started = time.perf_counter()
        self.logger.info("request_started", method=method, path=path)

        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            if status_code >= 500:
                emit = self.logger.error
            elif status_code >= 400:
                emit = self.logger.warning
            else:
                emit = self.logger.info
            emit(
                "request_complete",
                method=method,
                path=path,
                status_code=status_code,
                duration_ms=_elapsed_ms(started),
            )
            clear_context()


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "LogContext",
    "log_timing",
    "RequestLoggingMiddleware",
]
