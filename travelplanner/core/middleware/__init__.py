"""HTTP middleware and exception handlers."""

from fastapi import FastAPI

from travelplanner.config import settings
from travelplanner.core.middleware.error_handling import register_exception_handlers
from travelplanner.core.middleware.request_logging import RequestLoggingMiddleware


def register_middlewares(app: FastAPI) -> None:
    """Register shared core middlewares and exception handlers."""
    if settings.api.ENABLE_REQUEST_LOGGING:
        app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)


__all__ = [
    "register_middlewares",
    "register_exception_handlers",
    "RequestLoggingMiddleware",
]
