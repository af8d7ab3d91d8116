"""
HTTP request/response logging middleware.
"""

import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from travelplanner.core.constants import HEADER_CORRELATION_ID, HEADER_PROCESS_TIME
from travelplanner.core.logging import get_logger, request_id

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Assigns a correlation id and logs method, path, status and duration"""

    def __init__(self, app):
        super().__init__(app)

        # Excluded paths from detailed logging
        self.excluded_paths = {
            "/health",
            "/docs",
            "/redoc",
            "/openapi.json",
        }

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(HEADER_CORRELATION_ID) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        token = request_id.set(correlation_id)

        try:
            start_time = time.perf_counter()
            response = await call_next(request)
            process_time = time.perf_counter() - start_time

            if request.url.path not in self.excluded_paths:
                self._log_response(request, response.status_code, process_time)

            response.headers[HEADER_CORRELATION_ID] = correlation_id
            response.headers[HEADER_PROCESS_TIME] = f"{process_time:.4f}"
            return response
        finally:
            request_id.reset(token)

    @staticmethod
    def _log_response(request: Request, status_code: int, process_time: float) -> None:
        response_data = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "process_time": round(process_time, 4),
        }

        # Determine log level based on status code
        if status_code >= 500:
            logger.error("HTTP Response", extra=response_data)
        elif status_code >= 400:
            logger.warning("HTTP Response", extra=response_data)
        else:
            logger.info("HTTP Response", extra=response_data)


__all__ = ["RequestLoggingMiddleware"]
