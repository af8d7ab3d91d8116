"""
Exception handlers rendering every failure as
``{"error": {"code", "message", "details", "type"}}``.
"""

from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from travelplanner.core.exceptions import BaseAppException, ErrorCode
from travelplanner.core.logging import get_logger

logger = get_logger(__name__)


def _error_response(request: Request, status_code: int, body: Dict[str, Any]) -> JSONResponse:
    content: Dict[str, Any] = {"error": body}
    correlation_id = getattr(request.state, "correlation_id", None)
    if correlation_id:
        content["correlation_id"] = correlation_id
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


async def handle_application_exception(request: Request, exc: BaseAppException) -> JSONResponse:
    """Handle custom application exceptions"""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"Application exception: {exc.error_code.value} - {exc.message}",
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return _error_response(request, exc.status_code, exc.to_dict()["error"])


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI request validation errors"""
    field_errors: Dict[str, list] = {}
    for error in exc.errors():
        field_path = ".".join(str(part) for part in error["loc"])
        field_errors.setdefault(field_path, []).append(error["msg"])

    logger.warning(
        f"Validation error: {len(field_errors)} field(s) failed validation",
        extra={"path": request.url.path, "method": request.method},
    )
    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        {
            "code": ErrorCode.VALIDATION_ERROR.value,
            "message": "Request validation failed",
            "details": {"field_errors": field_errors},
            "type": "RequestValidationError",
        },
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking internals"""
    logger.critical(
        f"Unexpected exception: {type(exc).__name__}",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {
            "code": ErrorCode.INTERNAL_ERROR.value,
            "message": "An internal error occurred",
            "details": {},
            "type": "InternalServerError",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, handle_application_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_exception)


__all__ = [
    "register_exception_handlers",
    "handle_application_exception",
    "handle_request_validation_error",
    "handle_unexpected_exception",
]
