"""Service layer foundation: base service and result types."""

from travelplanner.services.base.base_service import BaseService, Clock
from travelplanner.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)

__all__ = [
    "BaseService",
    "Clock",
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
