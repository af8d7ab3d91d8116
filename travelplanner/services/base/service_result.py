"""
Service result patterns for standardized response handling.
"""

from typing import TypeVar, Generic, Optional, Any, Dict
from dataclasses import dataclass
from enum import Enum
from datetime import datetime, timezone


class ErrorCode(str, Enum):
    """Standard error codes for service operations."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    NOT_FOUND = "NOT_FOUND"

    # Business logic errors
    CONFLICT = "CONFLICT"

    # Security errors
    UNAUTHORIZED = "UNAUTHORIZED"

    # Data errors
    DATABASE_ERROR = "DATABASE_ERROR"


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ServiceError:
    """Represents a service operation error with context."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Optional[Dict[str, Any]] = None
    field: Optional[str] = None
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        """Set timestamp if not provided."""
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "code": self.code.value,
            "message": self.message,
            "severity": self.severity.value,
            "details": self.details,
            "field": self.field,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Standardized service operation result with success/failure pattern.

    Attributes:
        is_success: Operation success indicator
        data: Result data (if successful)
        error: Error information (if failed)
        message: Human-readable status message
        metadata: Additional context information
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success(
        cls,
        data: Optional[TData] = None,
        message: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a successful result."""
        return cls(
            is_success=True,
            data=data,
            message=message,
            metadata=metadata or {},
        )

    @classmethod
    def failure(
        cls,
        error: ServiceError,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a failed result."""
        return cls(
            is_success=False,
            error=error,
            message=error.message,
            metadata=metadata or {},
        )

    def __bool__(self) -> bool:
        """Allow boolean evaluation of the result."""
        return self.is_success

    def __repr__(self) -> str:
        status = "Success" if self.is_success else "Failure"
        if self.message:
            return f"ServiceResult({status}: {self.message})"
        return f"ServiceResult({status})"


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
