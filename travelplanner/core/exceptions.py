"""
Custom Exceptions for the Travel Planner Application

This module defines custom exception classes used throughout the application
for better error handling and debugging.
"""

from typing import Any, Dict, List, Optional
from enum import Enum

from travelplanner.core.constants import TRIP_NOT_FOUND_MESSAGE


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Authentication
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    INVALID_TRIP_DATA = "INVALID_TRIP_DATA"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    FOREIGN_KEY_VIOLATION = "FOREIGN_KEY_VIOLATION"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class InternalServerError(BaseAppException):
    """Exception surfaced to clients for any unexpected failure"""

    def __init__(self, message: str = "An internal error occurred"):
        super().__init__(message, ErrorCode.INTERNAL_ERROR, None, 500)


class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)


class InvalidDateRangeError(BaseAppException):
    """Exception raised when a start/end pair is not a valid range"""

    def __init__(
        self,
        message: str = "Invalid date range",
        start_date: Optional[Any] = None,
        end_date: Optional[Any] = None,
    ):
        details = {}
        if start_date is not None:
            details["start_date"] = str(start_date)
        if end_date is not None:
            details["end_date"] = str(end_date)
        super().__init__(message, ErrorCode.INVALID_DATE_RANGE, details, 400)


class InvalidTripDataError(BaseAppException, ValueError):
    """Exception raised by pure calculators when a trip graph is malformed"""

    def __init__(self, message: str, trip_id: Optional[str] = None):
        details = {"trip_id": trip_id} if trip_id else {}
        super().__init__(message, ErrorCode.INVALID_TRIP_DATA, details, 422)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {"resource_type": resource_type}
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


class TripNotFoundError(ResourceNotFoundError):
    """
    Raised when a trip is missing or not visible to the requester.

    Both cases share one message so private trips are never disclosed.
    """

    def __init__(self):
        super().__init__(resource_type="Trip", message=TRIP_NOT_FOUND_MESSAGE)


# ========================================
# Authentication Exceptions
# ========================================

class AuthenticationError(BaseAppException):
    """Exception raised when the requester identity cannot be established"""

    def __init__(
        self,
        message: str = "User not authenticated",
        error_code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED
    ):
        super().__init__(message, error_code, None, 401)


class TokenExpiredError(AuthenticationError):
    """Exception raised when the bearer token has expired"""

    def __init__(self, message: str = "Access token has expired"):
        super().__init__(message, ErrorCode.TOKEN_EXPIRED)


class InvalidTokenError(AuthenticationError):
    """Exception raised when the bearer token cannot be verified"""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, ErrorCode.TOKEN_INVALID)


# ========================================
# Database Exceptions
# ========================================

class DatabaseError(BaseAppException):
    """Exception raised for database operation failures"""

    def __init__(
        self,
        message: str = "Database operation failed",
        table: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        status_code: int = 500
    ):
        details = {"table": table} if table else {}
        super().__init__(message, error_code, details, status_code)


class RepositoryError(DatabaseError):
    """Exception raised by repositories wrapping lower-layer failures"""


class DuplicateEntryError(DatabaseError):
    """Exception raised when a unique constraint is violated"""

    def __init__(self, message: str = "Duplicate entry", table: Optional[str] = None):
        super().__init__(message, table=table, error_code=ErrorCode.DUPLICATE_ENTRY, status_code=409)


class ForeignKeyViolationError(DatabaseError):
    """Exception raised when a referenced row does not exist"""

    def __init__(self, message: str = "Referenced record does not exist", table: Optional[str] = None):
        super().__init__(message, table=table, error_code=ErrorCode.FOREIGN_KEY_VIOLATION, status_code=409)


# ========================================
# Utility Functions
# ========================================

def handle_database_exception(exc: Exception, table: Optional[str] = None) -> DatabaseError:
    """Convert database exceptions to application exceptions"""
    error_message = str(exc).lower()

    if "duplicate" in error_message or "unique constraint" in error_message:
        return DuplicateEntryError("Duplicate entry", table=table)
    elif "foreign key" in error_message:
        return ForeignKeyViolationError(table=table)
    return RepositoryError("Database operation failed", table=table)


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'InternalServerError',
    'ValidationError',
    'InvalidDateRangeError',
    'InvalidTripDataError',
    'ResourceNotFoundError',
    'TripNotFoundError',
    'AuthenticationError',
    'TokenExpiredError',
    'InvalidTokenError',
    'DatabaseError',
    'RepositoryError',
    'DuplicateEntryError',
    'ForeignKeyViolationError',
    'handle_database_exception',
]
