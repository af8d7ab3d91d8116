"""
Base service class providing common functionality for all services.
"""

from typing import TypeVar, Generic, Optional, Dict, Any, Callable
from abc import ABC
from contextlib import contextmanager
from datetime import date, datetime

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from travelplanner.core.exceptions import (
    BaseAppException,
    ErrorCode as AppErrorCode,
    handle_database_exception,
)
from travelplanner.core.logging import get_logger
from travelplanner.models.base.mixins import utc_now
from travelplanner.repositories.base.base_repository import BaseRepository
from travelplanner.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)


TModel = TypeVar("TModel")
TRepo = TypeVar("TRepo", bound=BaseRepository)

Clock = Callable[[], datetime]

# Application error categories as seen by service callers
_APP_ERROR_CODES: Dict[AppErrorCode, ErrorCode] = {
    AppErrorCode.RESOURCE_NOT_FOUND: ErrorCode.NOT_FOUND,
    AppErrorCode.VALIDATION_ERROR: ErrorCode.VALIDATION_ERROR,
    AppErrorCode.INVALID_REQUEST: ErrorCode.VALIDATION_ERROR,
    AppErrorCode.INVALID_TRIP_DATA: ErrorCode.VALIDATION_ERROR,
    AppErrorCode.INVALID_DATE_RANGE: ErrorCode.INVALID_DATE_RANGE,
    AppErrorCode.DUPLICATE_ENTRY: ErrorCode.CONFLICT,
    AppErrorCode.FOREIGN_KEY_VIOLATION: ErrorCode.CONFLICT,
    AppErrorCode.AUTHENTICATION_FAILED: ErrorCode.UNAUTHORIZED,
    AppErrorCode.TOKEN_EXPIRED: ErrorCode.UNAUTHORIZED,
    AppErrorCode.TOKEN_INVALID: ErrorCode.UNAUTHORIZED,
    AppErrorCode.DATABASE_ERROR: ErrorCode.DATABASE_ERROR,
    AppErrorCode.INTERNAL_ERROR: ErrorCode.INTERNAL_ERROR,
}


class BaseService(ABC, Generic[TModel, TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Consistent error handling via ServiceResult
    - Transaction management utilities
    - Injectable clock for date-relative queries
    """

    def __init__(self, repository: TRepo, db_session: Session, clock: Optional[Clock] = None):
        """
        Initialize base service.

        Args:
            repository: Primary repository for data access
            db_session: SQLAlchemy database session
            clock: Callable returning the current time (defaults to UTC now)
        """
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._clock: Clock = clock or utc_now
        self._logger = get_logger(f"{self.__module__}.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Clock
    # -------------------------------------------------------------------------

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return self._clock().date()

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        requester_id: Optional[str] = None,
        entity_ref: Optional[Any] = None,
    ) -> ServiceResult:
        """
        Convert exception to a ServiceResult failure with logging.

        Application errors keep their message and details. Database and
        unexpected errors are logged in full but reported with a generic
        message so storage details never reach callers.

        Args:
            exception: The caught exception
            operation: Description of the operation that failed
            requester_id: Authenticated requester, for the log record
            entity_ref: Reference to the entity involved (ID, name, etc.)

        Returns:
            ServiceResult with failure status and error details
        """
        if isinstance(exception, IntegrityError):
            exception = handle_database_exception(exception)

        context = {
            "operation": operation,
            "requester_id": requester_id,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }

        if isinstance(exception, BaseAppException) and exception.status_code < 500:
            self._logger.warning(f"{operation} rejected: {exception.message}", extra=context)
            return ServiceResult.failure(
                ServiceError(
                    code=_APP_ERROR_CODES.get(exception.error_code, ErrorCode.VALIDATION_ERROR),
                    message=exception.message,
                    severity=ErrorSeverity.WARNING,
                    details=exception.details or None,
                )
            )

        self._logger.error(f"Error during {operation}", exc_info=exception, extra=context)

        if isinstance(exception, (SQLAlchemyError, BaseAppException)):
            code = ErrorCode.DATABASE_ERROR if not isinstance(exception, BaseAppException) else \
                _APP_ERROR_CODES.get(exception.error_code, ErrorCode.INTERNAL_ERROR)
        else:
            code = ErrorCode.INTERNAL_ERROR

        return ServiceResult.failure(
            ServiceError(
                code=code,
                message=f"Failed to {operation}",
                severity=ErrorSeverity.CRITICAL,
            )
        )

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self, auto_commit: bool = True):
        """
        Context manager for database transactions with automatic rollback.

        Example:
            with self.transaction():
                self.repository.create(trip)
                # commit on success, rollback on exception
        """
        try:
            yield self.db
            if auto_commit:
                self._commit()
        except Exception:
            self._rollback()
            raise

    def _commit(self) -> None:
        """Commit the current transaction."""
        self.db.commit()
        self._logger.debug("Transaction committed")

    def _rollback(self) -> None:
        """Rollback the current transaction, logging rollback errors."""
        try:
            self.db.rollback()
            self._logger.debug("Transaction rolled back")
        except SQLAlchemyError as e:
            # Rollback errors must not mask the original error
            self._logger.warning(f"Rollback failed: {e}")

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _log_operation(
        self,
        operation: str,
        requester_id: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log service operation with standardized format."""
        context = {"operation": operation, "requester_id": requester_id}
        if extra:
            context.update(extra)

        self._logger.info(f"Operation: {operation}", extra=context)
