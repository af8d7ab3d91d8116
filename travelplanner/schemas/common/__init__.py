"""Common schemas shared across resources."""

from travelplanner.schemas.common.base import BaseCreateSchema, BaseDBSchema, BaseSchema
from travelplanner.schemas.common.pagination import PaginationMeta, PaginationParams
from travelplanner.schemas.common.response import (
    ErrorBody,
    ErrorResponse,
    MessageResponse,
    SuccessResponse,
)

__all__ = [
    "BaseSchema",
    "BaseDBSchema",
    "BaseCreateSchema",
    "PaginationParams",
    "PaginationMeta",
    "SuccessResponse",
    "MessageResponse",
    "ErrorBody",
    "ErrorResponse",
]
