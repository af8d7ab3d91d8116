# --- File: travelplanner/schemas/common/response.py ---
"""
Standard API response wrappers.
"""

from typing import Any, Dict, Generic, TypeVar, Union

from pydantic import Field

from travelplanner.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "SuccessResponse",
    "MessageResponse",
    "ErrorBody",
    "ErrorResponse",
]


class SuccessResponse(BaseSchema, Generic[T]):
    """Standard success envelope: ``{"success": true, "data": ...}``."""

    success: bool = Field(default=True, description="Success flag")
    message: Union[str, None] = Field(default=None, description="Response message")
    data: Union[T, None] = Field(default=None, description="Response data")

    @classmethod
    def create(
        cls,
        data: Union[T, None] = None,
        message: Union[str, None] = None,
    ):
        """Create success response."""
        return cls(success=True, message=message, data=data)


class MessageResponse(BaseSchema):
    """Success envelope carrying only a message."""

    success: bool = Field(default=True, description="Success flag")
    message: str = Field(..., description="Response message")

    @classmethod
    def create(cls, message: str):
        """Create message response."""
        return cls(message=message)


class ErrorBody(BaseSchema):
    """Error information rendered for every failure."""

    code: str = Field(..., description="Application error code")
    message: str = Field(..., description="Error message")
    details: Dict[str, Any] = Field(default_factory=dict, description="Error context")
    type: str = Field(..., description="Exception category")


class ErrorResponse(BaseSchema):
    """Standard error envelope: ``{"error": {...}}``."""

    error: ErrorBody
