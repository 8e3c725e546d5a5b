"""
Error response models.

Standardized error responses for the API.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ValidationErrorResponse(ErrorResponse):
    """Validation error response format."""

    error: str = "VALIDATION_ERROR"
    message: str = "Request validation failed"
