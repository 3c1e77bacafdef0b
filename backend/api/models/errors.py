"""
Error response models.

Standardized error responses for the API.
"""

from pydantic import BaseModel
from typing import Optional


class FieldError(BaseModel):
    """A single request validation failure."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response format."""

    title: str
    message: str
    code: str
    errors: Optional[list[FieldError]] = None
