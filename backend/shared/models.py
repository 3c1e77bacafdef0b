"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents the session identity attached to an authenticated request.

    This model is populated from the claims of a verified session token
    and made available to route handlers via dependency injection. It is
    never persisted; its lifetime is bounded by the token expiry.
    """

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    auth_provider: str = Field(..., description="local, google or github")
    expires_at: Optional[datetime] = Field(None, description="Session expiry")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from the token
    }
