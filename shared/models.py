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
    Represents the caller identified by a bearer token.

    Populated from the signed token claims and made available to route
    handlers via dependency injection.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(..., description="User's email address")
    issued_at: Optional[datetime] = Field(None, description="When the token was issued")
    expires_at: Optional[datetime] = Field(None, description="When the token expires")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
