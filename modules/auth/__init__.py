"""
Authentication module.

Handles signup, login, password reset and email verification.

Public API:
- IAuthService: Interface for account operations
- User, UserPublic: Stored and client-facing user models
- Auth exceptions: UserAlreadyExistsError, InvalidCredentialsError, etc.
"""

from .interfaces import IAuthService
from .models import User, UserPublic, TokenPayload, OTPRecord, PasswordResetRecord
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
    InvalidEmailDomainError,
    PasswordTooShortError,
    PasswordTooLongError,
    EmailRequiredError,
    ProfileImageRequiredError,
    InvalidResetTokenError,
    OTPNotFoundError,
    OTPExpiredError,
    InvalidOTPError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "User",
    "UserPublic",
    "TokenPayload",
    "OTPRecord",
    "PasswordResetRecord",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "InvalidEmailDomainError",
    "PasswordTooShortError",
    "PasswordTooLongError",
    "EmailRequiredError",
    "ProfileImageRequiredError",
    "InvalidResetTokenError",
    "OTPNotFoundError",
    "OTPExpiredError",
    "InvalidOTPError",
]
