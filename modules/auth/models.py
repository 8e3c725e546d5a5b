"""
Authentication module data models.

Row models mirror the snake_case columns of the users, otps and
password_resets tables. Request and response models expose the camelCase
field names the client already speaks.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# -----------------------------------------------------------------------------
# Stored records
# -----------------------------------------------------------------------------


class User(BaseModel):
    """A user row. ``user_password`` always holds a bcrypt hash."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="User ID (UUID)")
    first_name: str
    last_name: str
    user_bio: str = ""
    user_email: str
    user_name: str
    user_password: str = Field(..., description="bcrypt hash of the password")
    profile_image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OTPRecord(BaseModel):
    """A pending email verification code. One per email."""

    model_config = ConfigDict(extra="ignore")

    id: str
    user_email: str
    otp: str
    created_at: datetime


class PasswordResetRecord(BaseModel):
    """A single-use password reset capability."""

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    token: str
    created_at: datetime


class TokenPayload(BaseModel):
    """Claims carried by an issued access token."""

    sub: str = Field(..., description="Subject (user ID)")
    email: str = Field(..., description="User's email")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class SignupRequest(BaseModel):
    """Profile fields submitted alongside the profile image."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    user_bio: str = Field("", alias="userBio")
    user_email: str = Field(..., alias="userEmail")
    user_name: str = Field(..., alias="userName")
    user_password: str = Field(..., alias="userPassword")


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_email: str = Field(..., alias="userEmail")
    user_password: str = Field(..., alias="userPassword")


class ForgotPasswordRequest(BaseModel):
    email: str = ""


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_password: str = Field(..., alias="newPassword")


class SendOTPRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_email: str = Field(..., alias="userEmail")


class VerifyOTPRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_email: str = Field(..., alias="userEmail")
    otp: str


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class UserPublic(BaseModel):
    """
    User profile as returned to clients.

    Built from a ``User`` row; the password hash is never included.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    user_bio: str = Field("", alias="userBio")
    user_email: str = Field(..., alias="userEmail")
    user_name: str = Field(..., alias="userName")
    profile_image: Optional[str] = Field(None, alias="profileImage")
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls.model_validate(user.model_dump(exclude={"user_password", "updated_at"}))


class AuthResponse(BaseModel):
    """Returned by signup and login."""

    status: str = "Ok"
    user: UserPublic
    token: str


class StatusMessageResponse(BaseModel):
    status: str = "Ok"
    message: str


class MessageResponse(BaseModel):
    message: str
