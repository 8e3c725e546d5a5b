"""
Authentication module interface.

The API layer depends on IAuthService, not the concrete implementation.
This enables testing with mocks and swapping collaborators at startup.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    StatusMessageResponse,
    UserPublic,
)


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for account operations.

    Every method is a single linear unit of work. Failures are reported by
    raising subclasses of ``shared.exceptions.NotoriteError``.
    """

    async def signup(
        self,
        request: SignupRequest,
        image_path: Optional[str],
        image_name: Optional[str],
    ) -> AuthResponse:
        """
        Create an account with a profile image and sign the caller in.

        Args:
            request: Profile fields and plaintext password
            image_path: Local path of the uploaded profile image
            image_name: Original filename of the profile image

        Returns:
            The created user and a signed access token

        Raises:
            ValidationError: Bad email domain, short password or missing image
            UserAlreadyExistsError: If the email or user name is taken
        """
        ...

    async def login(self, request: LoginRequest) -> AuthResponse:
        """
        Check a password and issue an access token.

        Raises:
            UserNotFoundError: No account for the email
            InvalidCredentialsError: Password mismatch
        """
        ...

    async def forgot_password(self, email: str) -> StatusMessageResponse:
        """
        Email a single-use password reset link.

        Raises:
            EmailRequiredError: Blank email
            UserNotFoundError: No account for the email
        """
        ...

    async def reset_password(self, token: str, new_password: str) -> MessageResponse:
        """
        Consume a reset token and set a new password.

        Raises:
            InvalidResetTokenError: Unknown, used or expired token
            UserNotFoundError: Token owner no longer exists
        """
        ...

    async def send_otp(self, email: str) -> StatusMessageResponse:
        """Email a fresh verification code, replacing any pending one."""
        ...

    async def verify_otp(self, email: str, otp: str) -> StatusMessageResponse:
        """
        Check and consume a verification code.

        Raises:
            OTPNotFoundError: No pending code for the email
            OTPExpiredError: Pending code is too old
            InvalidOTPError: Code mismatch
        """
        ...

    async def authenticate(self, token: str) -> AuthenticatedUser:
        """Verify an access token issued by this service."""
        ...

    async def get_profile(self, user_id: str) -> UserPublic:
        """Load the public profile of an existing user."""
        ...
