"""
Authentication module exceptions.

These exceptions are raised by the auth module and carry the HTTP status
the API error handler returns for them.
"""

from shared.exceptions import AuthenticationError, NotFoundError, ValidationError


class InvalidTokenError(AuthenticationError):
    """Raised when a signed access token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a signed access token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """Raised when a password does not match the stored hash."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class UserAlreadyExistsError(AuthenticationError):
    """
    Raised when signing up with an email or username that is taken.

    Reported as 401 to keep the public signup contract. ``field`` names the
    column that collided: ``email`` or ``user_name``.
    """

    LABELS = {"email": "email", "user_name": "username"}

    def __init__(self, value: str, field: str = "email"):
        super().__init__(
            f"User already exists with this {self.LABELS.get(field, field)}",
            code="USER_ALREADY_EXISTS",
            details={field: value},
        )
        self.field = field


class UserNotFoundError(NotFoundError):
    """Raised when the requested user doesn't exist in the database."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, code="USER_NOT_FOUND")


class InvalidEmailDomainError(ValidationError):
    """Raised when a signup email is outside the allowed domain."""

    def __init__(self, domain: str):
        super().__init__(
            f"Invalid email domain. Must be {domain}",
            code="INVALID_EMAIL_DOMAIN",
            details={"allowed_domain": domain},
        )


class PasswordTooShortError(ValidationError):
    """Raised when a password is below the minimum length."""

    def __init__(self, min_length: int):
        super().__init__(
            f"Password must be at least {min_length} characters long",
            code="PASSWORD_TOO_SHORT",
            details={"min_length": min_length},
        )


class EmailRequiredError(ValidationError):
    """Raised when an email field is blank."""

    def __init__(self):
        super().__init__("Email is required", code="EMAIL_REQUIRED")


class ProfileImageRequiredError(ValidationError):
    """Raised when signup is submitted without a profile image."""

    def __init__(self):
        super().__init__("Profile image is required", code="PROFILE_IMAGE_REQUIRED")


class InvalidResetTokenError(ValidationError):
    """Raised when a password reset token is unknown, used or expired."""

    def __init__(self):
        super().__init__("Token is invalid or has expired", code="INVALID_RESET_TOKEN")


class OTPNotFoundError(NotFoundError):
    """Raised when no OTP is pending for an email."""

    def __init__(self):
        super().__init__(
            "OTP not found. Please request a new OTP",
            code="OTP_NOT_FOUND",
        )


class OTPExpiredError(ValidationError):
    """Raised when a pending OTP is older than its lifetime."""

    def __init__(self):
        super().__init__(
            "OTP has expired. Please request a new OTP",
            code="OTP_EXPIRED",
        )


class InvalidOTPError(AuthenticationError):
    """Raised when a submitted OTP does not match the pending one."""

    def __init__(self):
        super().__init__("Invalid OTP", code="INVALID_OTP")


class PasswordTooLongError(ValidationError):
    """Raised when a password exceeds what bcrypt can hash."""

    def __init__(self, max_bytes: int):
        super().__init__(
            f"Password must be at most {max_bytes} bytes long",
            code="PASSWORD_TOO_LONG",
            details={"max_bytes": max_bytes},
        )
