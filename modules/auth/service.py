"""
Authentication service implementation.

Orchestrates signup, login, password reset and email verification over the
auth repositories, the profile image store and the mailer. Each operation is
a straight sequence of awaited calls; nothing is retried.
"""

import asyncio
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from shared.config import Settings
from shared.mail import Mailer
from shared.models import AuthenticatedUser
from shared.storage import ProfileImageStorage

from . import security, templates
from .exceptions import (
    EmailRequiredError,
    InvalidCredentialsError,
    InvalidEmailDomainError,
    InvalidOTPError,
    InvalidResetTokenError,
    OTPExpiredError,
    OTPNotFoundError,
    PasswordTooLongError,
    PasswordTooShortError,
    ProfileImageRequiredError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from .interfaces import IAuthService
from .models import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    StatusMessageResponse,
    User,
    UserPublic,
)
from .repository import OTPRepository, PasswordResetRepository, UserRepository

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Canonical form used to store and look up emails."""
    return email.strip().lower()


def is_expired(created_at: datetime, ttl_minutes: int, now: Optional[datetime] = None) -> bool:
    """Whether a record created at ``created_at`` is older than ``ttl_minutes``. A TTL of 0 never expires."""
    if ttl_minutes <= 0:
        return False
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return now - created_at > timedelta(minutes=ttl_minutes)


class AuthService(IAuthService):
    """
    Implementation of the account service.

    All collaborators are passed in by the service container; the service
    holds no module-level state.
    """

    def __init__(
        self,
        users: UserRepository,
        otps: OTPRepository,
        resets: PasswordResetRepository,
        storage: ProfileImageStorage,
        mailer: Mailer,
        settings: Settings,
    ):
        self._users = users
        self._otps = otps
        self._resets = resets
        self._storage = storage
        self._mailer = mailer
        self._settings = settings

    # -------------------------------------------------------------------------
    # Account creation and login
    # -------------------------------------------------------------------------

    async def signup(
        self,
        request: SignupRequest,
        image_path: Optional[str],
        image_name: Optional[str],
    ) -> AuthResponse:
        email = normalize_email(request.user_email)
        domain = self._settings.allowed_email_domain
        if not email.endswith(domain):
            raise InvalidEmailDomainError(domain)

        self._check_password_length(request.user_password)

        if self._users.get_by_email(email) is not None:
            raise UserAlreadyExistsError(email)

        if not image_path or not image_name:
            raise ProfileImageRequiredError()

        profile_image = await self._storage.upload(image_path, image_name)

        user = self._users.create({
            "first_name": request.first_name,
            "last_name": request.last_name,
            "user_bio": request.user_bio,
            "user_email": email,
            "user_name": request.user_name,
            "user_password": await self._hash(request.user_password),
            "profile_image": profile_image,
        })
        logger.info("Created user %s", user.id)

        return self._auth_response(user)

    async def login(self, request: LoginRequest) -> AuthResponse:
        user = self._users.get_by_email(normalize_email(request.user_email))
        if user is None:
            raise UserNotFoundError()

        matches = await asyncio.to_thread(
            security.verify_password, request.user_password, user.user_password
        )
        if not matches:
            logger.info("Rejected password for user %s", user.id)
            raise InvalidCredentialsError()

        logger.info("User %s logged in", user.id)
        return self._auth_response(user)

    # -------------------------------------------------------------------------
    # Password reset
    # -------------------------------------------------------------------------

    async def forgot_password(self, email: str) -> StatusMessageResponse:
        if not email or not email.strip():
            raise EmailRequiredError()

        user = self._users.get_by_email(normalize_email(email))
        if user is None:
            raise UserNotFoundError("User with this email not found")

        token = security.generate_reset_token()
        self._resets.create(user.id, token)

        reset_url = f"{self._settings.frontend_url.rstrip('/')}/reset-password/{token}"
        html = templates.forgot_password_email(user.first_name, reset_url)
        await self._mailer.send(user.user_email, templates.FORGOT_PASSWORD_SUBJECT, html)

        logger.info("Issued password reset for user %s", user.id)
        return StatusMessageResponse(message="Check your email for the reset link")

    async def reset_password(self, token: str, new_password: str) -> MessageResponse:
        record = self._resets.get_by_token(token)
        if record is None:
            raise InvalidResetTokenError()
        if is_expired(record.created_at, self._settings.reset_token_ttl_minutes):
            self._resets.delete(record.id)
            raise InvalidResetTokenError()

        user = self._users.get_by_id(record.user_id)
        if user is None:
            raise UserNotFoundError()

        self._check_password_length(new_password)
        password_hash = await self._hash(new_password)

        # Consume first so a token can never be used twice.
        if not self._resets.delete(record.id):
            raise InvalidResetTokenError()

        try:
            self._users.update_password(user.id, password_hash)
        except Exception:
            logger.exception("Password update failed for user %s, restoring reset token", user.id)
            self._resets.restore(record)
            raise

        logger.info("Password reset completed for user %s", user.id)
        return MessageResponse(message="Password reset successful")

    # -------------------------------------------------------------------------
    # Email verification
    # -------------------------------------------------------------------------

    async def send_otp(self, email: str) -> StatusMessageResponse:
        email = normalize_email(email)
        otp = security.generate_otp()
        self._otps.replace(email, otp)

        html = templates.otp_email(email, otp)
        await self._mailer.send(email, templates.OTP_SUBJECT, html)

        logger.info("Sent verification code to %s", email)
        return StatusMessageResponse(message="OTP sent successfully")

    async def verify_otp(self, email: str, otp: str) -> StatusMessageResponse:
        email = normalize_email(email)
        record = self._otps.get_by_email(email)
        if record is None:
            raise OTPNotFoundError()

        if is_expired(record.created_at, self._settings.otp_ttl_minutes):
            self._otps.delete_by_email(email)
            raise OTPExpiredError()

        if not secrets.compare_digest(record.otp.encode(), otp.encode()):
            raise InvalidOTPError()

        self._otps.delete_by_email(email)

        logger.info("Verified email %s", email)
        return StatusMessageResponse(message="OTP verified successfully")

    # -------------------------------------------------------------------------
    # Token holders
    # -------------------------------------------------------------------------

    async def authenticate(self, token: str) -> AuthenticatedUser:
        payload = security.decode_access_token(
            token,
            self._settings.jwt_secret,
            algorithm=self._settings.jwt_algorithm,
        )
        return AuthenticatedUser(
            id=payload.sub,
            email=payload.email,
            issued_at=datetime.fromtimestamp(payload.iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload.exp, tz=timezone.utc),
        )

    async def get_profile(self, user_id: str) -> UserPublic:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return UserPublic.from_user(user)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _check_password_length(self, password: str) -> None:
        if len(password) < self._settings.min_password_length:
            raise PasswordTooShortError(self._settings.min_password_length)
        if len(password.encode()) > security.MAX_PASSWORD_BYTES:
            raise PasswordTooLongError(security.MAX_PASSWORD_BYTES)

    async def _hash(self, password: str) -> str:
        # bcrypt is CPU bound; keep it off the event loop.
        return await asyncio.to_thread(
            security.hash_password, password, self._settings.bcrypt_rounds
        )

    def _auth_response(self, user: User) -> AuthResponse:
        token = security.create_access_token(
            user.id,
            user.user_email,
            self._settings.jwt_secret,
            expires_minutes=self._settings.jwt_expiry_minutes,
            algorithm=self._settings.jwt_algorithm,
        )
        return AuthResponse(user=UserPublic.from_user(user), token=token)
