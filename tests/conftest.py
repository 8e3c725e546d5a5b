"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
signed test tokens, fast test settings, and in-memory stand-ins for the
record store, profile image store and mailer.
"""

import uuid
from datetime import datetime, timezone, timedelta
from typing import Any, Optional

import jwt  # PyJWT
import pytest

from api.dependencies import reset_container
from modules.auth.exceptions import UserAlreadyExistsError
from modules.auth.models import OTPRecord, PasswordResetRecord, User
from modules.auth.service import AuthService
from shared.config import Settings, get_settings


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@gmail.com",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test access token.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


# -----------------------------------------------------------------------------
# In-memory collaborators
# -----------------------------------------------------------------------------


class InMemoryUserRepository:
    """Dict-backed stand-in for UserRepository with the same uniqueness rules."""

    def __init__(self):
        self.rows: dict[str, dict[str, Any]] = {}

    def get_by_email(self, email: str) -> Optional[User]:
        for row in self.rows.values():
            if row["user_email"] == email:
                return User(**row)
        return None

    def get_by_id(self, user_id: str) -> Optional[User]:
        row = self.rows.get(user_id)
        return User(**row) if row else None

    def create(self, data: dict[str, Any]) -> User:
        for row in self.rows.values():
            if row["user_email"] == data["user_email"]:
                raise UserAlreadyExistsError(data["user_email"])
            if row["user_name"] == data["user_name"]:
                raise UserAlreadyExistsError(data["user_name"], field="user_name")
        now = datetime.now(timezone.utc)
        row = {**data, "id": str(uuid.uuid4()), "created_at": now, "updated_at": now}
        self.rows[row["id"]] = row
        return User(**row)

    def update_password(self, user_id: str, password_hash: str) -> None:
        self.rows[user_id]["user_password"] = password_hash
        self.rows[user_id]["updated_at"] = datetime.now(timezone.utc)


class InMemoryOTPRepository:
    def __init__(self):
        self.rows: dict[str, OTPRecord] = {}

    def get_by_email(self, email: str) -> Optional[OTPRecord]:
        return self.rows.get(email)

    def replace(self, email: str, otp: str) -> OTPRecord:
        record = OTPRecord(
            id=str(uuid.uuid4()),
            user_email=email,
            otp=otp,
            created_at=datetime.now(timezone.utc),
        )
        self.rows[email] = record
        return record

    def delete_by_email(self, email: str) -> None:
        self.rows.pop(email, None)


class InMemoryPasswordResetRepository:
    def __init__(self):
        self.rows: dict[str, PasswordResetRecord] = {}

    def create(self, user_id: str, token: str) -> PasswordResetRecord:
        record = PasswordResetRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            token=token,
            created_at=datetime.now(timezone.utc),
        )
        self.rows[record.id] = record
        return record

    def get_by_token(self, token: str) -> Optional[PasswordResetRecord]:
        for record in self.rows.values():
            if record.token == token:
                return record
        return None

    def delete(self, reset_id: str) -> bool:
        return self.rows.pop(reset_id, None) is not None

    def restore(self, record: PasswordResetRecord) -> None:
        self.rows[record.id] = record


class RecordingStorage:
    """Profile image store that remembers uploads instead of sending them."""

    def __init__(self):
        self.uploads: list[tuple[str, str]] = []

    async def upload(self, local_path: str, original_name: str) -> str:
        self.uploads.append((local_path, original_name))
        return f"https://cdn.test/profile-images/{original_name}"


class RecordingMailer:
    """Mailer that keeps sent messages in memory."""

    def __init__(self):
        self.sent: list[dict[str, str]] = []

    async def send(self, to: str, subject: str, html: str) -> None:
        self.sent.append({"to": to, "subject": subject, "html": html})


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the service container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a known secret and cheap bcrypt cost."""
    return Settings(
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        frontend_url="https://app.notorite.test",
        allowed_email_domain="@gmail.com",
        min_password_length=8,
        otp_ttl_minutes=10,
        reset_token_ttl_minutes=60,
    )


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def otps() -> InMemoryOTPRepository:
    return InMemoryOTPRepository()


@pytest.fixture
def resets() -> InMemoryPasswordResetRepository:
    return InMemoryPasswordResetRepository()


@pytest.fixture
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def auth_service(users, otps, resets, storage, mailer, test_settings) -> AuthService:
    """AuthService wired to in-memory collaborators."""
    return AuthService(
        users=users,
        otps=otps,
        resets=resets,
        storage=storage,
        mailer=mailer,
        settings=test_settings,
    )


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@gmail.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
