"""
Auth repositories for database access.

Encapsulates all Supabase queries and row mapping for the auth tables:
- users
- otps
- password_resets

Uniqueness (user email, user name, one OTP per email, reset token) is
enforced by the database; see migrations/001_create_auth_tables.sql.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository
from .exceptions import UserAlreadyExistsError
from .models import OTPRecord, PasswordResetRecord, User

# Named in migrations/001_create_auth_tables.sql
USER_NAME_CONSTRAINT = "users_user_name_key"


class UserRepository(BaseRepository[User]):
    """Repository for user accounts."""

    table = "users"

    def get_by_email(self, email: str) -> Optional[User]:
        """Find a user by exact email."""
        result = self._query().select("*").eq("user_email", email).limit(1).execute()
        row = self._first(result)
        return User(**row) if row else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Find a user by ID."""
        result = self._query().select("*").eq("id", user_id).limit(1).execute()
        row = self._first(result)
        return User(**row) if row else None

    def create(self, data: dict[str, Any]) -> User:
        """
        Insert a new user.

        Args:
            data: Column values; ``user_password`` must already be hashed.

        Returns:
            The created user with generated ID and timestamps.

        Raises:
            UserAlreadyExistsError: If the email or user name is taken.
        """
        try:
            result = self._query().insert(data).execute()
        except APIError as e:
            if self.is_unique_violation(e):
                if USER_NAME_CONSTRAINT in f"{e.message} {e.details}":
                    raise UserAlreadyExistsError(data.get("user_name", ""), field="user_name") from e
                raise UserAlreadyExistsError(data.get("user_email", "")) from e
            raise
        return User(**result.data[0])

    def update_password(self, user_id: str, password_hash: str) -> None:
        """Overwrite a user's password hash."""
        data = {
            "user_password": password_hash,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        self._query().update(data).eq("id", user_id).execute()


class OTPRepository(BaseRepository[OTPRecord]):
    """Repository for pending email verification codes."""

    table = "otps"

    def get_by_email(self, email: str) -> Optional[OTPRecord]:
        result = self._query().select("*").eq("user_email", email).limit(1).execute()
        row = self._first(result)
        return OTPRecord(**row) if row else None

    def replace(self, email: str, otp: str) -> OTPRecord:
        """
        Store a new code for an email, replacing any pending one.

        Single upsert on the unique ``user_email`` column, so concurrent
        requests for one email never leave two live codes.
        """
        data = {
            "user_email": email,
            "otp": otp,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        result = self._query().upsert(data, on_conflict="user_email").execute()
        return OTPRecord(**result.data[0])

    def delete_by_email(self, email: str) -> None:
        self._query().delete().eq("user_email", email).execute()


class PasswordResetRepository(BaseRepository[PasswordResetRecord]):
    """Repository for password reset tokens."""

    table = "password_resets"

    def create(self, user_id: str, token: str) -> PasswordResetRecord:
        data = {
            "user_id": user_id,
            "token": token,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        result = self._query().insert(data).execute()
        return PasswordResetRecord(**result.data[0])

    def get_by_token(self, token: str) -> Optional[PasswordResetRecord]:
        result = self._query().select("*").eq("token", token).limit(1).execute()
        row = self._first(result)
        return PasswordResetRecord(**row) if row else None

    def delete(self, reset_id: str) -> bool:
        """
        Delete a reset record.

        Returns:
            True if this call removed the row, False if it was already gone.
        """
        result = self._query().delete().eq("id", reset_id).execute()
        return bool(result.data)

    def restore(self, record: PasswordResetRecord) -> None:
        """Re-insert a previously deleted reset record unchanged."""
        self._query().insert(record.model_dump(mode="json")).execute()
