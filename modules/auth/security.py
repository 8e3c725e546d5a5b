"""
Credential primitives: password hashing, access tokens, one-time secrets.

Passwords are hashed with bcrypt. Access tokens are HS256 JWTs carrying the
user id as ``sub`` plus the email. Reset tokens and OTP codes come from the
``secrets`` CSPRNG.
"""

import secrets
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from .exceptions import ExpiredTokenError, InvalidTokenError
from .models import TokenPayload

RESET_TOKEN_BYTES = 32
# bcrypt only reads the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72
OTP_MIN = 100000
OTP_MAX = 999999


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: str,
    email: str,
    secret: str,
    expires_minutes: int = 60,
    algorithm: str = "HS256",
) -> str:
    """
    Sign an access token for a user.

    Args:
        user_id: Subject of the token
        email: User's email, carried as a claim
        secret: Server-held signing secret
        expires_minutes: Token lifetime
        algorithm: JWT signing algorithm

    Returns:
        Encoded JWT string
    """
    if not secret:
        raise RuntimeError("Token signing secret is not configured. Set JWT_SECRET.")

    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=expires_minutes)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> TokenPayload:
    """
    Verify an access token and return its claims.

    Raises:
        ExpiredTokenError: If the token is past its expiry
        InvalidTokenError: If the token is malformed or the signature is wrong
    """
    if not secret:
        raise InvalidTokenError("Server authentication not configured")

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["sub", "email", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise ExpiredTokenError()
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(f"Invalid token: {e}")

    return TokenPayload(**payload)


def generate_reset_token() -> str:
    """Return 32 random bytes as 64 lowercase hex characters."""
    return secrets.token_hex(RESET_TOKEN_BYTES)


def generate_otp() -> str:
    """Return a uniformly drawn six digit code."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))
