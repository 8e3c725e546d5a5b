"""
Centralized configuration for the Notorite auth backend.

All settings are loaded from environment variables with sensible defaults.
Settings are read once at startup; collaborators receive the values they need
when the service container builds them.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Notorite Auth API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase (record store and profile image bucket)
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    storage_bucket: str = "profile-images"

    # Token signing
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expiry_minutes: int = 60

    # Frontend URLs (for reset links)
    frontend_url: str = "http://localhost:5173"

    # SendGrid
    sendgrid_api_key: str = ""
    mail_from_email: str = "no-reply@notorite.app"

    # Account policy
    allowed_email_domain: str = "@gmail.com"
    min_password_length: int = 8
    bcrypt_rounds: int = 10

    # One-time credential lifetimes, 0 disables the age check
    otp_ttl_minutes: int = 10
    reset_token_ttl_minutes: int = 60


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
