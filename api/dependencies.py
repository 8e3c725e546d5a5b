"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together the auth service
and its collaborators. Clients for Supabase and SendGrid are constructed
here once, from the cached settings, and passed into the service; no
collaborator is configured by import side effects.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from shared.mail import Mailer
    from shared.storage import ProfileImageStorage


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._storage: "ProfileImageStorage | None" = None
        self._mailer: "Mailer | None" = None

    @property
    def storage(self) -> "ProfileImageStorage":
        """Get the profile image store."""
        if self._storage is None:
            from shared.config import get_settings
            from shared.database import get_supabase_client
            from shared.storage import ProfileImageStorage
            self._storage = ProfileImageStorage(
                get_supabase_client(),
                get_settings().storage_bucket,
            )
        return self._storage

    @property
    def mailer(self) -> "Mailer":
        """Get the mailer."""
        if self._mailer is None:
            from shared.config import get_settings
            from shared.mail import Mailer
            settings = get_settings()
            self._mailer = Mailer(settings.sendgrid_api_key, settings.mail_from_email)
        return self._mailer

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.repository import (
                OTPRepository,
                PasswordResetRepository,
                UserRepository,
            )
            from modules.auth.service import AuthService
            from shared.config import get_settings
            from shared.database import get_supabase_client
            db = get_supabase_client()
            self._auth_service = AuthService(
                users=UserRepository(db),
                otps=OTPRepository(db),
                resets=PasswordResetRepository(db),
                storage=self.storage,
                mailer=self.mailer,
                settings=get_settings(),
            )
        return self._auth_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._storage = None
        self._mailer = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth
