"""
Base repository class for database access.

Wraps the Supabase client and the small amount of row handling every
table-backed repository needs.
"""

from typing import Any, Generic, Optional, TypeVar

from postgrest.exceptions import APIError
from supabase import Client


T = TypeVar("T")

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Subclasses set ``table`` and implement the domain-specific data access
    methods, mapping rows to Pydantic models internally.

    Example:
        class UserRepository(BaseRepository[User]):
            table = "users"

            def get_by_id(self, user_id: str) -> Optional[User]:
                row = self._first(self._query().select("*").eq("id", user_id).execute())
                return User(**row) if row else None
    """

    table: str = ""

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _query(self):
        """Start a query builder on this repository's table."""
        return self._db.table(self.table)

    @staticmethod
    def _first(result: Any) -> Optional[dict[str, Any]]:
        """Return the first row of a query result, or None."""
        if not result.data:
            return None
        return result.data[0]

    @staticmethod
    def is_unique_violation(error: APIError) -> bool:
        """Whether a PostgREST error was raised by a unique constraint."""
        return str(getattr(error, "code", "")) == UNIQUE_VIOLATION
