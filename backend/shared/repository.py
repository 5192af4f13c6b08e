"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally.

    Example:
        class ProfileRepository(BaseRepository[ProfileRecord]):
            def get_by_owner_id(self, owner_id: str) -> Optional[ProfileRecord]:
                result = self._db.table("profiles").select("*").eq("user_id", owner_id).execute()
                if not result.data:
                    return None
                return self._map_to_profile(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db
