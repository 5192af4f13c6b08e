"""
Profile repository for database access.

Encapsulates Supabase queries against the profiles table.
"""

from typing import Any, Optional

from supabase import Client

from shared.repository import BaseRepository
from .models import ProfileRecord


class ProfileRepository(BaseRepository[ProfileRecord]):
    """
    Repository for profile data access.

    Note: This repository does NOT perform authorization checks.
    Callers pass the owner ID of the verified session identity.
    """

    def __init__(self, db: Client, table: str = "profiles") -> None:
        super().__init__(db)
        self._table = table

    def get_by_owner_id(self, owner_id: str) -> Optional[ProfileRecord]:
        """
        Get the profile owned by a user.

        Args:
            owner_id: The owner's subject ID.

        Returns:
            ProfileRecord, or None if the user has not created one.
        """
        result = (
            self._db.table(self._table)
            .select("*")
            .eq("user_id", owner_id)
            .limit(1)
            .execute()
        )

        if not result.data:
            return None

        return self._map_to_profile(result.data[0])

    def exists_for_owner(self, owner_id: str) -> bool:
        """Check whether a user has a profile, fetching only the key column."""
        result = (
            self._db.table(self._table)
            .select("id")
            .eq("user_id", owner_id)
            .limit(1)
            .execute()
        )
        return bool(result.data)

    def _map_to_profile(self, data: dict[str, Any]) -> ProfileRecord:
        """Map database row to ProfileRecord model."""
        return ProfileRecord(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            username=data.get("username"),
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
            created_at=data.get("created_at"),
        )
