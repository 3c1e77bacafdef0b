"""
User repository for database access.

Encapsulates all Supabase queries and data mapping for the users table.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from shared.repository import BaseRepository, contains_pattern

from .models import AuthProvider, User, UserSearchItem


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    (email, auth_provider) is unique in the store; a violating insert
    raises DuplicateRecordError.
    """

    table = "users"

    def get_by_id(self, user_id: str) -> Optional[User]:
        query = self._db.table(self.table).select("*").eq("id", user_id)
        result = self._execute(query, "get the user")
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_email_and_provider(
        self,
        email: str,
        auth_provider: AuthProvider,
    ) -> Optional[User]:
        query = (
            self._db.table(self.table)
            .select("*")
            .eq("email", email)
            .eq("auth_provider", auth_provider.value)
        )
        result = self._execute(query, "find the user")
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_external_id(self, external_id: str) -> Optional[User]:
        query = self._db.table(self.table).select("*").eq("external_id", external_id)
        result = self._execute(query, "find the federated user")
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def create(self, data: dict[str, Any]) -> User:
        """
        Insert a user record.

        Args:
            data: Column values (email, auth_provider, and provider-specific fields)

        Returns:
            Created User with generated ID and timestamps.
        """
        result = self._execute(self._db.table(self.table).insert(data), "create the user")
        return self._map_to_user(result.data[0])

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[User]:
        """Update columns of a user and return the stored record, or None if no user matched."""
        data = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        query = self._db.table(self.table).update(data).eq("id", user_id)
        result = self._execute(query, "update the user")
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def search(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None,
        limit: int = 20,
    ) -> list[UserSearchItem]:
        """Case-insensitive partial match on username and/or email."""
        query = self._db.table(self.table).select(
            "id, username, email, created_at, updated_at"
        )
        if username:
            query = query.ilike("username", contains_pattern(username))
        if email:
            query = query.ilike("email", contains_pattern(email))

        result = self._execute(query.order("username").limit(limit), "search users")
        return [UserSearchItem(**row) for row in result.data]

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=str(data["id"]),
            username=data.get("username"),
            password_hash=data.get("password_hash"),
            email=data["email"],
            auth_provider=AuthProvider(data["auth_provider"]),
            external_id=data.get("external_id"),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
