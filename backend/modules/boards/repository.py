"""
Board repository for database access.

Encapsulates all Supabase queries and data mapping for the boards table.
Collaborators and shapes are jsonb columns on the board row, so every
board mutation is a single-row write.
"""

import json
from datetime import datetime, timezone
from typing import Any, Optional

from shared.repository import BaseRepository, contains_pattern

from .models import Board, BoardSecurity, Collaborator, UserRef

# Every column except shapes
SUMMARY_COLUMNS = "id, name, created_by, collaborators, thumbnail, security, created_at, updated_at"


class BoardRepository(BaseRepository[Board]):
    """
    Repository for board data access.

    Handles all database operations for boards.
    All methods return Pydantic models with proper mapping from database rows.

    Note: This repository does NOT perform authorization checks.
    Access control is applied by BoardAccessControl and the board service.
    """

    table = "boards"

    # -------------------------------------------------------------------------
    # Board CRUD operations
    # -------------------------------------------------------------------------

    def get_by_id(self, board_id: str) -> Optional[Board]:
        """
        Get a board by ID, including shapes.

        Returns:
            The board, or None if not found.
        """
        query = self._db.table(self.table).select("*").eq("id", board_id)
        result = self._execute(query, "get the board")
        if not result.data:
            return None
        return self._map_to_board(result.data[0])

    def list_for_user(
        self,
        user_id: str,
        name_pattern: Optional[str] = None,
        include_shapes: bool = True,
    ) -> list[Board]:
        """
        List boards the user owns or collaborates on.

        Args:
            user_id: The user's ID.
            name_pattern: Optional literal substring the name must contain
                (case-insensitive).
            include_shapes: Whether to load the shapes column.

        Returns:
            Boards ordered by most recently updated, each listed once.
        """
        columns = "*" if include_shapes else SUMMARY_COLUMNS

        owned = self._db.table(self.table).select(columns).eq("created_by", user_id)
        shared = self._db.table(self.table).select(columns).contains(
            "collaborators", json.dumps([{"user": user_id}])
        )
        if name_pattern:
            pattern = contains_pattern(name_pattern)
            owned = owned.ilike("name", pattern)
            shared = shared.ilike("name", pattern)

        rows: dict[str, dict[str, Any]] = {}
        for query in (owned, shared):
            result = self._execute(query, "list boards")
            for row in result.data:
                rows.setdefault(str(row["id"]), row)

        boards = [self._map_to_board(row) for row in rows.values()]
        boards.sort(key=lambda b: b.updated_at, reverse=True)
        return boards

    def create(self, data: dict[str, Any]) -> Board:
        """
        Create a new board record.

        Args:
            data: Dictionary with board fields (name, created_by, security, ...)

        Returns:
            Created Board with generated ID and timestamps.

        Raises:
            DuplicateRecordError: If the owner already has a board with this name.
        """
        result = self._execute(self._db.table(self.table).insert(data), "create the board")
        return self._map_to_board(result.data[0])

    def update_collaborators(
        self,
        board_id: str,
        collaborators: list[Collaborator],
    ) -> Optional[Board]:
        """Replace the collaborator list of a board. Returns None if the board is gone."""
        data = {
            "collaborators": [c.model_dump(mode="json") for c in collaborators],
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        query = self._db.table(self.table).update(data).eq("id", board_id)
        result = self._execute(query, "update the board collaborators")
        if not result.data:
            return None
        return self._map_to_board(result.data[0])

    def delete(self, board_id: str) -> None:
        query = self._db.table(self.table).delete().eq("id", board_id)
        self._execute(query, "delete the board")

    # -------------------------------------------------------------------------
    # User lookups for display
    # -------------------------------------------------------------------------

    def get_user_refs(self, user_ids: list[str]) -> dict[str, UserRef]:
        """
        Load minimal profiles for a set of users.

        Returns:
            Mapping of user ID to UserRef; unknown IDs are left out.
        """
        if not user_ids:
            return {}

        query = (
            self._db.table("users")
            .select("id, username, email, auth_provider")
            .in_("id", list(dict.fromkeys(user_ids)))
        )
        result = self._execute(query, "load board members")
        return {
            str(row["id"]): UserRef(
                id=str(row["id"]),
                username=row.get("username"),
                email=row.get("email"),
                auth_provider=row.get("auth_provider"),
            )
            for row in result.data
        }

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_board(self, data: dict[str, Any]) -> Board:
        """Map database row to Board model."""
        return Board(
            id=str(data["id"]),
            name=data["name"],
            created_by=str(data["created_by"]),
            collaborators=[Collaborator(**c) for c in data.get("collaborators") or []],
            shapes=data.get("shapes") or [],
            thumbnail=data.get("thumbnail") or "",
            security=BoardSecurity(data.get("security") or BoardSecurity.PRIVATE.value),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
