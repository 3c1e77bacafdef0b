"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the translation of store failures into the
shared exception taxonomy.
"""

import logging
from typing import Any, TypeVar, Generic

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import DuplicateRecordError, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def contains_pattern(value: str) -> str:
    """Build an ILIKE pattern matching ``value`` literally anywhere in a column."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - _execute(): runs a query builder and normalizes store errors

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally. Repositories
    never make authorization decisions.

    Example:
        class BoardRepository(BaseRepository[Board]):
            def get_by_id(self, board_id: str) -> Optional[Board]:
                query = self._db.table("boards").select("*").eq("id", board_id)
                result = self._execute(query, "get the board")
                if not result.data:
                    return None
                return self._map_to_board(result.data[0])
    """

    table: str = ""

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, query: Any, action: str) -> Any:
        """
        Execute a PostgREST query builder.

        Args:
            query: A query builder with an execute() method.
            action: Human-readable description used in error messages.

        Returns:
            The APIResponse from the store.

        Raises:
            DuplicateRecordError: If the store reports a unique violation.
            StoreError: For any other store or transport failure.
        """
        try:
            return query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateRecordError(self.table, e.message or "") from e
            logger.error("Store error while trying to %s: %s (code %s)", action, e.message, e.code)
            raise StoreError(action, e.message or "unknown store error") from e
        except httpx.HTTPError as e:
            logger.error("Store unreachable while trying to %s: %s", action, e)
            raise StoreError(action, "the store could not be reached") from e
