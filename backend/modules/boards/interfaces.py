"""
Boards module interface.

The API layer depends on IBoardService for all board operations.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import (
    Board,
    BoardDetail,
    BoardSearchItem,
    BoardSecurity,
    BoardSummary,
    Collaborator,
    CreatedBoard,
    Permission,
)


@runtime_checkable
class IBoardService(Protocol):
    """
    Interface for board operations.

    This protocol defines the contract that the boards module exposes
    to the API layer.
    """

    async def list_accessible(self, user_id: str) -> list[BoardSummary]:
        """
        List the boards a user owns or collaborates on.

        Returns an empty list when there are none.
        """
        ...

    async def create(
        self,
        name: str,
        security: BoardSecurity,
        owner_id: str,
        collaborators: Optional[list[Collaborator]] = None,
    ) -> CreatedBoard:
        """
        Create a board owned by owner_id.

        Raises:
            ValidationError: If the initial collaborators repeat a user or
                include the owner
            ConflictError: If the owner already has a board with this name
        """
        ...

    async def get(self, board_id: str, user_id: str) -> BoardDetail:
        """
        Get a board with its shapes, owner and collaborators.

        Raises:
            NotFoundError: If the board doesn't exist
            AuthorizationError: If the user may not read the board
        """
        ...

    async def delete(self, board_id: str, user_id: str) -> bool:
        """
        Delete a board.

        Raises:
            NotFoundError: If the board doesn't exist
            AuthorizationError: If the user isn't the owner
        """
        ...

    async def search(self, name_pattern: str, user_id: str) -> list[BoardSearchItem]:
        """Find the user's boards whose name contains name_pattern (case-insensitive)."""
        ...

    async def add_collaborator(
        self,
        board_id: str,
        acting_user_id: str,
        target_user_id: str,
        permission: Permission,
    ) -> Board:
        """
        Add a collaborator to a board. Owner only.

        Raises:
            NotFoundError: If the board doesn't exist
            AuthorizationError: If the acting user isn't the owner
            ConflictError: If the target already collaborates
            ValidationError: If the target is the owner
        """
        ...

    async def remove_collaborator(
        self,
        board_id: str,
        acting_user_id: str,
        target_user_id: str,
    ) -> Board:
        """
        Remove a collaborator from a board. Owner only.

        Raises:
            NotFoundError: If the board or the collaborator doesn't exist
            AuthorizationError: If the acting user isn't the owner
        """
        ...
