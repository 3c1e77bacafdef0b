"""
Board access control.

Decides who may read a board and who may change it, and is the only
place a board's collaborator list is modified.

Rules:
- Public boards are readable by anyone, including anonymous callers.
- Private boards are readable by the owner and collaborators only.
- Only the owner may delete a board or manage its collaborators.
- A user appears in the collaborator list at most once and the owner
  never appears there.

Mutations re-read the board, authorize, and write the collaborator list
back in one update. There is no locking, so two concurrent changes to the
same board can overwrite each other.
"""

import logging
from enum import Enum
from typing import Optional

from .exceptions import (
    BoardAccessDeniedError,
    BoardNotFoundError,
    CollaboratorExistsError,
    CollaboratorNotFoundError,
    OwnerCollaboratorError,
)
from .models import Board, BoardRole, BoardSecurity, Collaborator, Permission
from .repository import BoardRepository

logger = logging.getLogger(__name__)


class AccessDecision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


class BoardAccessControl:
    """Authorization checks and collaborator management for boards."""

    def __init__(self, repository: BoardRepository):
        self._repository = repository

    def authorize_read(self, board: Board, user_id: Optional[str]) -> AccessDecision:
        """Whether a user (None for anonymous) may read a board."""
        if board.security == BoardSecurity.PUBLIC:
            return AccessDecision.ALLOW
        if board.is_owner(user_id) or board.has_collaborator(user_id):
            return AccessDecision.ALLOW
        return AccessDecision.DENY

    def authorize_owner_action(self, board: Board, user_id: Optional[str]) -> AccessDecision:
        """Whether a user may delete the board or change its collaborators."""
        if board.is_owner(user_id):
            return AccessDecision.ALLOW
        return AccessDecision.DENY

    def role_of(self, board: Board, user_id: Optional[str]) -> Optional[BoardRole]:
        """Display role of a user on a board, or None if they are neither owner nor collaborator."""
        if board.is_owner(user_id):
            return BoardRole.OWNER
        if board.has_collaborator(user_id):
            return BoardRole.COLLABORATOR
        return None

    def add_collaborator(
        self,
        board_id: str,
        acting_user_id: str,
        target_user_id: str,
        permission: Permission,
    ) -> Board:
        """
        Grant a user access to a board.

        Returns:
            The board with the new collaborator appended.

        Raises:
            BoardNotFoundError: If the board doesn't exist
            BoardAccessDeniedError: If the acting user isn't the owner
            CollaboratorExistsError: If the target already collaborates
            OwnerCollaboratorError: If the target is the owner
        """
        board = self._load_for_owner(board_id, acting_user_id)

        if board.has_collaborator(target_user_id):
            raise CollaboratorExistsError(board_id, target_user_id)
        if board.is_owner(target_user_id):
            raise OwnerCollaboratorError(board_id)

        collaborators = [
            *board.collaborators,
            Collaborator(user=target_user_id, permission=permission),
        ]
        updated = self._repository.update_collaborators(board_id, collaborators)
        if updated is None:
            raise BoardNotFoundError(board_id)
        logger.info(
            "User %s added %s to board %s with %s permission",
            acting_user_id, target_user_id, board_id, permission.value,
        )
        return updated

    def remove_collaborator(
        self,
        board_id: str,
        acting_user_id: str,
        target_user_id: str,
    ) -> Board:
        """
        Revoke a collaborator's access to a board.

        Raises:
            BoardNotFoundError: If the board doesn't exist
            BoardAccessDeniedError: If the acting user isn't the owner
            CollaboratorNotFoundError: If the target isn't a collaborator
        """
        board = self._load_for_owner(board_id, acting_user_id)

        collaborators = list(board.collaborators)
        index = next(
            (i for i, c in enumerate(collaborators) if c.user == target_user_id),
            None,
        )
        if index is None:
            raise CollaboratorNotFoundError(board_id, target_user_id)
        del collaborators[index]

        updated = self._repository.update_collaborators(board_id, collaborators)
        if updated is None:
            raise BoardNotFoundError(board_id)
        logger.info("User %s removed %s from board %s", acting_user_id, target_user_id, board_id)
        return updated

    def _load_for_owner(self, board_id: str, user_id: str) -> Board:
        board = self._repository.get_by_id(board_id)
        if board is None:
            raise BoardNotFoundError(board_id)
        if self.authorize_owner_action(board, user_id) == AccessDecision.DENY:
            logger.warning("User %s denied owner action on board %s", user_id, board_id)
            raise BoardAccessDeniedError(
                board_id,
                user_id,
                "Only the board owner can perform this action",
            )
        return board
