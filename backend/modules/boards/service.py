"""
Board service implementation.

Board lifecycle (create, list, get, search, delete) on top of the board
repository. Every read and delete goes through BoardAccessControl;
collaborator changes are delegated to it entirely.
"""

import logging
from typing import Optional

from shared.exceptions import DuplicateRecordError

from .access import AccessDecision, BoardAccessControl
from .exceptions import (
    BoardAccessDeniedError,
    BoardNameTakenError,
    BoardNotFoundError,
    InvalidCollaboratorsError,
    OwnerCollaboratorError,
)
from .interfaces import IBoardService
from .models import (
    Board,
    BoardDetail,
    BoardSearchItem,
    BoardSecurity,
    BoardSummary,
    Collaborator,
    CollaboratorDetail,
    CreatedBoard,
    Permission,
    UserRef,
)
from .repository import BoardRepository

logger = logging.getLogger(__name__)


class BoardService(IBoardService):
    """
    Board service with Supabase backend.

    Implements IBoardService protocol with real database operations.
    """

    def __init__(self, repository: BoardRepository, access: BoardAccessControl):
        self._repository = repository
        self._access = access

    async def list_accessible(self, user_id: str) -> list[BoardSummary]:
        boards = self._repository.list_for_user(user_id, include_shapes=False)
        return [
            BoardSummary(
                id=board.id,
                name=board.name,
                thumbnail=board.thumbnail,
                security=board.security,
                role=self._access.role_of(board, user_id),
                created_at=board.created_at,
                updated_at=board.updated_at,
            )
            for board in boards
        ]

    async def create(
        self,
        name: str,
        security: BoardSecurity,
        owner_id: str,
        collaborators: Optional[list[Collaborator]] = None,
    ) -> CreatedBoard:
        """Create a new board with empty shapes and thumbnail."""
        collaborators = collaborators or []
        self._check_initial_collaborators(owner_id, collaborators)

        data = {
            "name": name,
            "created_by": owner_id,
            "security": security.value,
            "collaborators": [c.model_dump(mode="json") for c in collaborators],
            "shapes": [],
            "thumbnail": "",
        }
        try:
            board = self._repository.create(data)
        except DuplicateRecordError:
            raise BoardNameTakenError(name)

        logger.info("User %s created board %s", owner_id, board.id)
        return CreatedBoard(
            id=board.id,
            name=board.name,
            created_at=board.created_at,
            updated_at=board.updated_at,
        )

    async def get(self, board_id: str, user_id: str) -> BoardDetail:
        board = self._repository.get_by_id(board_id)
        if board is None:
            raise BoardNotFoundError(board_id)

        if self._access.authorize_read(board, user_id) == AccessDecision.DENY:
            logger.warning("User %s denied read access to board %s", user_id, board_id)
            raise BoardAccessDeniedError(board_id, user_id)

        refs = self._repository.get_user_refs(
            [board.created_by, *(c.user for c in board.collaborators)]
        )

        def ref(uid: str) -> UserRef:
            return refs.get(uid) or UserRef(id=uid)

        return BoardDetail(
            id=board.id,
            name=board.name,
            created_by=ref(board.created_by),
            collaborators=[
                CollaboratorDetail(user=ref(c.user), permission=c.permission)
                for c in board.collaborators
            ],
            shapes=board.shapes,
            thumbnail=board.thumbnail,
            security=board.security,
            role=self._access.role_of(board, user_id),
            created_at=board.created_at,
            updated_at=board.updated_at,
        )

    async def delete(self, board_id: str, user_id: str) -> bool:
        board = self._repository.get_by_id(board_id)
        if board is None:
            raise BoardNotFoundError(board_id)

        if self._access.authorize_owner_action(board, user_id) == AccessDecision.DENY:
            logger.warning("User %s denied delete of board %s", user_id, board_id)
            raise BoardAccessDeniedError(
                board_id,
                user_id,
                "Only the board owner can delete this board",
            )

        self._repository.delete(board_id)
        logger.info("User %s deleted board %s", user_id, board_id)
        return True

    async def search(self, name_pattern: str, user_id: str) -> list[BoardSearchItem]:
        """Search is limited to boards the user owns or collaborates on."""
        boards = self._repository.list_for_user(
            user_id,
            name_pattern=name_pattern,
            include_shapes=False,
        )
        return [
            BoardSearchItem(
                id=board.id,
                name=board.name,
                created_by=board.created_by,
                thumbnail=board.thumbnail,
                security=board.security,
                created_at=board.created_at,
                updated_at=board.updated_at,
            )
            for board in boards
        ]

    async def add_collaborator(
        self,
        board_id: str,
        acting_user_id: str,
        target_user_id: str,
        permission: Permission,
    ) -> Board:
        return self._access.add_collaborator(board_id, acting_user_id, target_user_id, permission)

    async def remove_collaborator(
        self,
        board_id: str,
        acting_user_id: str,
        target_user_id: str,
    ) -> Board:
        return self._access.remove_collaborator(board_id, acting_user_id, target_user_id)

    def _check_initial_collaborators(
        self,
        owner_id: str,
        collaborators: list[Collaborator],
    ) -> None:
        seen: set[str] = set()
        for collaborator in collaborators:
            if collaborator.user == owner_id:
                raise OwnerCollaboratorError()
            if collaborator.user in seen:
                raise InvalidCollaboratorsError(collaborator.user)
            seen.add(collaborator.user)
