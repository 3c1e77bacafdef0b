"""
Boards module.

Handles board storage, access control and collaborator management.

Public API:
- IBoardService: Interface for board operations
- BoardAccessControl: Read/owner checks and collaborator changes
- Board: Stored board with collaborators and shapes
"""

from .interfaces import IBoardService
from .access import AccessDecision, BoardAccessControl
from .models import (
    Permission,
    BoardSecurity,
    BoardRole,
    Collaborator,
    Board,
    BoardSummary,
    CreatedBoard,
    UserRef,
    CollaboratorDetail,
    BoardDetail,
    BoardSearchItem,
    CreateBoardRequest,
    AddCollaboratorRequest,
    RemoveCollaboratorRequest,
)
from .exceptions import (
    BoardNotFoundError,
    BoardAccessDeniedError,
    BoardNameTakenError,
    CollaboratorExistsError,
    CollaboratorNotFoundError,
    OwnerCollaboratorError,
    InvalidCollaboratorsError,
)

__all__ = [
    # Interface
    "IBoardService",
    # Access control
    "AccessDecision",
    "BoardAccessControl",
    # Models
    "Permission",
    "BoardSecurity",
    "BoardRole",
    "Collaborator",
    "Board",
    "BoardSummary",
    "CreatedBoard",
    "UserRef",
    "CollaboratorDetail",
    "BoardDetail",
    "BoardSearchItem",
    "CreateBoardRequest",
    "AddCollaboratorRequest",
    "RemoveCollaboratorRequest",
    # Exceptions
    "BoardNotFoundError",
    "BoardAccessDeniedError",
    "BoardNameTakenError",
    "CollaboratorExistsError",
    "CollaboratorNotFoundError",
    "OwnerCollaboratorError",
    "InvalidCollaboratorsError",
]
