"""
Boards module exceptions.
"""

from shared.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class BoardNotFoundError(NotFoundError):
    """Raised when a board is not found."""

    def __init__(self, board_id: str):
        super().__init__(
            f"Board not found: {board_id}",
            code="BOARD_NOT_FOUND",
            details={"board_id": board_id},
        )


class BoardAccessDeniedError(AuthorizationError):
    """Raised when a user isn't allowed to read or manage a board."""

    def __init__(self, board_id: str, user_id: str, message: str = "You do not have access to this board"):
        super().__init__(
            message,
            code="BOARD_ACCESS_DENIED",
            details={"board_id": board_id, "user_id": user_id},
        )


class BoardNameTakenError(ConflictError):
    """Raised when the owner already has a board with this name."""

    def __init__(self, name: str):
        super().__init__(
            f"A board named '{name}' already exists",
            code="BOARD_NAME_TAKEN",
            details={"name": name},
        )


class CollaboratorExistsError(ConflictError):
    """Raised when adding a user who already collaborates on the board."""

    def __init__(self, board_id: str, user_id: str):
        super().__init__(
            "User is already a collaborator on this board",
            code="COLLABORATOR_EXISTS",
            details={"board_id": board_id, "user_id": user_id},
        )


class CollaboratorNotFoundError(NotFoundError):
    """Raised when removing a user who isn't a collaborator."""

    def __init__(self, board_id: str, user_id: str):
        super().__init__(
            "User is not a collaborator on this board",
            code="COLLABORATOR_NOT_FOUND",
            details={"board_id": board_id, "user_id": user_id},
        )


class OwnerCollaboratorError(ValidationError):
    """Raised when the owner is given as a collaborator of their own board."""

    def __init__(self, board_id: str = ""):
        super().__init__(
            "The board owner cannot be a collaborator",
            code="OWNER_AS_COLLABORATOR",
            details={"board_id": board_id} if board_id else None,
        )


class InvalidCollaboratorsError(ValidationError):
    """Raised when the initial collaborator list lists a user twice."""

    def __init__(self, user_id: str):
        super().__init__(
            "Each collaborator may only be listed once",
            code="DUPLICATE_COLLABORATORS",
            details={"user_id": user_id},
        )
