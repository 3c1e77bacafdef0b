"""
Boards module data models.

A board is a named canvas owned by one user, shared with collaborators at
view or edit permission, and either public or private. Its shapes are an
opaque list of records the backend never interprets.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Permission(str, Enum):
    """What a collaborator may do with a board's contents."""

    VIEW = "view"
    EDIT = "edit"


class BoardSecurity(str, Enum):
    """Public boards are readable by anyone; private ones by owner and collaborators."""

    PUBLIC = "public"
    PRIVATE = "private"


class BoardRole(str, Enum):
    """The requesting user's relationship to a board. Display only."""

    OWNER = "owner"
    COLLABORATOR = "collaborator"


class Collaborator(BaseModel):
    """A collaborator entry as stored on the board."""

    user: str
    permission: Permission


class Board(BaseModel):
    """
    A stored board.

    A user id appears at most once in collaborators and the owner never
    appears there.
    """

    id: str
    name: str
    created_by: str
    collaborators: list[Collaborator] = Field(default_factory=list)
    shapes: list[dict[str, Any]] = Field(default_factory=list)
    thumbnail: str = ""
    security: BoardSecurity = BoardSecurity.PRIVATE
    created_at: datetime
    updated_at: datetime

    def is_owner(self, user_id: Optional[str]) -> bool:
        return user_id is not None and user_id == self.created_by

    def has_collaborator(self, user_id: Optional[str]) -> bool:
        return any(c.user == user_id for c in self.collaborators)


class BoardSummary(BaseModel):
    """A board as shown in the user's board list."""

    id: str
    name: str
    thumbnail: str
    security: BoardSecurity
    role: BoardRole
    created_at: datetime
    updated_at: datetime


class CreatedBoard(BaseModel):
    """Returned after a board is created."""

    id: str
    name: str
    created_at: datetime
    updated_at: datetime


class UserRef(BaseModel):
    """Minimal public profile of a board's owner or collaborator."""

    id: str
    username: Optional[str] = None
    email: Optional[str] = None
    auth_provider: Optional[str] = None


class CollaboratorDetail(BaseModel):
    user: UserRef
    permission: Permission


class BoardDetail(BaseModel):
    """A full board with owner and collaborators expanded to profiles."""

    id: str
    name: str
    created_by: UserRef
    collaborators: list[CollaboratorDetail]
    shapes: list[dict[str, Any]]
    thumbnail: str
    security: BoardSecurity
    role: Optional[BoardRole] = None  # None for readers of a public board they aren't part of
    created_at: datetime
    updated_at: datetime


class BoardSearchItem(BaseModel):
    """A board matched by name search. Shapes are left out."""

    id: str
    name: str
    created_by: str
    thumbnail: str
    security: BoardSecurity
    created_at: datetime
    updated_at: datetime


class DeleteResponse(BaseModel):
    message: str = "Board deleted successfully"


# -----------------------------------------------------------------------------
# Request bodies
# -----------------------------------------------------------------------------


class NewCollaborator(BaseModel):
    """A collaborator given when a board is created."""

    model_config = ConfigDict(extra="forbid")

    user: UUID
    permission: Permission


class CreateBoardRequest(BaseModel):
    """Body of POST /api/boards."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., max_length=200)
    security: BoardSecurity = BoardSecurity.PRIVATE
    collaborators: list[NewCollaborator] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Board name is required")
        return v

    def initial_collaborators(self) -> list[Collaborator]:
        return [
            Collaborator(user=str(c.user), permission=c.permission)
            for c in self.collaborators
        ]


class AddCollaboratorRequest(BaseModel):
    """Body of POST /api/boards/{board_id}/collaborators."""

    model_config = ConfigDict(extra="forbid")

    target_user_id: UUID
    permission: Permission


class RemoveCollaboratorRequest(BaseModel):
    """Body of DELETE /api/boards/{board_id}/collaborators."""

    model_config = ConfigDict(extra="forbid")

    target_user_id: UUID
