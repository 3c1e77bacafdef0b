"""
Board API endpoints.

Provides REST endpoints for board CRUD, search and collaborator
management. Every endpoint requires a session.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_board_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import IBoardService
from .models import (
    AddCollaboratorRequest,
    Board,
    BoardDetail,
    BoardSearchItem,
    BoardSummary,
    CreateBoardRequest,
    CreatedBoard,
    DeleteResponse,
    RemoveCollaboratorRequest,
)

router = APIRouter()


@router.get("", response_model=list[BoardSummary])
async def list_boards(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBoardService = Depends(get_board_service),
) -> list[BoardSummary]:
    """
    List the boards the current user owns or collaborates on.

    Each entry carries the user's role on that board.
    """
    return await service.list_accessible(user.id)


@router.post("", response_model=CreatedBoard, status_code=201)
async def create_board(
    request: CreateBoardRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBoardService = Depends(get_board_service),
) -> CreatedBoard:
    """
    Create a new board owned by the current user.

    Boards are private unless security is set to "public". Board names
    are unique per owner.
    """
    return await service.create(
        request.name,
        request.security,
        user.id,
        request.initial_collaborators(),
    )


# Registered before /{board_id} so "search" isn't parsed as an id
@router.get("/search", response_model=list[BoardSearchItem])
async def search_boards(
    name: str = Query(..., min_length=1, description="Part of the board name"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBoardService = Depends(get_board_service),
) -> list[BoardSearchItem]:
    """Search the current user's boards by name."""
    return await service.search(name, user.id)


@router.get("/{board_id}", response_model=BoardDetail)
async def get_board(
    board_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBoardService = Depends(get_board_service),
) -> BoardDetail:
    """
    Get a board with its shapes, owner and collaborators.

    Private boards are only visible to their owner and collaborators.
    """
    return await service.get(str(board_id), user.id)


@router.delete("/{board_id}", response_model=DeleteResponse)
async def delete_board(
    board_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBoardService = Depends(get_board_service),
) -> DeleteResponse:
    """Delete a board. Only the owner can delete it."""
    await service.delete(str(board_id), user.id)
    return DeleteResponse()


@router.post("/{board_id}/collaborators", response_model=Board, status_code=201)
async def add_collaborator(
    board_id: UUID,
    request: AddCollaboratorRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBoardService = Depends(get_board_service),
) -> Board:
    """Share a board with another user. Only the owner can add collaborators."""
    return await service.add_collaborator(
        str(board_id),
        user.id,
        str(request.target_user_id),
        request.permission,
    )


@router.delete("/{board_id}/collaborators", response_model=Board)
async def remove_collaborator(
    board_id: UUID,
    request: RemoveCollaboratorRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBoardService = Depends(get_board_service),
) -> Board:
    """Stop sharing a board with a user. Only the owner can remove collaborators."""
    return await service.remove_collaborator(
        str(board_id),
        user.id,
        str(request.target_user_id),
    )
