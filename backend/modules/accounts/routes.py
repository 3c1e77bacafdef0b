"""
Account API endpoints.

Registration, session login/logout (local and federated), the current
user's profile, and user search.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from api.dependencies import get_account_service
from api.middleware.auth import get_current_user
from shared.config import get_settings
from shared.models import AuthenticatedUser

from .interfaces import IAccountService
from .models import (
    FederatedLoginRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    Profile,
    ProfileUpdateRequest,
    RegisterRequest,
    SessionResult,
    UserSearchItem,
    UserSummary,
)

users_router = APIRouter()
sessions_router = APIRouter()
profile_router = APIRouter()


def _set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )


def _login_response(response: Response, session: SessionResult) -> LoginResponse:
    _set_session_cookie(response, session.token)
    return LoginResponse(user=session.user)


@users_router.post("", response_model=UserSummary, status_code=201)
async def register(
    request: RegisterRequest,
    service: IAccountService = Depends(get_account_service),
) -> UserSummary:
    """Register a local user with username, email and password."""
    return await service.register(request.username, str(request.email), request.password)


@users_router.get("/search", response_model=list[UserSearchItem])
async def search_users(
    username: Optional[str] = Query(default=None, description="Partial username"),
    email: Optional[str] = Query(default=None, description="Partial email"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAccountService = Depends(get_account_service),
) -> list[UserSearchItem]:
    """
    Find users by partial username and/or email.

    Used by clients to look up the id of a user before adding them as a
    collaborator.
    """
    return await service.search_users(username=username, email=email)


@sessions_router.post("", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    service: IAccountService = Depends(get_account_service),
) -> LoginResponse:
    """Log in with email and password. The session token is set as a cookie."""
    session = await service.login_local(str(request.email), request.password)
    return _login_response(response, session)


@sessions_router.post("/federated", response_model=LoginResponse)
async def login_federated(
    request: FederatedLoginRequest,
    response: Response,
    service: IAccountService = Depends(get_account_service),
) -> LoginResponse:
    """
    Log in with an identity token from Google or GitHub sign-in.

    The user is created on first login.
    """
    session = await service.login_federated(request.id_token)
    return _login_response(response, session)


@sessions_router.delete("", response_model=MessageResponse)
async def logout(
    response: Response,
    user: AuthenticatedUser = Depends(get_current_user),
) -> MessageResponse:
    """Clear the session cookie."""
    settings = get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )
    return MessageResponse(message="Logout successful")


@profile_router.get("", response_model=Profile)
async def get_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAccountService = Depends(get_account_service),
) -> Profile:
    """Get the current user's profile."""
    return await service.get_profile(user.id)


@profile_router.put("", response_model=Profile)
async def update_profile(
    request: ProfileUpdateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAccountService = Depends(get_account_service),
) -> Profile:
    """
    Update the current user's username and/or password.

    Only local accounts have a profile that can be changed. Changing the
    password requires both old_password and new_password.
    """
    return await service.update_profile(user.id, request)
