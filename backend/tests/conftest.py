"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.accounts.models import AuthProvider, User
from modules.accounts.tokens import SessionTokenIssuer
from modules.boards.models import Board, BoardSecurity, Collaborator, Permission
from shared.config import get_settings
from shared.database import reset_client_cache


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

OWNER_ID = "11111111-1111-1111-1111-111111111111"
COLLABORATOR_ID = "22222222-2222-2222-2222-222222222222"
STRANGER_ID = "33333333-3333-3333-3333-333333333333"
BOARD_ID = "aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa"

FIXED_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def create_test_token(
    user_id: str = OWNER_ID,
    email: str = "owner@example.com",
    auth_provider: str = "local",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a session token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        auth_provider: Provider claim (local, google or github)
        expired: If True, creates an expired token
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=24)

    payload = {
        "sub": user_id,
        "email": email,
        "auth_provider": auth_provider,
        "exp": int(exp.timestamp()),
        "iat": int((now - timedelta(hours=25 if expired else 0)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_headers_for(user_id: str, email: str = "user@example.com") -> dict[str, str]:
    return {"Authorization": f"Bearer {create_test_token(user_id=user_id, email=email)}"}


def make_user(
    user_id: str = OWNER_ID,
    email: str = "owner@example.com",
    username: str | None = "owner",
    auth_provider: AuthProvider = AuthProvider.LOCAL,
    password_hash: str | None = None,
    external_id: str | None = None,
) -> User:
    """Build a User with fixed timestamps."""
    return User(
        id=user_id,
        username=username,
        email=email,
        auth_provider=auth_provider,
        password_hash=password_hash,
        external_id=external_id,
        created_at=FIXED_TIME,
        updated_at=FIXED_TIME,
    )


def make_user_row(**overrides) -> dict:
    """A users table row as returned by Supabase."""
    row = {
        "id": OWNER_ID,
        "username": "owner",
        "password_hash": "$2b$12$abcdefghijklmnopqrstuv",
        "email": "owner@example.com",
        "auth_provider": "local",
        "external_id": None,
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def make_board(
    board_id: str = BOARD_ID,
    name: str = "Roadmap",
    owner_id: str = OWNER_ID,
    collaborators: list[Collaborator] | None = None,
    security: BoardSecurity = BoardSecurity.PRIVATE,
    shapes: list[dict] | None = None,
) -> Board:
    """Build a Board with fixed timestamps."""
    return Board(
        id=board_id,
        name=name,
        created_by=owner_id,
        collaborators=collaborators or [],
        shapes=shapes or [],
        security=security,
        created_at=FIXED_TIME,
        updated_at=FIXED_TIME,
    )


def make_board_row(**overrides) -> dict:
    """A boards table row as returned by Supabase."""
    row = {
        "id": BOARD_ID,
        "name": "Roadmap",
        "created_by": OWNER_ID,
        "collaborators": [],
        "shapes": [],
        "thumbnail": "",
        "security": "private",
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def viewer(user_id: str = COLLABORATOR_ID) -> Collaborator:
    return Collaborator(user=user_id, permission=Permission.VIEW)


def editor(user_id: str = COLLABORATOR_ID) -> Collaborator:
    return Collaborator(user=user_id, permission=Permission.EDIT)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, client and container around each test."""
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()


@pytest.fixture
def token_issuer() -> SessionTokenIssuer:
    """Session token issuer signing with the test secret."""
    return SessionTokenIssuer(secret=TEST_JWT_SECRET)


@pytest.fixture
def auth_token() -> str:
    """Create a valid auth token for the board owner."""
    return create_test_token()


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
