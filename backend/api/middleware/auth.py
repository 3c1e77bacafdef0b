"""
Session authentication dependency.

Reads the session token from the session cookie, falling back to an
``Authorization: Bearer`` header for API clients, and validates it.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from modules.accounts.tokens import SessionTokenIssuer
from shared.config import get_settings
from shared.models import AuthenticatedUser

from ..dependencies import get_token_issuer

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    """Return the session token from the cookie or the Authorization header."""
    token = request.cookies.get(get_settings().session_cookie_name)
    if token:
        return token
    if credentials is not None:
        return credentials.credentials
    return None


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: SessionTokenIssuer = Depends(get_token_issuer),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}

    Raises:
        MissingTokenError: If neither cookie nor header carries a token
        ExpiredTokenError / InvalidTokenError: If the token doesn't verify
    """
    return tokens.verify(extract_token(request, credentials))
