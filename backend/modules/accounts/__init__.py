"""
Accounts module.

Handles local registration, password and federated login, session
tokens, and the current user's profile.

Public API:
- IAccountService: Interface for account operations
- User: Stored user record (local or federated)
- UserSummary: User data returned to clients
- SessionTokenIssuer: Issues and verifies session tokens
"""

from .interfaces import IAccountService, IFederatedIdentityVerifier
from .models import (
    AuthProvider,
    User,
    UserSummary,
    SessionResult,
    Profile,
    UserSearchItem,
    FederatedIdentity,
    RegisterRequest,
    LoginRequest,
    FederatedLoginRequest,
    ProfileUpdateRequest,
)
from .tokens import SessionTokenIssuer
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    UserNotFoundError,
    UserAlreadyExistsError,
    UnsupportedProviderError,
    InvalidSearchError,
    IdentityProviderError,
)

__all__ = [
    # Interfaces
    "IAccountService",
    "IFederatedIdentityVerifier",
    # Models
    "AuthProvider",
    "User",
    "UserSummary",
    "SessionResult",
    "Profile",
    "UserSearchItem",
    "FederatedIdentity",
    "RegisterRequest",
    "LoginRequest",
    "FederatedLoginRequest",
    "ProfileUpdateRequest",
    # Tokens
    "SessionTokenIssuer",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "UserNotFoundError",
    "UserAlreadyExistsError",
    "UnsupportedProviderError",
    "InvalidSearchError",
    "IdentityProviderError",
]
