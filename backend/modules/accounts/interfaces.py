"""
Accounts module interfaces.

Other modules and the API layer should depend on these protocols, not on
the concrete implementations. This enables testing with mocks.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import (
    FederatedIdentity,
    Profile,
    ProfileUpdateRequest,
    SessionResult,
    UserSearchItem,
    UserSummary,
)


@runtime_checkable
class IFederatedIdentityVerifier(Protocol):
    """Verifies a third-party identity assertion."""

    async def verify(self, assertion: str) -> FederatedIdentity:
        """
        Verify an assertion issued by the identity provider.

        Returns:
            FederatedIdentity with the stable external id, email, raw
            provider name and display name

        Raises:
            AuthenticationError: If the assertion is missing, invalid or expired
            ExternalServiceError: If the provider's keys can't be fetched
        """
        ...


@runtime_checkable
class IAccountService(Protocol):
    """
    Interface for account operations.

    This protocol defines the contract that the accounts module exposes
    to the API layer.
    """

    async def register(self, username: str, email: str, password: str) -> UserSummary:
        """
        Register a local user.

        Raises:
            ConflictError: If a local user with this email exists
        """
        ...

    async def login_local(self, email: str, password: str) -> SessionResult:
        """
        Log in with email and password.

        Raises:
            AuthenticationError: If the email is unknown or the password is wrong
        """
        ...

    async def login_federated(self, assertion: str) -> SessionResult:
        """
        Log in with an identity provider assertion, creating the user on first login.

        Raises:
            AuthenticationError: If the assertion doesn't verify
            ValidationError: If the provider is not Google or GitHub
        """
        ...

    async def get_profile(self, user_id: str) -> Profile:
        """
        Get a user's profile.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        ...

    async def update_profile(self, user_id: str, patch: ProfileUpdateRequest) -> Profile:
        """
        Update a local user's username and/or password.

        Raises:
            NotFoundError: If no local user has this id
            AuthenticationError: If the old password doesn't verify
        """
        ...

    async def search_users(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None,
    ) -> list[UserSearchItem]:
        """
        Find users by partial username and/or email.

        Raises:
            ValidationError: If neither criterion is given
        """
        ...
