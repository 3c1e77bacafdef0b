"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations from one Settings
instance.
"""

from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.accounts.interfaces import IAccountService, IFederatedIdentityVerifier
    from modules.accounts.passwords import PasswordHasher
    from modules.accounts.repository import UserRepository
    from modules.accounts.tokens import SessionTokenIssuer
    from modules.boards.access import BoardAccessControl
    from modules.boards.interfaces import IBoardService
    from modules.boards.repository import BoardRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access, or all at
    once by initialize() during application startup.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self._db: "Client | None" = None
        self._user_repository: "UserRepository | None" = None
        self._board_repository: "BoardRepository | None" = None
        self._password_hasher: "PasswordHasher | None" = None
        self._token_issuer: "SessionTokenIssuer | None" = None
        self._federated_verifier: "IFederatedIdentityVerifier | None" = None
        self._access_control: "BoardAccessControl | None" = None
        self._account_service: "IAccountService | None" = None
        self._board_service: "IBoardService | None" = None

    @property
    def db(self) -> "Client":
        """Get the Supabase client."""
        if self._db is None:
            from shared.database import get_supabase_client
            self._db = get_supabase_client(self.settings)
        return self._db

    @property
    def user_repository(self) -> "UserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.accounts.repository import UserRepository
            self._user_repository = UserRepository(self.db)
        return self._user_repository

    @property
    def board_repository(self) -> "BoardRepository":
        """Get the board repository instance."""
        if self._board_repository is None:
            from modules.boards.repository import BoardRepository
            self._board_repository = BoardRepository(self.db)
        return self._board_repository

    @property
    def password_hasher(self) -> "PasswordHasher":
        if self._password_hasher is None:
            from modules.accounts.passwords import PasswordHasher
            self._password_hasher = PasswordHasher(rounds=self.settings.bcrypt_rounds)
        return self._password_hasher

    @property
    def token_issuer(self) -> "SessionTokenIssuer":
        """Get the session token issuer."""
        if self._token_issuer is None:
            from modules.accounts.tokens import SessionTokenIssuer
            self._token_issuer = SessionTokenIssuer(
                secret=self.settings.jwt_secret,
                algorithm=self.settings.jwt_algorithm,
                ttl=timedelta(hours=self.settings.session_ttl_hours),
            )
        return self._token_issuer

    @property
    def federated_verifier(self) -> "IFederatedIdentityVerifier":
        if self._federated_verifier is None:
            from modules.accounts.federated import FirebaseIdentityVerifier
            self._federated_verifier = FirebaseIdentityVerifier(
                project_id=self.settings.firebase_project_id,
                jwks_url=self.settings.firebase_jwks_url,
            )
        return self._federated_verifier

    @property
    def access_control(self) -> "BoardAccessControl":
        """Get the board access control core."""
        if self._access_control is None:
            from modules.boards.access import BoardAccessControl
            self._access_control = BoardAccessControl(self.board_repository)
        return self._access_control

    @property
    def accounts(self) -> "IAccountService":
        """Get the account service instance."""
        if self._account_service is None:
            from modules.accounts.service import AccountService
            self._account_service = AccountService(
                users=self.user_repository,
                passwords=self.password_hasher,
                tokens=self.token_issuer,
                federated=self.federated_verifier,
            )
        return self._account_service

    @property
    def boards(self) -> "IBoardService":
        """Get the board service instance."""
        if self._board_service is None:
            from modules.boards.service import BoardService
            self._board_service = BoardService(
                repository=self.board_repository,
                access=self.access_control,
            )
        return self._board_service

    def initialize(self) -> None:
        """Build every service up front so configuration errors surface at startup."""
        self.accounts
        self.boards

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._db = None
        self._user_repository = None
        self._board_repository = None
        self._password_hasher = None
        self._token_issuer = None
        self._federated_verifier = None
        self._access_control = None
        self._account_service = None
        self._board_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer(get_settings())
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_account_service() -> "IAccountService":
    """FastAPI dependency for account service."""
    return get_container().accounts


def get_board_service() -> "IBoardService":
    """FastAPI dependency for board service."""
    return get_container().boards


def get_token_issuer() -> "SessionTokenIssuer":
    """FastAPI dependency for the session token issuer."""
    return get_container().token_issuer
