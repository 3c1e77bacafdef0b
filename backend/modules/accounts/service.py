"""
Account service implementation.

Registers local users, logs users in with a password or a federated
identity assertion, and manages the current user's profile.
"""

import logging
from typing import Optional

from shared.exceptions import DuplicateRecordError

from .exceptions import (
    InvalidCredentialsError,
    InvalidSearchError,
    UnsupportedProviderError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from .interfaces import IAccountService, IFederatedIdentityVerifier
from .models import (
    AuthProvider,
    FederatedIdentity,
    Profile,
    ProfileUpdateRequest,
    SessionResult,
    User,
    UserSearchItem,
    UserSummary,
)
from .passwords import PasswordHasher
from .repository import UserRepository
from .tokens import SessionTokenIssuer

logger = logging.getLogger(__name__)

# Firebase sign_in_provider values we accept
PROVIDER_MAP = {
    "google.com": AuthProvider.GOOGLE,
    "github.com": AuthProvider.GITHUB,
}

PLACEHOLDER_EMAIL_DOMAIN = "noemail.com"
# Username for federated accounts whose identity carries no display name
DEFAULT_USERNAME = "User"


class AccountService(IAccountService):
    """
    Account service backed by the users table.

    Password hashing and federated verification run off the event loop;
    store calls go through the synchronous Supabase client.
    """

    def __init__(
        self,
        users: UserRepository,
        passwords: PasswordHasher,
        tokens: SessionTokenIssuer,
        federated: IFederatedIdentityVerifier,
    ):
        self._users = users
        self._passwords = passwords
        self._tokens = tokens
        self._federated = federated

    async def register(self, username: str, email: str, password: str) -> UserSummary:
        if self._users.get_by_email_and_provider(email, AuthProvider.LOCAL):
            raise UserAlreadyExistsError(email, AuthProvider.LOCAL.value)

        password_hash = await self._passwords.hash(password)
        try:
            user = self._users.create({
                "username": username,
                "email": email,
                "password_hash": password_hash,
                "auth_provider": AuthProvider.LOCAL.value,
            })
        except DuplicateRecordError:
            # Lost a race with a concurrent registration
            raise UserAlreadyExistsError(email, AuthProvider.LOCAL.value)

        logger.info("Registered local user %s", user.id)
        return UserSummary.from_user(user)

    async def login_local(self, email: str, password: str) -> SessionResult:
        user = self._users.get_by_email_and_provider(email, AuthProvider.LOCAL)

        password_hash = user.password_hash if user else None
        if not await self._passwords.verify(password, password_hash) or user is None:
            logger.warning("Failed local login")
            raise InvalidCredentialsError()

        logger.info("User %s logged in", user.id)
        return self._start_session(user)

    async def login_federated(self, assertion: str) -> SessionResult:
        identity = await self._federated.verify(assertion)

        provider = PROVIDER_MAP.get(identity.provider)
        if provider is None:
            logger.warning("Rejected federated login from provider %r", identity.provider)
            raise UnsupportedProviderError(identity.provider)

        user = self._users.get_by_external_id(identity.external_id)
        if user is None:
            user = self._create_federated_user(identity, provider)
        elif not user.username and identity.display_name:
            updated = self._users.update(user.id, {"username": identity.display_name})
            if updated is None:
                raise UserNotFoundError(user.id)
            user = updated

        logger.info("User %s logged in with %s", user.id, provider.value)
        return self._start_session(user)

    async def get_profile(self, user_id: str) -> Profile:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return Profile.from_user(user)

    async def update_profile(self, user_id: str, patch: ProfileUpdateRequest) -> Profile:
        user = self._users.get_by_id(user_id)
        if user is None or not user.is_local:
            raise UserNotFoundError(user_id)

        changes: dict[str, str] = {}

        if patch.changes_password:
            if not await self._passwords.verify(patch.old_password, user.password_hash):
                raise InvalidCredentialsError("Old password is incorrect")
            changes["password_hash"] = await self._passwords.hash(patch.new_password)

        if patch.username is not None and patch.username != user.username:
            changes["username"] = patch.username

        if changes:
            user = self._users.update(user_id, changes)
            if user is None:
                raise UserNotFoundError(user_id)
            logger.info("Updated profile of user %s (%s)", user_id, ", ".join(sorted(changes)))

        return Profile.from_user(user)

    async def search_users(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None,
    ) -> list[UserSearchItem]:
        username = username.strip() if username else None
        email = email.strip() if email else None
        if not username and not email:
            raise InvalidSearchError()
        return self._users.search(username=username, email=email)

    def _create_federated_user(
        self,
        identity: FederatedIdentity,
        provider: AuthProvider,
    ) -> User:
        email = identity.email or f"{identity.external_id}@{PLACEHOLDER_EMAIL_DOMAIN}"
        try:
            user = self._users.create({
                "username": identity.display_name or DEFAULT_USERNAME,
                "email": email,
                "auth_provider": provider.value,
                "external_id": identity.external_id,
            })
        except DuplicateRecordError:
            raise UserAlreadyExistsError(email, provider.value)

        logger.info("Created %s user %s", provider.value, user.id)
        return user

    def _start_session(self, user: User) -> SessionResult:
        return SessionResult(
            token=self._tokens.issue(user),
            user=UserSummary.from_user(user),
        )
