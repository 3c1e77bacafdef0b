"""
Accounts module data models.

These models define the user record shared by local and federated
accounts, the request bodies accepted by the account endpoints, and the
summaries returned to clients.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)


class AuthProvider(str, Enum):
    """How a user authenticates. Discriminates the User variant."""

    LOCAL = "local"
    GOOGLE = "google"
    GITHUB = "github"


FEDERATED_PROVIDERS = frozenset({AuthProvider.GOOGLE, AuthProvider.GITHUB})


class User(BaseModel):
    """
    A stored user record.

    Local users carry a password hash; federated users carry the stable
    id assigned by the identity provider. The two never mix.
    """

    id: str
    username: Optional[str] = None
    password_hash: Optional[str] = Field(default=None, exclude=True, repr=False)
    email: str
    auth_provider: AuthProvider
    external_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="after")
    def check_provider_fields(self) -> "User":
        if self.auth_provider == AuthProvider.LOCAL and self.external_id is not None:
            raise ValueError("local users cannot have an external id")
        if self.auth_provider in FEDERATED_PROVIDERS and self.password_hash is not None:
            raise ValueError("federated users cannot have a password")
        return self

    @property
    def is_local(self) -> bool:
        return self.auth_provider == AuthProvider.LOCAL


class UserSummary(BaseModel):
    """User data returned after registration and login. Never includes the password."""

    id: str
    email: str
    username: Optional[str] = None
    auth_provider: AuthProvider
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            email=user.email,
            username=user.username,
            auth_provider=user.auth_provider,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class SessionResult(BaseModel):
    """A freshly issued session token and the user it belongs to."""

    token: str
    user: UserSummary


class LoginResponse(BaseModel):
    """Login response body. The token itself travels in the session cookie."""

    message: str = "Login successful"
    user: UserSummary


class MessageResponse(BaseModel):
    message: str


class Profile(BaseModel):
    """
    Profile of the current user.

    The username is only reported for local accounts.
    """

    email: str
    auth_provider: AuthProvider
    username: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "Profile":
        return cls(
            email=user.email,
            auth_provider=user.auth_provider,
            username=user.username if user.is_local else None,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserSearchItem(BaseModel):
    """A user found by partial username or email."""

    id: str
    username: Optional[str] = None
    email: str
    created_at: datetime
    updated_at: datetime


class FederatedIdentity(BaseModel):
    """What the federated identity verifier extracts from a valid assertion."""

    external_id: str
    email: Optional[str] = None
    provider: str = Field(..., description="Raw sign-in provider, e.g. 'google.com'")
    display_name: Optional[str] = None


class SessionClaims(BaseModel):
    """Claims embedded in a session token."""

    sub: str = Field(..., description="User ID")
    email: str
    auth_provider: AuthProvider
    iat: int
    exp: int


# -----------------------------------------------------------------------------
# Request bodies
# -----------------------------------------------------------------------------


def _strip_required(value: str, field: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{field} is required")
    return value


class RegisterRequest(BaseModel):
    """Body of POST /api/users."""

    model_config = ConfigDict(extra="forbid")

    username: str
    email: EmailStr
    password: str

    @field_validator("username")
    @classmethod
    def username_required(cls, v: str) -> str:
        return _strip_required(v, "Username")

    @field_validator("password")
    @classmethod
    def password_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Password is required")
        return v


class LoginRequest(BaseModel):
    """Body of POST /api/sessions."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def password_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Password is required")
        return v


class FederatedLoginRequest(BaseModel):
    """Body of POST /api/sessions/federated."""

    model_config = ConfigDict(extra="forbid")

    id_token: str = Field(..., min_length=1, description="ID token from the identity provider")


class ProfileUpdateRequest(BaseModel):
    """
    Body of PUT /api/profile.

    Only username and the old/new password pair may change. The email is
    immutable and the two password fields must be sent together.
    """

    model_config = ConfigDict(extra="forbid")

    username: Optional[str] = None
    old_password: Optional[str] = None
    new_password: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def reject_email_and_empty(cls, data: Any) -> Any:
        if isinstance(data, dict):
            if not data:
                raise ValueError("Request body is empty")
            if "email" in data:
                raise ValueError("Email cannot be updated")
        return data

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _strip_required(v, "Username")

    @model_validator(mode="after")
    def passwords_together(self) -> "ProfileUpdateRequest":
        if (self.old_password is None) != (self.new_password is None):
            raise ValueError("Both old_password and new_password must be provided together")
        return self

    @property
    def changes_password(self) -> bool:
        return self.old_password is not None and self.new_password is not None
