"""
Accounts module exceptions.

These exceptions are raised by the accounts module and are turned into
HTTP responses by the API error handlers.
"""

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """
    Raised when a local login or password check fails.

    The message is the same whether the email is unknown or the password
    is wrong.
    """

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class UserNotFoundError(NotFoundError):
    """Raised when a user doesn't exist."""

    def __init__(self, user_id: str, message: str = "User not found"):
        super().__init__(
            message,
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class UserAlreadyExistsError(ConflictError):
    """Raised when an account with the same email and provider exists."""

    def __init__(self, email: str, auth_provider: str):
        super().__init__(
            "User already exists with this email",
            code="USER_ALREADY_EXISTS",
            details={"email": email, "auth_provider": auth_provider},
        )


class UnsupportedProviderError(ValidationError):
    """Raised when a federated assertion comes from a provider we don't accept."""

    def __init__(self, provider: str):
        super().__init__(
            "Unsupported auth provider",
            code="UNSUPPORTED_PROVIDER",
            details={"provider": provider},
        )


class InvalidSearchError(ValidationError):
    """Raised when a user search has no criteria."""

    def __init__(self):
        super().__init__(
            "Please include a non-empty `username` or `email` query parameter",
            code="INVALID_SEARCH",
        )


class IdentityProviderError(ExternalServiceError):
    """Raised when the identity provider's signing keys can't be fetched."""

    def __init__(self, reason: str):
        super().__init__(
            f"Could not verify identity with the provider: {reason}",
            service="firebase",
            code="IDENTITY_PROVIDER_UNAVAILABLE",
        )
