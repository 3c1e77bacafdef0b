"""
Session token issuing and validation.

Session tokens are HS256 JWTs signed with the server secret. They carry
the user id, email and auth provider and expire after a fixed lifetime.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.models import AuthenticatedUser

from .exceptions import ExpiredTokenError, InvalidTokenError, MissingTokenError
from .models import SessionClaims, User


class SessionTokenIssuer:
    """Issues and verifies signed, time-limited session tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user: User, now: Optional[datetime] = None) -> str:
        """Create a session token for a user."""
        if not self._secret:
            raise InvalidTokenError("Server authentication not configured")

        now = now or datetime.now(timezone.utc)
        payload = {
            "sub": user.id,
            "email": user.email,
            "auth_provider": user.auth_provider.value,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate a session token and return the session identity.

        Raises:
            MissingTokenError: If no token was provided
            ExpiredTokenError: If the token has expired
            InvalidTokenError: If the token is malformed or badly signed
        """
        if not token:
            raise MissingTokenError()

        if not self._secret:
            raise InvalidTokenError("Server authentication not configured")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
            claims = SessionClaims(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")
        except PydanticValidationError:
            raise InvalidTokenError("Invalid token: unexpected claims")

        return AuthenticatedUser(
            id=claims.sub,
            email=claims.email,
            auth_provider=claims.auth_provider.value,
            expires_at=datetime.fromtimestamp(claims.exp, tz=timezone.utc),
        )
