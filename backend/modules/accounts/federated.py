"""
Federated identity verification.

Google and GitHub sign-in happen in the browser through Firebase
Authentication. The client sends us the resulting Firebase ID token,
which is an RS256 JWT signed with Google's published keys. We verify it
with PyJWT and extract the stable Firebase uid, email, display name and
the provider the user signed in with.
"""

import asyncio
import logging
from typing import Optional

import jwt
from jwt import PyJWKClient, PyJWKClientConnectionError

from .exceptions import IdentityProviderError, InvalidTokenError, MissingTokenError
from .interfaces import IFederatedIdentityVerifier
from .models import FederatedIdentity

logger = logging.getLogger(__name__)

FIREBASE_ISSUER_PREFIX = "https://securetoken.google.com/"


class FirebaseIdentityVerifier(IFederatedIdentityVerifier):
    """Verifies Firebase ID tokens against Google's signing keys."""

    def __init__(
        self,
        project_id: str,
        jwks_url: str,
        jwks_client: Optional[PyJWKClient] = None,
    ):
        self._project_id = project_id
        self._jwks_client = jwks_client or PyJWKClient(jwks_url)

    async def verify(self, assertion: str) -> FederatedIdentity:
        if not assertion:
            raise MissingTokenError("Identity token is required")
        if not self._project_id:
            raise InvalidTokenError("Federated login not configured")

        # Key lookup may hit the network
        return await asyncio.to_thread(self._verify, assertion)

    def _verify(self, assertion: str) -> FederatedIdentity:
        try:
            signing_key = self._jwks_client.get_signing_key_from_jwt(assertion)
            claims = jwt.decode(
                assertion,
                signing_key.key,
                algorithms=["RS256"],
                audience=self._project_id,
                issuer=FIREBASE_ISSUER_PREFIX + self._project_id,
                options={"require": ["sub", "exp", "iat"]},
            )
        except PyJWKClientConnectionError as e:
            logger.warning("Could not fetch identity provider keys: %s", e)
            raise IdentityProviderError(str(e))
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError("Identity token has expired")
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"Invalid identity token: {e}")

        firebase_claims = claims.get("firebase") or {}
        return FederatedIdentity(
            external_id=claims["sub"],
            email=claims.get("email"),
            provider=firebase_claims.get("sign_in_provider", ""),
            display_name=claims.get("name"),
        )
