"""Tests for session token issuing and validation."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from modules.accounts.exceptions import ExpiredTokenError, InvalidTokenError, MissingTokenError
from modules.accounts.models import AuthProvider
from modules.accounts.tokens import SessionTokenIssuer
from shared.models import AuthenticatedUser
from tests.conftest import OWNER_ID, TEST_JWT_SECRET, create_test_token, make_user


class TestIssue:
    def test_round_trip(self, token_issuer):
        """An issued token verifies to the same identity."""
        user = make_user(auth_provider=AuthProvider.GITHUB, external_id="gh-1")

        session = token_issuer.verify(token_issuer.issue(user))

        assert isinstance(session, AuthenticatedUser)
        assert session.id == OWNER_ID
        assert session.email == "owner@example.com"
        assert session.auth_provider == "github"

    def test_expires_after_ttl(self, token_issuer):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        token = token_issuer.issue(make_user(), now=now)

        payload = jwt.decode(token, TEST_JWT_SECRET, algorithms=["HS256"], options={"verify_exp": False})

        assert payload["exp"] - payload["iat"] == 24 * 3600
        assert token_issuer.ttl == timedelta(hours=24)

    def test_requires_secret(self):
        with pytest.raises(InvalidTokenError, match="not configured"):
            SessionTokenIssuer(secret="").issue(make_user())


class TestVerify:
    def test_missing_token(self, token_issuer):
        with pytest.raises(MissingTokenError):
            token_issuer.verify(None)

    def test_expired_token(self, token_issuer):
        with pytest.raises(ExpiredTokenError):
            token_issuer.verify(create_test_token(expired=True))

    def test_wrong_secret(self, token_issuer):
        with pytest.raises(InvalidTokenError):
            token_issuer.verify(create_test_token(secret="another-secret"))

    def test_garbage(self, token_issuer):
        with pytest.raises(InvalidTokenError):
            token_issuer.verify("not.a.jwt")

    def test_unexpected_claims(self, token_issuer):
        """Tokens signed with our secret but lacking our claims are rejected."""
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": OWNER_ID, "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError, match="unexpected claims"):
            token_issuer.verify(token)

    def test_expiry_exposed(self, token_issuer):
        session = token_issuer.verify(create_test_token())
        assert session.expires_at > datetime.now(timezone.utc)
