"""Tests for account API endpoints."""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_account_service, get_token_issuer
from modules.accounts.exceptions import (
    InvalidCredentialsError,
    InvalidSearchError,
    InvalidTokenError,
    UnsupportedProviderError,
    UserAlreadyExistsError,
)
from modules.accounts.models import (
    AuthProvider,
    Profile,
    ProfileUpdateRequest,
    SessionResult,
    UserSearchItem,
    UserSummary,
)
from modules.accounts.tokens import SessionTokenIssuer
from tests.conftest import FIXED_TIME, OWNER_ID, TEST_JWT_SECRET, create_test_token, make_user


@pytest.fixture
def mock_service():
    return AsyncMock()


@pytest.fixture
def app(mock_service):
    app = create_app()
    app.dependency_overrides[get_account_service] = lambda: mock_service
    app.dependency_overrides[get_token_issuer] = lambda: SessionTokenIssuer(secret=TEST_JWT_SECRET)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def summary() -> UserSummary:
    return UserSummary.from_user(make_user())


class TestRegister:
    def test_register(self, client, mock_service, summary):
        mock_service.register.return_value = summary

        response = client.post(
            "/api/users",
            json={"username": "owner", "email": "owner@example.com", "password": "s3cret"},
        )

        assert response.status_code == 201
        assert response.json()["id"] == OWNER_ID
        assert "password" not in response.text
        mock_service.register.assert_called_once_with("owner", "owner@example.com", "s3cret")

    def test_duplicate(self, client, mock_service):
        mock_service.register.side_effect = UserAlreadyExistsError("owner@example.com", "local")

        response = client.post(
            "/api/users",
            json={"username": "owner", "email": "owner@example.com", "password": "s3cret"},
        )

        assert response.status_code == 409
        assert response.json() == {
            "title": "Conflict",
            "message": "User already exists with this email",
            "code": "USER_ALREADY_EXISTS",
        }

    def test_invalid_email(self, client, mock_service):
        response = client.post(
            "/api/users",
            json={"username": "owner", "email": "nope", "password": "s3cret"},
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "email"
        mock_service.register.assert_not_called()


class TestLogin:
    def test_login_sets_cookie(self, client, mock_service, summary):
        mock_service.login_local.return_value = SessionResult(token="session-token", user=summary)

        response = client.post(
            "/api/sessions",
            json={"email": "owner@example.com", "password": "s3cret"},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        assert response.json()["user"]["email"] == "owner@example.com"
        assert "token" not in response.json()
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("token=session-token")
        assert "HttpOnly" in cookie
        assert "Max-Age=86400" in cookie
        assert "SameSite=lax" in cookie

    def test_invalid_credentials(self, client, mock_service):
        mock_service.login_local.side_effect = InvalidCredentialsError()

        response = client.post(
            "/api/sessions",
            json={"email": "owner@example.com", "password": "wrong"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"
        assert "set-cookie" not in response.headers

    def test_federated_login(self, client, mock_service):
        user = make_user(auth_provider=AuthProvider.GOOGLE, external_id="uid", username="Alice")
        mock_service.login_federated.return_value = SessionResult(
            token="session-token", user=UserSummary.from_user(user)
        )

        response = client.post("/api/sessions/federated", json={"id_token": "firebase-id-token"})

        assert response.status_code == 200
        assert response.json()["user"]["auth_provider"] == "google"
        assert response.headers["set-cookie"].startswith("token=session-token")
        mock_service.login_federated.assert_called_once_with("firebase-id-token")

    def test_federated_unsupported_provider(self, client, mock_service):
        mock_service.login_federated.side_effect = UnsupportedProviderError("twitter.com")

        response = client.post("/api/sessions/federated", json={"id_token": "t"})

        assert response.status_code == 400

    def test_federated_invalid_token(self, client, mock_service):
        mock_service.login_federated.side_effect = InvalidTokenError("Invalid identity token")

        response = client.post("/api/sessions/federated", json={"id_token": "t"})

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_federated_missing_token(self, client, mock_service):
        response = client.post("/api/sessions/federated", json={})

        assert response.status_code == 400
        mock_service.login_federated.assert_not_called()


class TestLogout:
    def test_logout_clears_cookie(self, client, auth_headers):
        response = client.delete("/api/sessions", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Logout successful"}
        cookie = response.headers["set-cookie"]
        assert cookie.startswith('token=""') or "Max-Age=0" in cookie

    def test_logout_requires_session(self, client):
        response = client.delete("/api/sessions")
        assert response.status_code == 401


class TestProfile:
    def test_get_profile(self, client, mock_service, auth_headers):
        mock_service.get_profile.return_value = Profile.from_user(make_user())

        response = client.get("/api/profile", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["username"] == "owner"
        mock_service.get_profile.assert_called_once_with(OWNER_ID)

    def test_update_profile(self, client, mock_service, auth_headers):
        mock_service.update_profile.return_value = Profile.from_user(make_user(username="renamed"))

        response = client.put("/api/profile", json={"username": "renamed"}, headers=auth_headers)

        assert response.status_code == 200
        mock_service.update_profile.assert_called_once_with(
            OWNER_ID, ProfileUpdateRequest(username="renamed")
        )

    def test_update_email_rejected(self, client, mock_service, auth_headers):
        response = client.put("/api/profile", json={"email": "new@example.com"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Email cannot be updated"
        mock_service.update_profile.assert_not_called()

    def test_update_empty_body_rejected(self, client, mock_service, auth_headers):
        response = client.put("/api/profile", json={}, headers=auth_headers)

        assert response.status_code == 400
        mock_service.update_profile.assert_not_called()

    def test_update_half_password_pair_rejected(self, client, mock_service, auth_headers):
        response = client.put("/api/profile", json={"new_password": "x"}, headers=auth_headers)

        assert response.status_code == 400
        assert "together" in response.json()["message"]


class TestSearchUsers:
    def test_search(self, client, mock_service, auth_headers):
        mock_service.search_users.return_value = [
            UserSearchItem(
                id=OWNER_ID,
                username="owner",
                email="owner@example.com",
                created_at=FIXED_TIME,
                updated_at=FIXED_TIME,
            )
        ]

        response = client.get("/api/users/search", params={"username": "own"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()[0]["id"] == OWNER_ID
        mock_service.search_users.assert_called_once_with(username="own", email=None)

    def test_search_without_criteria(self, client, mock_service, auth_headers):
        mock_service.search_users.side_effect = InvalidSearchError()

        response = client.get("/api/users/search", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_SEARCH"

    def test_search_requires_session(self, client):
        response = client.get("/api/users/search", params={"username": "own"})
        assert response.status_code == 401

    def test_search_with_federated_session(self, client, mock_service):
        mock_service.search_users.return_value = []
        token = create_test_token(auth_provider="github")

        response = client.get(
            "/api/users/search",
            params={"email": "x"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 200
