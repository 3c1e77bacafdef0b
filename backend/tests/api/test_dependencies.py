"""Tests for the service container."""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest

from api.dependencies import ServiceContainer, get_container, reset_container
from modules.accounts.service import AccountService
from modules.boards.service import BoardService
from shared.config import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "supabase_url": "https://test.supabase.co",
        "supabase_service_role_key": "service-key",
        "jwt_secret": "secret",
        "session_ttl_hours": 12,
        "bcrypt_rounds": 4,
    }
    values.update(overrides)
    return Settings(**values)


class TestServiceContainer:

    @patch("shared.database.create_client")
    def test_builds_services(self, mock_create):
        """Services are wired from the container's settings."""
        mock_create.return_value = MagicMock()
        container = ServiceContainer(make_settings())

        assert isinstance(container.accounts, AccountService)
        assert isinstance(container.boards, BoardService)
        assert container.token_issuer.ttl == timedelta(hours=12)
        mock_create.assert_called_once_with("https://test.supabase.co", "service-key")

    @patch("shared.database.create_client")
    def test_services_are_cached(self, mock_create):
        mock_create.return_value = MagicMock()
        container = ServiceContainer(make_settings())

        assert container.boards is container.boards
        assert container.access_control is container.access_control
        assert container.board_repository is container.board_repository

    @patch("shared.database.create_client")
    def test_reset(self, mock_create):
        mock_create.return_value = MagicMock()
        container = ServiceContainer(make_settings())
        first = container.accounts

        container.reset()

        assert container.accounts is not first

    def test_initialize_fails_without_store_config(self):
        """Missing Supabase settings surface at startup."""
        container = ServiceContainer(make_settings(supabase_url=""))

        with pytest.raises(RuntimeError, match="configuration missing"):
            container.initialize()


class TestGetContainer:

    def test_singleton(self):
        assert get_container() is get_container()

    def test_reset_container(self):
        first = get_container()
        reset_container()
        assert get_container() is not first
