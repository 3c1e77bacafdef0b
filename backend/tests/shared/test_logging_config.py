"""Tests for shared/logging_config.py."""

import logging

import pytest
from rich.logging import RichHandler

from shared import logging_config


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    logging_config._configured = False
    yield root
    root.handlers = saved_handlers
    root.setLevel(saved_level)
    logging_config._configured = False


class TestConfigureLogging:
    def test_installs_rich_handler(self, clean_root_logger):
        logging_config.configure_logging("debug")

        assert any(isinstance(h, RichHandler) for h in clean_root_logger.handlers)
        assert clean_root_logger.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_idempotent(self, clean_root_logger):
        logging_config.configure_logging("INFO")
        logging_config.configure_logging("WARNING")

        assert sum(isinstance(h, RichHandler) for h in clean_root_logger.handlers) == 1
        assert clean_root_logger.level == logging.WARNING
