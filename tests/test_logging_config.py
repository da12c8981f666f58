"""Tests for logging setup."""

import logging

from app.logging_config import configure_logging


class TestConfigureLogging:
    def test_explicit_level(self):
        configure_logging("debug")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        configure_logging("INFO")

    def test_settings_level(self):
        configure_logging()
        assert logging.getLogger().level == logging.INFO
