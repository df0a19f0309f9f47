"""
Unit Tests: Service logger setup
"""
import logging

import pytest

from core.logger import setup_service_logger

pytestmark = pytest.mark.unit


class TestSetupServiceLogger:

    def test_returns_named_logger(self):
        logger = setup_service_logger("order_service")

        assert logger.name == "order_service"

    def test_explicit_level_overrides_config(self):
        logger = setup_service_logger("catalog_service", level="warning")

        assert logger.level == logging.WARNING

    def test_root_handlers_configured_once(self):
        setup_service_logger("order_service")
        handler_count = len(logging.getLogger().handlers)

        setup_service_logger("catalog_service")

        assert len(logging.getLogger().handlers) == handler_count
