#!/usr/bin/env python3
"""
Service Logger Setup

Configures the standard ``logging`` hierarchy once per microservice using
``LoggingConfig``. Modules keep using ``logging.getLogger(__name__)``.

Usage:
    from core.logger import setup_service_logger
    logger = setup_service_logger("order_service")
"""
import logging
import sys
from typing import Optional

from .config import get_settings

_configured = False


def setup_service_logger(service_name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Configure root handlers and return the service logger.

    Args:
        service_name: Logger name for the service
        level: Overrides LOG_LEVEL when given

    Returns:
        Logger named after the service
    """
    global _configured

    logging_config = get_settings().logging
    log_level = (level or logging_config.log_level).upper()

    if not _configured:
        formatter = logging.Formatter(logging_config.log_format)
        root = logging.getLogger()
        root.setLevel(log_level)

        if logging_config.enable_console:
            console = logging.StreamHandler(sys.stdout)
            console.setFormatter(formatter)
            root.addHandler(console)

        if logging_config.log_file:
            file_handler = logging.FileHandler(logging_config.log_file)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

        # minio transport (urllib3) is chatty at DEBUG
        logging.getLogger("asyncio").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        _configured = True

    service_logger = logging.getLogger(service_name)
    service_logger.setLevel(log_level)
    return service_logger
