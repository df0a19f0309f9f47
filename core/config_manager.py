#!/usr/bin/env python3
"""
Configuration Manager

Per-service entry point into the modular configuration in ``core.config``.

Usage:
    from core.config_manager import ConfigManager

    config_manager = ConfigManager("order_service")
    config = config_manager.get_service_config()
    infra = config_manager.get_infra_config()
"""
import logging
from typing import Optional

from .config import InfraConfig, LoggingConfig, ServiceConfig, get_settings

logger = logging.getLogger(__name__)


class ConfigManager:
    """Configuration access for one microservice"""

    def __init__(self, service_name: str):
        self.service_name = service_name
        self._service_config: Optional[ServiceConfig] = None

    def get_service_config(self) -> ServiceConfig:
        """HTTP settings of this service (loaded once)"""
        if self._service_config is None:
            self._service_config = ServiceConfig.from_env(self.service_name)
        return self._service_config

    def get_infra_config(self) -> InfraConfig:
        return get_settings().infrastructure

    def get_logging_config(self) -> LoggingConfig:
        return get_settings().logging

    def print_config_summary(self, show_secrets: bool = False):
        """Log the effective configuration of this service"""
        service = self.get_service_config()
        infra = self.get_infra_config()
        secret = infra.postgres_password if show_secrets else "***"
        minio_secret = infra.minio_secret_key if show_secrets else "***"

        logger.info(f"=== {self.service_name} configuration ===")
        logger.info(f"  environment: {get_settings().environment}")
        logger.info(f"  listen: {service.service_host}:{service.service_port} (debug={service.debug})")
        logger.info(
            f"  postgres: {infra.postgres_user}:{secret}@{infra.postgres_host}:"
            f"{infra.postgres_port}/{infra.postgres_db}"
        )
        logger.info(
            f"  minio: {infra.minio_endpoint} bucket={infra.minio_bucket} "
            f"key={infra.minio_access_key}:{minio_secret}"
        )
