#!/usr/bin/env python3
"""
Core Module for the Storefront Microservices

Shared infrastructure used by every microservice in this repository.

COMPONENTS:
    - config/: Modular dataclass configuration loaded from the environment
    - config_manager.py: Per-service access to the configuration
    - logger.py: Logging setup for service entry points
    - postgres_client.py: Pooled asyncpg client with scoped transactions
    - minio_client.py: MinIO object storage for uploaded images

USAGE:
    from core.config_manager import ConfigManager
    from core.postgres_client import PostgresClient

    config = ConfigManager("catalog_service")
    db = PostgresClient("catalog_service", config.get_infra_config())
"""

from .config_manager import ConfigManager

__all__ = [
    "ConfigManager",
]

__version__ = "1.0.0"
