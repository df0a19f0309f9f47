"""
Catalog Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules.

Usage:
    from .factory import create_catalog_service
    service = create_catalog_service(config)
"""
from typing import Optional

from core.config_manager import ConfigManager

from .catalog_service import CatalogService


def create_catalog_service(
    config: Optional[ConfigManager] = None,
    db=None,
    storage=None,
) -> CatalogService:
    """
    Create CatalogService with real dependencies.

    This function imports the real repository and object storage (which have
    I/O dependencies). Use this in production, NOT in tests.

    Args:
        config: Configuration manager
        db: PostgresClient to share (a new one is created when omitted)
        storage: Object storage client (MinIO when omitted)

    Returns:
        Configured CatalogService instance
    """
    # Import real dependencies here (not at module level)
    from core.minio_client import ObjectStorageClient
    from core.postgres_client import PostgresClient

    from .catalog_repository import CatalogRepository

    if config is None:
        config = ConfigManager("catalog_service")
    infra = config.get_infra_config()

    if db is None:
        db = PostgresClient("catalog_service", infra)
    if storage is None:
        storage = ObjectStorageClient.from_config(infra)

    repository = CatalogRepository(db=db, config=config)

    return CatalogService(
        repository=repository,
        storage=storage,
    )
