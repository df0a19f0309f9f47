"""
Order Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules.

Usage:
    from .factory import create_order_service
    service = create_order_service(config, db)
"""
from typing import Optional

from core.config_manager import ConfigManager

from .order_service import OrderService


def create_order_service(
    config: Optional[ConfigManager] = None,
    db=None,
) -> OrderService:
    """
    Create OrderService with real dependencies.

    This function imports the real repository (which has I/O dependencies).
    Use this in production, NOT in tests.

    Args:
        config: Configuration manager
        db: PostgresClient to share (a new one is created when omitted)

    Returns:
        Configured OrderService instance
    """
    # Import real repository here (not at module level)
    from .order_repository import OrderRepository

    repository = OrderRepository(db=db, config=config)

    return OrderService(repository=repository)
