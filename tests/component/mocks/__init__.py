"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (database, object storage).
"""

from .db_mock import MockPostgresClient
from .catalog_mocks import MockCatalogRepository, MockObjectStorage
from .order_mocks import MockOrderRepository, MockOrderTransaction

__all__ = [
    'MockPostgresClient',
    'MockCatalogRepository',
    'MockObjectStorage',
    'MockOrderRepository',
    'MockOrderTransaction',
]
