"""
Component Test Layer Configuration (Layer 3)

Structure:
    tests/component/
    ├── tdd/         Service and route tests per microservice
    └── mocks/       Mock implementations

Usage:
    pytest tests/component -v
    pytest tests/component/tdd/order_service -v
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tests.component.mocks import (
    MockCatalogRepository,
    MockObjectStorage,
    MockOrderRepository,
    MockPostgresClient,
)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )


# =============================================================================
# Database Mocks
# =============================================================================

@pytest.fixture
def mock_db() -> MockPostgresClient:
    """Mock PostgreSQL client"""
    return MockPostgresClient()


# =============================================================================
# Repository / Storage Mocks
# =============================================================================

@pytest.fixture
def mock_catalog_repository() -> MockCatalogRepository:
    """Fresh in-memory catalog repository"""
    return MockCatalogRepository()


@pytest.fixture
def mock_storage() -> MockObjectStorage:
    """Object storage that records uploads"""
    return MockObjectStorage()


@pytest.fixture
def mock_order_repository() -> MockOrderRepository:
    """Fresh in-memory order repository with the default status set"""
    return MockOrderRepository()
