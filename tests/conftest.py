"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers (Top-Down TDD):
    - component/  : Component tests (services and routes, mocked dependencies)
    - unit/       : Unit tests (pure functions and models, no I/O)
"""
import os
import sys
from typing import Any, Dict, List

import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

# Import shared fixtures from tests/fixtures
from tests.fixtures import (
    # Catalog fixtures
    make_garment,
    # Order fixtures
    make_order_create_request,
)


# =============================================================================
# Test Configuration
# =============================================================================

class TestConfig:
    """Centralized test configuration"""
    __test__ = False

    # Service URLs (port registry)
    SERVICES = {
        "order_service": 8210,
        "catalog_service": 8260,
    }

    BASE_URL = os.getenv("TEST_BASE_URL", "http://localhost")

    @classmethod
    def get_service_url(cls, service_name: str) -> str:
        """Get full URL for a service"""
        port = cls.SERVICES.get(service_name)
        if not port:
            raise ValueError(f"Unknown service: {service_name}")
        return f"{cls.BASE_URL}:{port}"


@pytest.fixture(scope="session")
def test_config() -> TestConfig:
    """Provide test configuration"""
    return TestConfig()


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def sample_garment():
    """Garment with 10 units of declared stock"""
    return make_garment(stock=10)


@pytest.fixture
def sample_order_request():
    """Two-line order request whose total matches its lines"""
    return make_order_create_request()


# =============================================================================
# Assertion Helpers
# =============================================================================

class AssertionHelpers:
    """Custom assertion helpers for tests"""

    @staticmethod
    def assert_http_success(response, expected_status: int = 200):
        """Assert HTTP response is successful"""
        assert response.status_code == expected_status, \
            f"Expected {expected_status}, got {response.status_code}: {response.text}"

    @staticmethod
    def assert_has_fields(data: Dict[str, Any], fields: List[str]):
        """Assert dict has required fields"""
        missing = [f for f in fields if f not in data]
        assert not missing, f"Missing fields: {missing}"


@pytest.fixture
def assertions() -> AssertionHelpers:
    """Provide assertion helpers"""
    return AssertionHelpers()


# =============================================================================
# Skip Markers Based on Environment
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "component: Component tests")
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "requires_db: needs a live PostgreSQL")


def pytest_collection_modifyitems(config, items):
    """Modify test collection based on markers and environment"""
    skip_db = pytest.mark.skip(reason="PostgreSQL not available")

    for item in items:
        # Skip DB tests unless a database is configured
        if "requires_db" in item.keywords and not os.getenv("POSTGRES_HOST"):
            item.add_marker(skip_db)
