"""
Shared Test Fixtures

Centralized factories and generators used across all test layers.

Structure:
    - common.py: Base ID generators, timestamps
    - generators.py: Random data generators
    - {service}_fixtures.py: Per-service factories
"""

# Common utilities
from .common import (
    make_id,
    make_timestamp,
    make_image_bytes,
)

# Random generators
from .generators import (
    random_string,
    random_phone,
    random_price,
)

# Catalog service fixtures
from .catalog_fixtures import (
    make_garment,
    make_garment_create_request,
    make_size_entries,
    make_image_file,
    make_image_files,
)

# Order service fixtures
from .order_fixtures import (
    make_line_item,
    make_order_create_request,
    make_order_create_payload,
    make_order,
)

__all__ = [
    "make_id",
    "make_timestamp",
    "make_image_bytes",
    "random_string",
    "random_phone",
    "random_price",
    "make_garment",
    "make_garment_create_request",
    "make_size_entries",
    "make_image_file",
    "make_image_files",
    "make_line_item",
    "make_order_create_request",
    "make_order_create_payload",
    "make_order",
]
