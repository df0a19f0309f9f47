"""
Catalog Service Fixtures

Factories for garments, size allocations and color variant uploads.
"""
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from microservices.catalog_service.models import (
    Garment, GarmentCreateRequest, ImageFile, SizeStockEntry,
)

from .common import make_id, make_image_bytes, make_timestamp


def make_garment(
    garment_id: Optional[int] = None,
    name: str = "Classic Tee",
    price: Decimal = Decimal("19.90"),
    stock: int = 10,
    category_id: Optional[int] = 1,
    image_url: Optional[str] = None,
) -> Garment:
    """Create a Garment model"""
    return Garment(
        id=garment_id if garment_id is not None else make_id(),
        name=name,
        description=f"{name} description",
        price=price,
        stock=stock,
        image_url=image_url,
        category_id=category_id,
        created_at=make_timestamp(),
    )


def make_garment_create_request(**overrides) -> GarmentCreateRequest:
    """Create a GarmentCreateRequest"""
    data = {
        "name": "Classic Tee",
        "description": "Cotton t-shirt",
        "price": Decimal("19.90"),
        "stock": 10,
        "category_id": 1,
    }
    data.update(overrides)
    return GarmentCreateRequest(**data)


def make_size_entries(*pairs: Tuple[int, int]) -> List[SizeStockEntry]:
    """``make_size_entries((1, 3), (2, 3))`` -> [(size 1, stock 3), (size 2, stock 3)]"""
    return [SizeStockEntry(size_id=size_id, stock=stock) for size_id, stock in pairs]


def make_image_file(filename: str = "tee.png", content: Optional[bytes] = None) -> ImageFile:
    """Create an in-memory image upload"""
    return ImageFile(
        filename=filename,
        content=content if content is not None else make_image_bytes(filename),
        content_type="image/png",
    )


def make_image_files(filenames: Sequence[str]) -> List[ImageFile]:
    return [make_image_file(name) for name in filenames]
