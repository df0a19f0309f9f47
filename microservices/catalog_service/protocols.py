"""
Catalog Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

# Import only models (no I/O dependencies)
from .models import (
    AssignedSize,
    Category,
    Color,
    ColorVariant,
    Garment,
    Size,
    SizeStockEntry,
)


# ============================================================================
# Custom Exceptions - defined here to avoid importing repository
# ============================================================================

class CatalogServiceError(Exception):
    """Base exception for catalog service errors"""
    pass


class CatalogValidationError(CatalogServiceError):
    """Malformed or missing input; raised before any store access"""
    pass


class GarmentNotFoundError(CatalogServiceError):
    """Garment not found error"""
    pass


# ============================================================================
# Repository Protocol
# ============================================================================

@runtime_checkable
class CatalogRepositoryProtocol(Protocol):
    """
    Interface for Catalog Repository.

    Implementations must provide these methods.
    Used for dependency injection to enable testing.
    """

    # ==================== Lookups ====================

    async def list_categories(self) -> List[Category]:
        """List garment categories"""
        ...

    async def list_sizes(self) -> List[Size]:
        """List sizes"""
        ...

    async def list_colors(self) -> List[Color]:
        """List colors"""
        ...

    # ==================== Garments ====================

    async def create_garment(self, data: Dict[str, Any]) -> Garment:
        """Insert a garment"""
        ...

    async def get_garment(self, garment_id: int) -> Optional[Garment]:
        """Get garment by ID"""
        ...

    async def list_garments(
        self,
        size_id: Optional[int] = None,
        max_price: Optional[Decimal] = None,
        category_id: Optional[int] = None,
    ) -> List[Garment]:
        """List garments, filters ANDed"""
        ...

    async def update_garment(self, garment_id: int, data: Dict[str, Any]) -> Optional[Garment]:
        """Replace a garment's editable fields"""
        ...

    async def delete_garment(self, garment_id: int) -> bool:
        """Delete a garment"""
        ...

    # ==================== Size Allocations ====================

    async def upsert_size_allocations(self, garment_id: int, entries: List[SizeStockEntry]) -> int:
        """Insert or overwrite (garment, size) allocations"""
        ...

    async def get_size_allocations(self, garment_id: int) -> List[AssignedSize]:
        """Allocations of a garment joined with size name/description"""
        ...

    # ==================== Color Variants ====================

    async def add_color_variant(self, garment_id: int, color_id: int, image_url: str) -> ColorVariant:
        """Persist a (garment, color, image) association"""
        ...

    async def list_color_variants(self, garment_id: int) -> List[ColorVariant]:
        """Color variants of a garment"""
        ...

    async def check_connection(self) -> Optional[Dict[str, Any]]:
        """Database round-trip"""
        ...


# ============================================================================
# Object Storage Protocol
# ============================================================================

@runtime_checkable
class ObjectStorageProtocol(Protocol):
    """Interface for the image object store - no I/O imports"""

    async def upload(self, object_key: str, data: bytes, content_type: Optional[str] = None) -> str:
        """Store bytes under a key"""
        ...

    def get_public_url(self, object_key: str) -> str:
        """Public URL of a stored object"""
        ...
