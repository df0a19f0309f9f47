"""
Catalog Service Data Models

Pydantic models for garments, per-size stock allocation and color variants.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from core.api_model import CamelModel


class StockStatus(str, Enum):
    """Outcome of a stock allocation check"""
    AVAILABLE = "available"
    FULLY_ALLOCATED = "fully_allocated"


# Lookup Models

class Category(CamelModel):
    """Garment category"""
    id: int
    name: str
    description: Optional[str] = None


class Size(CamelModel):
    """Size lookup (S, M, L, ...)"""
    id: int
    name: str
    description: Optional[str] = None


class Color(CamelModel):
    """Color lookup"""
    id: int
    name: str
    hex_code: Optional[str] = None


# Core Catalog Models

class Garment(CamelModel):
    """Catalog item; ``stock`` is the ceiling for all size allocations"""
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    stock: int = Field(..., ge=0)
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    created_at: Optional[datetime] = None


class AssignedSize(CamelModel):
    """Quantity of a garment committed to one size"""
    size_id: int
    size_name: str
    size_description: Optional[str] = None
    stock: int


class StockSummary(CamelModel):
    """Allocation ledger view of one garment"""
    garment_id: int
    stock_total: int
    stock_assigned: int
    stock_available: int
    assigned_sizes: List[AssignedSize] = Field(default_factory=list)

    @property
    def status(self) -> StockStatus:
        if self.stock_available <= 0:
            return StockStatus.FULLY_ALLOCATED
        return StockStatus.AVAILABLE

    @property
    def fully_allocated(self) -> bool:
        return self.status == StockStatus.FULLY_ALLOCATED


class ColorVariant(CamelModel):
    """Color + image pairing attached to a garment"""
    id: int
    garment_id: int
    color_id: int
    color_name: Optional[str] = None
    image_url: str


class ColorVariantRecord(CamelModel):
    """One successfully registered (color, image) pair"""
    color_id: int
    image_url: str


class ColorRegistrationResult(CamelModel):
    """Best-effort registration outcome; only succeeded pairs are in ``records``"""
    records: List[ColorVariantRecord] = Field(default_factory=list)
    failed_color_ids: List[int] = Field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.failed_color_ids)


class ImageFile(CamelModel):
    """Uploaded image held in memory"""
    filename: str
    content: bytes
    content_type: Optional[str] = None


# Request Models

class GarmentCreateRequest(CamelModel):
    """Create garment request"""
    name: str = Field(..., min_length=1, description="Garment name")
    description: Optional[str] = Field(None, description="Garment description")
    price: Decimal = Field(..., ge=0, description="Unit price")
    stock: int = Field(..., ge=0, description="Declared total stock")
    image_url: Optional[str] = Field(None, description="Primary image URL")
    category_id: Optional[int] = Field(None, description="Category reference")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('name must not be blank')
        return v.strip()


class GarmentUpdateRequest(GarmentCreateRequest):
    """Full replacement of a garment's editable fields"""
    pass


class GarmentFilter(CamelModel):
    """Garment listing filters, all optional and ANDed"""
    size_id: Optional[int] = None
    max_price: Optional[Decimal] = None
    category_id: Optional[int] = None


class SizeStockEntry(CamelModel):
    """One (size, quantity) pair of a size registration"""
    size_id: int
    stock: int


class SizeRegistrationRequest(CamelModel):
    """Register per-size stock for a garment"""
    garment_id: Optional[int] = None
    sizes: List[SizeStockEntry] = Field(default_factory=list)


# Response Models

class MessageResponse(CamelModel):
    """Plain acknowledgement"""
    message: str


class ImageUploadResponse(CamelModel):
    """Public URL of an uploaded image"""
    url: str


class GarmentResponse(CamelModel):
    """Garment write acknowledgement"""
    message: str
    garment: Optional[Garment] = None


class StockDetailResponse(CamelModel):
    """Stock detail of a garment; ``error`` is set once fully allocated"""
    garment_id: int
    stock_total: int
    stock_assigned: int
    stock_available: int
    message: str
    assigned_sizes: List[AssignedSize] = Field(default_factory=list)
    error: Optional[str] = None


class ColorRegistrationResponse(CamelModel):
    """Color variant registration acknowledgement"""
    message: str
    records: List[ColorVariantRecord] = Field(default_factory=list)
    failed_color_ids: List[int] = Field(default_factory=list)
