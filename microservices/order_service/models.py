"""
Order Service Data Models

Pydantic models for customer orders, order lines and order statuses.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from core.api_model import CamelModel

# Name of the status every new order starts in
INITIAL_STATUS_NAME = "new"


class Status(CamelModel):
    """Order lifecycle status (closed lookup set)"""
    id: int
    name: str


# Core Order Models

class OrderLine(CamelModel):
    """One garment + quantity entry of an order"""
    id: int
    garment_id: int
    garment_name: Optional[str] = None
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    garment_image: Optional[str] = None


class Order(CamelModel):
    """Order header with its line items nested in insertion order"""
    id: int
    customer_id: int
    customer_name: Optional[str] = None
    status_id: int
    status_name: Optional[str] = None
    payment_method_id: Optional[int] = None
    payment_method_name: Optional[str] = None
    address: Optional[str] = None
    coordinates: Optional[str] = None
    contact_number: Optional[str] = None
    total: Decimal
    created_at: datetime
    items: List[OrderLine] = Field(default_factory=list)


class OrderLineDraft(CamelModel):
    """Line item about to be persisted; subtotal is computed server-side"""
    garment_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


# Request Models

class LineItemRequest(CamelModel):
    """Line item as submitted by the client"""
    garment_id: int = Field(..., description="Garment ordered")
    quantity: int = Field(..., description="Units ordered")
    unit_price: Decimal = Field(..., description="Price per unit")


class OrderCreateRequest(CamelModel):
    """Create order request"""
    customer_id: int = Field(..., description="Customer placing the order")
    payment_method_id: int = Field(..., description="Payment method")
    address: str = Field(..., description="Delivery address")
    coordinates: Optional[str] = Field(None, description="Delivery geo-coordinates")
    contact_number: Optional[str] = Field(None, description="Contact phone number")
    total: Decimal = Field(..., description="Order total")
    line_items: List[LineItemRequest] = Field(default_factory=list, description="Ordered garments")


class StatusUpdateRequest(CamelModel):
    """Change order status request"""
    status_id: Optional[int] = Field(None, description="Target status")


class OrderFilter(CamelModel):
    """Order filtering parameters, all optional and ANDed"""
    customer_id: Optional[int] = None
    status_id: Optional[int] = None
    min_total: Optional[Decimal] = None
    max_total: Optional[Decimal] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None


# Response Models

class OrderCreatedResponse(CamelModel):
    """Order creation acknowledgement"""
    message: str
    order_id: int


class StatusUpdateResponse(CamelModel):
    """Status change acknowledgement"""
    message: str
    order_id: int
