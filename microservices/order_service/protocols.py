"""
Order Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from decimal import Decimal
from typing import Any, AsyncContextManager, Dict, List, Optional, Protocol, runtime_checkable

# Import only models (no I/O dependencies)
from .models import Order, OrderLineDraft, Status
from .order_query import OrderQueryBuilder


# ============================================================================
# Custom Exceptions - defined here to avoid importing repository
# ============================================================================

class OrderServiceError(Exception):
    """Base exception for order service errors"""
    pass


class OrderValidationError(OrderServiceError):
    """Malformed or missing input; raised before any store access"""
    pass


class InvalidStatusError(OrderValidationError):
    """Target status is not part of the closed status set"""
    pass


class OrderNotFoundError(OrderServiceError):
    """Order not found error"""
    pass


class OrderTransactionError(OrderServiceError):
    """Order creation rolled back; the store error is chained as __cause__"""
    pass


# ============================================================================
# Repository Protocols
# ============================================================================

@runtime_checkable
class OrderWriterProtocol(Protocol):
    """Writes that run inside one order transaction"""

    async def insert_order(
        self,
        customer_id: int,
        payment_method_id: int,
        address: str,
        coordinates: Optional[str],
        contact_number: Optional[str],
        total: Decimal,
    ) -> int:
        """Insert the order header in the initial status, returns its id"""
        ...

    async def insert_order_line(self, order_id: int, line: OrderLineDraft) -> int:
        """Insert one order line, returns its id"""
        ...


@runtime_checkable
class OrderRepositoryProtocol(Protocol):
    """
    Interface for Order Repository.

    Implementations must provide these methods.
    Used for dependency injection to enable testing.
    """

    def transaction(self) -> AsyncContextManager[OrderWriterProtocol]:
        """Scoped transaction: commit on clean exit, rollback on exception"""
        ...

    async def get_order(self, order_id: int) -> Optional[Order]:
        """Get order by ID with its items"""
        ...

    async def list_orders(self, query: OrderQueryBuilder) -> List[Order]:
        """List orders matching every predicate of the query, newest first"""
        ...

    async def get_status(self, status_id: int) -> Optional[Status]:
        """Get status by ID"""
        ...

    async def list_statuses(self) -> List[Status]:
        """The closed status set"""
        ...

    async def update_order_status(self, order_id: int, status_id: int) -> bool:
        """Set an order's status; False when the order does not exist"""
        ...

    async def check_connection(self) -> Optional[Dict[str, Any]]:
        """Database round-trip"""
        ...
