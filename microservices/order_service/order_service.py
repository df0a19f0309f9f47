"""
Order Service Business Logic

Business logic layer for order creation, order queries and status changes.
"""

from typing import Optional, List, Dict, Any, Sequence
from decimal import Decimal, ROUND_HALF_UP
import logging

from .models import (
    LineItemRequest, Order, OrderCreateRequest, OrderFilter, OrderLineDraft, Status
)
from .order_query import OrderQueryBuilder
from .protocols import (
    InvalidStatusError,
    OrderNotFoundError,
    OrderRepositoryProtocol,
    OrderServiceError,
    OrderTransactionError,
    OrderValidationError,
    OrderWriterProtocol,
)

logger = logging.getLogger(__name__)

# Monetary amounts are kept at minor-unit precision
MONEY_QUANTUM = Decimal("0.01")


def compute_subtotal(unit_price: Decimal, quantity: int) -> Decimal:
    """unit_price x quantity, rounded half-up to cents"""
    return (Decimal(unit_price) * quantity).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


class OrderService:
    """
    Order management business logic service

    Handles the order creation transaction, order queries and the
    status transition gate.
    """

    def __init__(self, repository: OrderRepositoryProtocol):
        """
        Initialize Order Service

        Args:
            repository: Order repository instance
        """
        self.repository = repository

        logger.info("OrderService initialized")

    # ====================
    # Transaction Manager
    # ====================

    async def create_order(self, request: OrderCreateRequest) -> int:
        """
        Persist an order header and all of its lines atomically.

        Returns:
            The new order id

        Raises:
            OrderValidationError: malformed input, nothing was written
            OrderTransactionError: a write failed and everything was rolled back
        """
        self._validate_order_create_request(request)
        lines = [self._build_line(item) for item in request.line_items]

        lines_total = sum((line.subtotal for line in lines), Decimal("0"))
        if lines_total != request.total:
            logger.warning(
                f"Order total {request.total} differs from line subtotals {lines_total} "
                f"for customer {request.customer_id}"
            )

        try:
            async with self.repository.transaction() as tx:
                order_id = await tx.insert_order(
                    customer_id=request.customer_id,
                    payment_method_id=request.payment_method_id,
                    address=request.address,
                    coordinates=request.coordinates,
                    contact_number=request.contact_number,
                    total=request.total,
                )
                for line in lines:
                    await tx.insert_order_line(order_id, line)
                await self._reserve_stock(tx, order_id, lines)
        except Exception as e:
            logger.error(f"Order creation rolled back for customer {request.customer_id}: {e}")
            raise OrderTransactionError(f"Failed to create order: {e}") from e

        logger.info(f"Order created: {order_id} with {len(lines)} items")
        return order_id

    async def _reserve_stock(
        self,
        tx: OrderWriterProtocol,
        order_id: int,
        lines: Sequence[OrderLineDraft],
    ) -> None:
        """
        Extension point for decrementing garment stock inside the order
        transaction. Currently a no-op: orders do not touch the catalog.
        """
        return None

    # ====================
    # Query Engine
    # ====================

    async def list_orders(self, filters: Optional[OrderFilter] = None) -> List[Order]:
        """Orders matching all given filters, newest first"""
        query = OrderQueryBuilder.from_filter(filters)
        try:
            return await self.repository.list_orders(query)
        except Exception as e:
            logger.error(f"Failed to list orders: {e}")
            raise OrderServiceError(f"Failed to list orders: {str(e)}")

    async def get_order(self, order_id: int) -> Order:
        try:
            order = await self.repository.get_order(order_id)
        except Exception as e:
            logger.error(f"Failed to get order {order_id}: {e}")
            raise OrderServiceError(f"Failed to get order: {str(e)}")

        if not order:
            raise OrderNotFoundError(f"Order not found: {order_id}")
        return order

    # ====================
    # Status Transition Gate
    # ====================

    async def set_order_status(self, order_id: int, status_id: Optional[int]) -> None:
        """
        Move an order to any status of the closed set.

        Raises:
            OrderValidationError: status_id missing
            InvalidStatusError: status_id is not a known status (order untouched)
            OrderNotFoundError: order does not exist
        """
        if status_id is None:
            raise OrderValidationError("statusId is required")

        status = await self.repository.get_status(status_id)
        if not status:
            raise InvalidStatusError(f"Invalid status: {status_id}")

        if not await self.repository.update_order_status(order_id, status_id):
            raise OrderNotFoundError(f"Order not found: {order_id}")

        logger.info(f"Order {order_id} moved to status {status.name}")

    async def list_statuses(self) -> List[Status]:
        return await self.repository.list_statuses()

    async def health_check(self) -> Dict[str, Any]:
        result = await self.repository.check_connection() or {}
        return {
            "status": "healthy" if result.get("healthy") else "unhealthy",
            "server_time": result.get("server_time"),
        }

    # ====================
    # Validation
    # ====================

    @staticmethod
    def _build_line(item: LineItemRequest) -> OrderLineDraft:
        # Stored price and subtotal must agree at cent precision
        unit_price = Decimal(item.unit_price).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
        return OrderLineDraft(
            garment_id=item.garment_id,
            quantity=item.quantity,
            unit_price=unit_price,
            subtotal=compute_subtotal(unit_price, item.quantity),
        )

    def _validate_order_create_request(self, request: OrderCreateRequest) -> None:
        """Validate order creation request"""
        if not request.address or not request.address.strip():
            raise OrderValidationError("address is required")

        if request.total < 0:
            raise OrderValidationError("total must not be negative")

        if not request.line_items:
            raise OrderValidationError("lineItems must be a non-empty list")

        for position, item in enumerate(request.line_items):
            if item.quantity <= 0:
                raise OrderValidationError(f"lineItems[{position}].quantity must be positive")
            if item.unit_price < 0:
                raise OrderValidationError(f"lineItems[{position}].unitPrice must not be negative")
