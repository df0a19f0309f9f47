"""
Order Repository

Data access layer for order management operations using PostgresClient.
Order lines join catalog.garments for garment name and image.
"""

import json
import logging
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Any, AsyncIterator, Dict, List, Optional

from core.config_manager import ConfigManager
from core.postgres_client import PostgresClient, PostgresConnection

from .models import INITIAL_STATUS_NAME, Order, OrderLine, OrderLineDraft, Status
from .order_query import OrderQueryBuilder

logger = logging.getLogger(__name__)


class OrderWriter:
    """Inserts bound to one open transaction"""

    def __init__(self, connection: PostgresConnection, schema: str):
        self.connection = connection
        self.schema = schema

    async def insert_order(
        self,
        customer_id: int,
        payment_method_id: int,
        address: str,
        coordinates: Optional[str],
        contact_number: Optional[str],
        total: Decimal,
    ) -> int:
        """Insert the order header in the initial status"""
        query = f'''
            INSERT INTO "{self.schema}".orders
                (customer_id, payment_method_id, address, coordinates, contact_number, total, status_id)
            VALUES ($1, $2, $3, $4, $5, $6,
                    (SELECT id FROM "{self.schema}".statuses WHERE name = $7))
            RETURNING id
        '''
        params = [
            customer_id,
            payment_method_id,
            address,
            coordinates,
            contact_number,
            total,
            INITIAL_STATUS_NAME,
        ]
        row = await self.connection.query_row(query, params)
        return row["id"]

    async def insert_order_line(self, order_id: int, line: OrderLineDraft) -> int:
        query = f'''
            INSERT INTO "{self.schema}".order_lines
                (order_id, garment_id, quantity, unit_price, subtotal)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING id
        '''
        params = [order_id, line.garment_id, line.quantity, line.unit_price, line.subtotal]
        row = await self.connection.query_row(query, params)
        return row["id"]


class OrderRepository:
    """
    Repository for order data operations

    Tables:
        - orders.orders: order header (customer, status, payment method, total)
        - orders.order_lines: one row per ordered garment
        - orders.statuses / orders.customers / orders.payment_methods: lookups
    """

    def __init__(self, db: Optional[PostgresClient] = None, config: Optional[ConfigManager] = None):
        """Initialize Order Repository with PostgresClient"""
        if db is None:
            if config is None:
                config = ConfigManager("order_service")
            db = PostgresClient("order_service", config.get_infra_config())
        self.db = db

        self.schema = "orders"  # Using "orders" instead of "order" (reserved keyword)
        self.catalog_schema = "catalog"

        logger.info("OrderRepository initialized with PostgresClient")

    async def close(self):
        await self.db.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[OrderWriter]:
        """
        Scoped unit of work for order creation.

        Commits on clean exit; any exception rolls back every insert and
        is re-raised unchanged.
        """
        async with self.db.transaction() as tx:
            yield OrderWriter(tx, self.schema)

    # ==================== Queries ====================

    def _select_orders(self, query: OrderQueryBuilder) -> tuple:
        where_clause, params = query.render_where()
        sql = f'''
            SELECT o.id, o.customer_id, c.name AS customer_name,
                   o.status_id, s.name AS status_name,
                   o.payment_method_id, pm.name AS payment_method_name,
                   o.address, o.coordinates, o.contact_number, o.total, o.created_at,
                   COALESCE(
                       json_agg(
                           json_build_object(
                               'id', ol.id,
                               'garment_id', ol.garment_id,
                               'garment_name', g.name,
                               'quantity', ol.quantity,
                               'unit_price', ol.unit_price,
                               'subtotal', ol.subtotal,
                               'garment_image', g.image_url
                           ) ORDER BY ol.id
                       ) FILTER (WHERE ol.id IS NOT NULL),
                       '[]'::json
                   ) AS items
            FROM "{self.schema}".orders o
            LEFT JOIN "{self.schema}".customers c ON c.id = o.customer_id
            LEFT JOIN "{self.schema}".statuses s ON s.id = o.status_id
            LEFT JOIN "{self.schema}".payment_methods pm ON pm.id = o.payment_method_id
            LEFT JOIN "{self.schema}".order_lines ol ON ol.order_id = o.id
            LEFT JOIN "{self.catalog_schema}".garments g ON g.id = ol.garment_id
            WHERE {where_clause}
            GROUP BY o.id, c.name, s.name, pm.name
            ORDER BY o.created_at DESC, o.id DESC
        '''
        return sql, params

    async def list_orders(self, query: OrderQueryBuilder) -> List[Order]:
        """List orders matching every predicate, newest first"""
        try:
            sql, params = self._select_orders(query)
            async with self.db:
                results = await self.db.query(sql, params)
            return [self._dict_to_order(row) for row in results]
        except Exception as e:
            logger.error(f"Failed to list orders: {e}")
            raise

    async def get_order(self, order_id: int) -> Optional[Order]:
        """Get order by ID with its items"""
        try:
            sql, params = self._select_orders(OrderQueryBuilder().order_id(order_id))
            async with self.db:
                result = await self.db.query_row(sql, params)
            return self._dict_to_order(result) if result else None
        except Exception as e:
            logger.error(f"Failed to get order {order_id}: {e}")
            raise

    # ==================== Statuses ====================

    async def get_status(self, status_id: int) -> Optional[Status]:
        try:
            query = f'SELECT id, name FROM "{self.schema}".statuses WHERE id = $1'
            async with self.db:
                result = await self.db.query_row(query, [status_id])
            return Status(**result) if result else None
        except Exception as e:
            logger.error(f"Failed to get status {status_id}: {e}")
            raise

    async def list_statuses(self) -> List[Status]:
        try:
            query = f'SELECT id, name FROM "{self.schema}".statuses ORDER BY id'
            async with self.db:
                results = await self.db.query(query)
            return [Status(**row) for row in results]
        except Exception as e:
            logger.error(f"Failed to list statuses: {e}")
            raise

    async def update_order_status(self, order_id: int, status_id: int) -> bool:
        """Set the status of an order; False when no order matched"""
        try:
            query = f'UPDATE "{self.schema}".orders SET status_id = $1 WHERE id = $2'
            async with self.db:
                count = await self.db.execute(query, [status_id, order_id])
            return count > 0
        except Exception as e:
            logger.error(f"Failed to update status of order {order_id}: {e}")
            raise

    async def check_connection(self) -> Optional[Dict[str, Any]]:
        """Database round-trip"""
        return await self.db.health_check()

    def _dict_to_order(self, data: Dict[str, Any]) -> Order:
        """Convert a joined row to Order model"""
        # json_agg arrives as text unless a codec is registered
        items = data.get("items")
        if isinstance(items, str):
            items = json.loads(items, parse_float=Decimal)
        elif not isinstance(items, list):
            items = []

        return Order(
            id=data["id"],
            customer_id=data["customer_id"],
            customer_name=data.get("customer_name"),
            status_id=data["status_id"],
            status_name=data.get("status_name"),
            payment_method_id=data.get("payment_method_id"),
            payment_method_name=data.get("payment_method_name"),
            address=data.get("address"),
            coordinates=data.get("coordinates"),
            contact_number=data.get("contact_number"),
            total=Decimal(str(data["total"])),
            created_at=data["created_at"],
            items=[OrderLine(**item) for item in items],
        )
