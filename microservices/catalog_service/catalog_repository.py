"""
Catalog Repository

Data access layer for garments, size allocations and color variants using PostgresClient.
Matches schema: catalog.garments, catalog.garment_sizes, catalog.garment_colors
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from core.config_manager import ConfigManager
from core.postgres_client import PostgresClient

from .models import (
    AssignedSize, Category, Color, ColorVariant, Garment, Size, SizeStockEntry
)

logger = logging.getLogger(__name__)

GARMENT_COLUMNS = "id, name, description, price, stock, image_url, category_id, created_at"


class CatalogRepository:
    """
    Repository for catalog data operations.

    Tables:
        - catalog.categories / catalog.sizes / catalog.colors: lookups
        - catalog.garments: garment records with declared total stock
        - catalog.garment_sizes: per-size allocation, unique per (garment_id, size_id)
        - catalog.garment_colors: color + image variants
    """

    def __init__(self, db: Optional[PostgresClient] = None, config: Optional[ConfigManager] = None):
        """Initialize Catalog Repository with PostgresClient"""
        if db is None:
            if config is None:
                config = ConfigManager("catalog_service")
            db = PostgresClient("catalog_service", config.get_infra_config())
        self.db = db

        self.schema = "catalog"
        self.garments_table = "garments"
        self.sizes_table = "garment_sizes"
        self.colors_table = "garment_colors"

        logger.info("CatalogRepository initialized with PostgresClient")

    async def close(self):
        await self.db.close()

    # ==================== Lookups ====================

    async def list_categories(self) -> List[Category]:
        """List garment categories"""
        try:
            query = f'SELECT id, name, description FROM "{self.schema}".categories ORDER BY id'
            async with self.db:
                results = await self.db.query(query)
            return [Category(**row) for row in results]
        except Exception as e:
            logger.error(f"Failed to list categories: {e}")
            raise

    async def list_sizes(self) -> List[Size]:
        """List sizes"""
        try:
            query = f'SELECT id, name, description FROM "{self.schema}".sizes ORDER BY id'
            async with self.db:
                results = await self.db.query(query)
            return [Size(**row) for row in results]
        except Exception as e:
            logger.error(f"Failed to list sizes: {e}")
            raise

    async def list_colors(self) -> List[Color]:
        """List colors"""
        try:
            query = f'SELECT id, name, hex_code FROM "{self.schema}".colors ORDER BY id'
            async with self.db:
                results = await self.db.query(query)
            return [Color(**row) for row in results]
        except Exception as e:
            logger.error(f"Failed to list colors: {e}")
            raise

    # ==================== Garments ====================

    async def create_garment(self, data: Dict[str, Any]) -> Garment:
        """Insert a garment and return the stored row"""
        try:
            query = f'''
                INSERT INTO "{self.schema}".{self.garments_table}
                    (name, description, price, stock, image_url, category_id)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {GARMENT_COLUMNS}
            '''
            params = [
                data["name"],
                data.get("description"),
                data["price"],
                data["stock"],
                data.get("image_url"),
                data.get("category_id"),
            ]
            async with self.db:
                result = await self.db.query_row(query, params)
            return Garment(**result)
        except Exception as e:
            logger.error(f"Failed to create garment: {e}")
            raise

    async def get_garment(self, garment_id: int) -> Optional[Garment]:
        """Get garment by ID"""
        try:
            query = f'SELECT {GARMENT_COLUMNS} FROM "{self.schema}".{self.garments_table} WHERE id = $1'
            async with self.db:
                result = await self.db.query_row(query, [garment_id])
            return Garment(**result) if result else None
        except Exception as e:
            logger.error(f"Failed to get garment {garment_id}: {e}")
            raise

    async def list_garments(
        self,
        size_id: Optional[int] = None,
        max_price: Optional[Decimal] = None,
        category_id: Optional[int] = None,
    ) -> List[Garment]:
        """List garments with filtering"""
        try:
            conditions = []
            params = []
            param_count = 0

            if size_id is not None:
                param_count += 1
                conditions.append(
                    f'EXISTS (SELECT 1 FROM "{self.schema}".{self.sizes_table} gs '
                    f'WHERE gs.garment_id = g.id AND gs.size_id = ${param_count})'
                )
                params.append(size_id)

            if max_price is not None:
                param_count += 1
                conditions.append(f"g.price <= ${param_count}")
                params.append(max_price)

            if category_id is not None:
                param_count += 1
                conditions.append(f"g.category_id = ${param_count}")
                params.append(category_id)

            where_clause = " AND ".join(conditions) if conditions else "TRUE"
            query = f'''
                SELECT g.id, g.name, g.description, g.price, g.stock, g.image_url, g.category_id, g.created_at
                FROM "{self.schema}".{self.garments_table} g
                WHERE {where_clause}
                ORDER BY g.id
            '''

            async with self.db:
                results = await self.db.query(query, params)
            return [Garment(**row) for row in results]
        except Exception as e:
            logger.error(f"Failed to list garments: {e}")
            raise

    async def update_garment(self, garment_id: int, data: Dict[str, Any]) -> Optional[Garment]:
        """Replace a garment's editable fields"""
        try:
            query = f'''
                UPDATE "{self.schema}".{self.garments_table}
                SET name = $1, description = $2, price = $3, stock = $4,
                    image_url = $5, category_id = $6
                WHERE id = $7
                RETURNING {GARMENT_COLUMNS}
            '''
            params = [
                data["name"],
                data.get("description"),
                data["price"],
                data["stock"],
                data.get("image_url"),
                data.get("category_id"),
                garment_id,
            ]
            async with self.db:
                result = await self.db.query_row(query, params)
            return Garment(**result) if result else None
        except Exception as e:
            logger.error(f"Failed to update garment {garment_id}: {e}")
            raise

    async def delete_garment(self, garment_id: int) -> bool:
        """Delete a garment; sizes and colors cascade"""
        try:
            query = f'DELETE FROM "{self.schema}".{self.garments_table} WHERE id = $1'
            async with self.db:
                count = await self.db.execute(query, [garment_id])
            return count > 0
        except Exception as e:
            logger.error(f"Failed to delete garment {garment_id}: {e}")
            raise

    # ==================== Size Allocations ====================

    async def upsert_size_allocations(self, garment_id: int, entries: List[SizeStockEntry]) -> int:
        """
        Insert or overwrite (garment, size) allocations.

        Re-submitting a pair replaces its quantity. Concurrent writers to the
        same pair resolve last-write-wins through the unique constraint.
        """
        try:
            query = f'''
                INSERT INTO "{self.schema}".{self.sizes_table} (garment_id, size_id, stock)
                VALUES ($1, $2, $3)
                ON CONFLICT (garment_id, size_id) DO UPDATE SET stock = EXCLUDED.stock
            '''
            count = 0
            async with self.db.transaction() as tx:
                for entry in entries:
                    count += await tx.execute(query, [garment_id, entry.size_id, entry.stock])
            return count
        except Exception as e:
            logger.error(f"Failed to register sizes for garment {garment_id}: {e}")
            raise

    async def get_size_allocations(self, garment_id: int) -> List[AssignedSize]:
        """Allocations of a garment joined with size name and description"""
        try:
            query = f'''
                SELECT gs.size_id, s.name AS size_name, s.description AS size_description, gs.stock
                FROM "{self.schema}".{self.sizes_table} gs
                JOIN "{self.schema}".sizes s ON s.id = gs.size_id
                WHERE gs.garment_id = $1
                ORDER BY gs.size_id
            '''
            async with self.db:
                results = await self.db.query(query, [garment_id])
            return [AssignedSize(**row) for row in results]
        except Exception as e:
            logger.error(f"Failed to get size allocations for garment {garment_id}: {e}")
            raise

    # ==================== Color Variants ====================

    async def add_color_variant(self, garment_id: int, color_id: int, image_url: str) -> ColorVariant:
        """Persist a (garment, color, image) association"""
        try:
            query = f'''
                INSERT INTO "{self.schema}".{self.colors_table} (garment_id, color_id, image_url)
                VALUES ($1, $2, $3)
                RETURNING id, garment_id, color_id, image_url
            '''
            async with self.db:
                result = await self.db.query_row(query, [garment_id, color_id, image_url])
            return ColorVariant(**result)
        except Exception as e:
            logger.error(f"Failed to add color {color_id} to garment {garment_id}: {e}")
            raise

    async def list_color_variants(self, garment_id: int) -> List[ColorVariant]:
        """Color variants of a garment"""
        try:
            query = f'''
                SELECT gc.id, gc.garment_id, gc.color_id, c.name AS color_name, gc.image_url
                FROM "{self.schema}".{self.colors_table} gc
                LEFT JOIN "{self.schema}".colors c ON c.id = gc.color_id
                WHERE gc.garment_id = $1
                ORDER BY gc.id
            '''
            async with self.db:
                results = await self.db.query(query, [garment_id])
            return [ColorVariant(**row) for row in results]
        except Exception as e:
            logger.error(f"Failed to list colors for garment {garment_id}: {e}")
            raise

    async def check_connection(self) -> Optional[Dict[str, Any]]:
        """Database round-trip"""
        return await self.db.health_check()
