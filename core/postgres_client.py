"""
PostgreSQL Client for the storefront services

Pooled asyncpg access with a scoped-transaction helper.
Configuration comes from ``InfraConfig`` (POSTGRES_* environment variables).

Usage:
    from core.postgres_client import PostgresClient

    db = PostgresClient("order_service")

    async with db:
        rows = await db.query("SELECT * FROM orders WHERE customer_id = $1", [customer_id])

    async with db.transaction() as tx:
        await tx.execute("INSERT INTO orders ...", [...])
        await tx.execute("INSERT INTO order_lines ...", [...])
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

import asyncpg

from .config import InfraConfig, get_settings

logger = logging.getLogger(__name__)


def _affected_rows(status: str) -> int:
    """Row count from an asyncpg command tag ("UPDATE 3", "INSERT 0 1")"""
    try:
        return int(status.split()[-1])
    except (AttributeError, IndexError, ValueError):
        return 0


class PostgresConnection:
    """Connection-bound handle, the same query API as the pooled client"""

    def __init__(self, connection: asyncpg.Connection):
        self._connection = connection

    async def query(self, sql: str, params: Optional[List[Any]] = None) -> List[Dict[str, Any]]:
        """Execute query and return results"""
        rows = await self._connection.fetch(sql, *(params or []))
        return [dict(row) for row in rows]

    async def query_row(self, sql: str, params: Optional[List[Any]] = None) -> Optional[Dict[str, Any]]:
        """Execute query and return single row"""
        row = await self._connection.fetchrow(sql, *(params or []))
        return dict(row) if row is not None else None

    async def execute(self, sql: str, params: Optional[List[Any]] = None) -> int:
        """Execute SQL statement, returns number of affected rows"""
        status = await self._connection.execute(sql, *(params or []))
        return _affected_rows(status)


class PostgresClient:
    """
    PostgreSQL client backed by an asyncpg pool.

    The pool is created lazily on first use (``async with client`` or any
    query) and released with ``close()``.
    """

    def __init__(
        self,
        service_name: str,
        config: Optional[InfraConfig] = None,
        dsn: Optional[str] = None,
    ):
        self.service_name = service_name
        self.config = config or get_settings().infrastructure
        self.dsn = dsn or self.config.postgres_dsn
        self._pool: Optional[asyncpg.Pool] = None

        logger.info(
            f"PostgreSQL client initialized for {service_name}: "
            f"{self.config.postgres_host}:{self.config.postgres_port}/{self.config.postgres_db}"
        )

    async def connect(self) -> asyncpg.Pool:
        """Create the connection pool if it does not exist yet"""
        if self._pool is None:
            self._pool = await asyncpg.create_pool(
                dsn=self.dsn,
                min_size=self.config.postgres_pool_min,
                max_size=self.config.postgres_pool_max,
                server_settings={"application_name": self.service_name},
            )
            logger.info(f"PostgreSQL pool opened for {self.service_name}")
        return self._pool

    async def close(self):
        """Close the pool"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info(f"PostgreSQL pool closed for {self.service_name}")

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        # The pool outlives a single unit of work
        return False

    async def query(self, sql: str, params: Optional[List[Any]] = None) -> List[Dict[str, Any]]:
        """Execute query and return results"""
        pool = await self.connect()
        async with pool.acquire() as connection:
            return await PostgresConnection(connection).query(sql, params)

    async def query_row(self, sql: str, params: Optional[List[Any]] = None) -> Optional[Dict[str, Any]]:
        """Execute query and return single row"""
        pool = await self.connect()
        async with pool.acquire() as connection:
            return await PostgresConnection(connection).query_row(sql, params)

    async def execute(self, sql: str, params: Optional[List[Any]] = None) -> int:
        """Execute SQL statement, returns number of affected rows"""
        pool = await self.connect()
        async with pool.acquire() as connection:
            return await PostgresConnection(connection).execute(sql, params)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[PostgresConnection]:
        """
        Scoped transaction.

        Commits when the block exits normally, rolls back when it raises.
        The exception is always propagated to the caller.
        """
        pool = await self.connect()
        async with pool.acquire() as connection:
            async with connection.transaction():
                yield PostgresConnection(connection)

    async def health_check(self) -> Optional[Dict[str, Any]]:
        """Round-trip to the server; returns its current time"""
        try:
            row = await self.query_row("SELECT NOW() AS server_time")
            return {"healthy": True, "server_time": row["server_time"] if row else None}
        except Exception as e:
            logger.error(f"PostgreSQL health check failed: {e}")
            return {"healthy": False, "error": str(e)}

