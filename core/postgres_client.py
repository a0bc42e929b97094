"""
PostgreSQL Client Wrapper

Centralized asyncpg connection pool wrapper.
Provides a consistent database access pattern for repositories.

Usage:
    from core.postgres_client import get_postgres_client

    # Get client instance
    db = get_postgres_client("order_service")
    await db.connect()

    # Run statements inside one transaction
    async with db.transaction() as conn:
        row = await conn.fetchrow("SELECT * FROM orders.orders WHERE id = $1", order_id)
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import asyncpg

from core.config import InfraConfig, get_settings

logger = logging.getLogger(__name__)


async def _init_connection(conn: asyncpg.Connection) -> None:
    """Decode json/jsonb columns into Python objects"""
    for type_name in ("json", "jsonb"):
        await conn.set_type_codec(
            type_name,
            encoder=json.dumps,
            decoder=json.loads,
            schema="pg_catalog",
        )


class PostgresClientWrapper:
    """
    PostgreSQL pool wrapper.

    Wraps an asyncpg pool and provides:
    - Lazy pool creation from InfraConfig
    - JSON/JSONB codecs on every pooled connection
    - Transaction-scoped connection acquisition
    - Health check
    """

    def __init__(
        self,
        service_name: str,
        config: Optional[InfraConfig] = None,
        dsn: Optional[str] = None,
    ):
        """
        Initialize PostgreSQL client wrapper.

        Args:
            service_name: Name of the service using this client
            config: Infrastructure config (defaults to global settings)
            dsn: Explicit DSN, overrides host/port/credentials from config
        """
        self.service_name = service_name
        self.config = config or get_settings().infra
        self.dsn = dsn or self.config.postgres_dsn
        self._pool: Optional[asyncpg.Pool] = None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError(f"PostgreSQL pool for {self.service_name} is not connected")
        return self._pool

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        """Create the connection pool (idempotent)"""
        if self._pool is not None:
            return
        self._pool = await asyncpg.create_pool(
            dsn=self.dsn,
            min_size=self.config.postgres_pool_min,
            max_size=self.config.postgres_pool_max,
            command_timeout=self.config.postgres_command_timeout,
            init=_init_connection,
        )
        logger.info(
            f"PostgreSQL pool created for {self.service_name}: "
            f"{self.config.postgres_host}:{self.config.postgres_port}/{self.config.postgres_db}"
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a pooled connection wrapped in a single transaction"""
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                yield conn

    async def health_check(self) -> Dict[str, Any]:
        """Check database health"""
        try:
            async with self.pool.acquire() as conn:
                version = await conn.fetchval("SELECT version()")
            return {"healthy": True, "version": version}
        except Exception as e:
            logger.error(f"PostgreSQL health check failed: {e}")
            return {"healthy": False, "error": str(e)}

    async def close(self) -> None:
        """Close the pool"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info(f"PostgreSQL pool closed for {self.service_name}")


# Singleton instances per service
_postgres_clients: Dict[str, PostgresClientWrapper] = {}


def get_postgres_client(
    service_name: str,
    config: Optional[InfraConfig] = None,
    dsn: Optional[str] = None,
) -> PostgresClientWrapper:
    """
    Get or create PostgreSQL client for a service.

    Args:
        service_name: Service name
        config: Optional infrastructure config
        dsn: Optional DSN override

    Returns:
        PostgresClientWrapper instance
    """
    if service_name not in _postgres_clients:
        _postgres_clients[service_name] = PostgresClientWrapper(
            service_name=service_name,
            config=config,
            dsn=dsn,
        )
    return _postgres_clients[service_name]
