"""
Order Repository

Data access layer for purchase orders on PostgreSQL using asyncpg.
Line items are embedded in the order row as a JSONB array.
"""

from typing import Any, Callable, List, Mapping, Optional, Tuple
from uuid import UUID
import logging

from core.config import InfraConfig, get_settings
from core.postgres_client import PostgresClientWrapper, get_postgres_client

from .models import Order, OrderItem, OrderStatus
from .protocols import OrderServiceError

logger = logging.getLogger(__name__)

_MAX_OFFSET = 2 ** 63 - 1


class OrderRepository:
    """
    Repository for order data operations

    Implements OrderRepositoryProtocol. Every public method runs inside a
    single transaction on one pooled connection.
    """

    def __init__(
        self,
        db: Optional[PostgresClientWrapper] = None,
        config: Optional[InfraConfig] = None,
        schema: Optional[str] = None,
    ):
        """Initialize Order Repository with an asyncpg pool wrapper"""
        settings = get_settings()
        self.db = db or get_postgres_client("order_service", config=config or settings.infra)
        self.schema = schema or settings.service.db_schema
        self.orders_table = "orders"
        self._table = f'"{self.schema}".{self.orders_table}'

        logger.info(f"OrderRepository initialized for table {self._table}")

    async def initialize(self) -> None:
        """Connect the pool and create the schema and table if missing"""
        await self.db.connect()
        async with self.db.transaction() as conn:
            await conn.execute(f'CREATE SCHEMA IF NOT EXISTS "{self.schema}"')
            await conn.execute(f'''
                CREATE TABLE IF NOT EXISTS {self._table} (
                    id UUID PRIMARY KEY,
                    customer_name TEXT NOT NULL,
                    customer_email TEXT NOT NULL,
                    items JSONB NOT NULL DEFAULT '[]'::jsonb,
                    total_amount NUMERIC(19, 2) NOT NULL CHECK (total_amount >= 0),
                    status TEXT NOT NULL,
                    created_at TIMESTAMPTZ NOT NULL,
                    updated_at TIMESTAMPTZ NOT NULL,
                    CHECK (created_at <= updated_at)
                )
            ''')
            await conn.execute(
                f'CREATE INDEX IF NOT EXISTS idx_orders_status ON {self._table} (status)'
            )
        logger.info("Order schema ready")

    async def close(self) -> None:
        await self.db.close()

    async def ping(self) -> bool:
        if not self.db.is_connected:
            return False
        result = await self.db.health_check()
        return bool(result.get("healthy"))

    async def save(self, order: Order) -> Order:
        """Insert or fully replace an order; created_at is never overwritten"""
        try:
            items = [item.model_dump(mode="json") for item in order.items]
            query = f'''
                INSERT INTO {self._table}
                    (id, customer_name, customer_email, items, total_amount,
                     status, created_at, updated_at)
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                ON CONFLICT (id) DO UPDATE SET
                    customer_name = EXCLUDED.customer_name,
                    customer_email = EXCLUDED.customer_email,
                    items = EXCLUDED.items,
                    total_amount = EXCLUDED.total_amount,
                    status = EXCLUDED.status,
                    updated_at = EXCLUDED.updated_at
                RETURNING *
            '''

            async with self.db.transaction() as conn:
                row = await conn.fetchrow(
                    query,
                    order.id,
                    order.customer_name,
                    order.customer_email,
                    items,
                    order.total_amount,
                    order.status.value,
                    order.created_at,
                    order.updated_at,
                )

            return self._row_to_order(row)

        except Exception as e:
            logger.error(f"Failed to save order {order.id}: {e}")
            raise

    async def find_by_id(self, order_id: UUID) -> Optional[Order]:
        """Get order by ID"""
        try:
            query = f'SELECT * FROM {self._table} WHERE id = $1'

            async with self.db.transaction() as conn:
                row = await conn.fetchrow(query, order_id)

            return self._row_to_order(row) if row else None

        except Exception as e:
            logger.error(f"Failed to get order {order_id}: {e}")
            raise

    async def exists_by_id(self, order_id: UUID) -> bool:
        try:
            query = f'SELECT EXISTS(SELECT 1 FROM {self._table} WHERE id = $1)'

            async with self.db.transaction() as conn:
                return bool(await conn.fetchval(query, order_id))

        except Exception as e:
            logger.error(f"Failed to check order {order_id}: {e}")
            raise

    async def update(
        self,
        order_id: UUID,
        mutate: Callable[[Order], Order]
    ) -> Optional[Order]:
        """
        Read, change and write one order under a row lock

        Returns None without writing when the order does not exist. Errors
        raised by `mutate` roll the transaction back and propagate unchanged.
        """
        try:
            select_query = f'SELECT * FROM {self._table} WHERE id = $1 FOR UPDATE'
            update_query = f'''
                UPDATE {self._table} SET
                    customer_name = $2,
                    customer_email = $3,
                    items = $4,
                    total_amount = $5,
                    status = $6,
                    updated_at = $7
                WHERE id = $1
                RETURNING *
            '''

            async with self.db.transaction() as conn:
                row = await conn.fetchrow(select_query, order_id)
                if row is None:
                    return None

                order = mutate(self._row_to_order(row))
                row = await conn.fetchrow(
                    update_query,
                    order_id,
                    order.customer_name,
                    order.customer_email,
                    [item.model_dump(mode="json") for item in order.items],
                    order.total_amount,
                    order.status.value,
                    order.updated_at,
                )

            return self._row_to_order(row)

        except OrderServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to update order {order_id}: {e}")
            raise

    async def delete_by_id(self, order_id: UUID) -> bool:
        """Remove an order; False when there was nothing to remove"""
        try:
            query = f'DELETE FROM {self._table} WHERE id = $1 RETURNING id'

            async with self.db.transaction() as conn:
                deleted = await conn.fetchval(query, order_id)

            return deleted is not None

        except Exception as e:
            logger.error(f"Failed to delete order {order_id}: {e}")
            raise

    async def find_all(self, page: int, size: int) -> Tuple[List[Order], int]:
        """One page of all orders, newest first"""
        return await self._find_page(page, size)

    async def find_by_status(
        self,
        status: OrderStatus,
        page: int,
        size: int
    ) -> Tuple[List[Order], int]:
        """One page of orders with exactly the given status"""
        return await self._find_page(page, size, status=status)

    async def _find_page(
        self,
        page: int,
        size: int,
        status: Optional[OrderStatus] = None
    ) -> Tuple[List[Order], int]:
        try:
            params: List[Any] = []
            where_clause = "TRUE"
            if status is not None:
                params.append(status.value)
                where_clause = f"status = ${len(params)}"

            count_query = f'SELECT COUNT(*) FROM {self._table} WHERE {where_clause}'
            page_query = f'''
                SELECT * FROM {self._table}
                WHERE {where_clause}
                ORDER BY created_at DESC, id
                LIMIT ${len(params) + 1} OFFSET ${len(params) + 2}
            '''

            offset = page * size
            async with self.db.transaction() as conn:
                total = await conn.fetchval(count_query, *params)
                rows = []
                # OFFSET is a bigint; anything at or past the total is empty anyway
                if offset < total and offset <= _MAX_OFFSET:
                    rows = await conn.fetch(page_query, *params, size, offset)

            return [self._row_to_order(row) for row in rows], int(total)

        except Exception as e:
            logger.error(f"Failed to list orders (status={status}): {e}")
            raise

    def _row_to_order(self, row: Mapping[str, Any]) -> Order:
        """Convert a database row to an Order"""
        return Order(
            id=row["id"],
            customer_name=row["customer_name"],
            customer_email=row["customer_email"],
            items=[OrderItem(**item) for item in (row["items"] or [])],
            total_amount=row["total_amount"],
            status=OrderStatus(row["status"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
