"""
Order Service Business Logic

Owns the order aggregate's invariants: request validation, not-found
semantics, status transitions, and translation of storage failures.
"""

from typing import Any, Dict, FrozenSet, Mapping, Optional, Union
from datetime import datetime, timezone
from uuid import UUID
import logging

from .mapper import (
    copy_to_entity, parse_order_request, parse_status, to_entity,
    to_page, to_response, with_status
)
from .models import (
    INITIAL_ORDER_STATUS, Order, OrderPage, OrderRequest, OrderResponse, OrderStatus
)
from .protocols import (
    InvalidStatusTransitionError,
    OrderNotFoundError,
    OrderRepositoryProtocol,
    OrderServiceError,
    OrderValidationError,
)

logger = logging.getLogger(__name__)


OrderPayload = Union[OrderRequest, Mapping[str, Any]]


class OrderService:
    """
    Order management business logic service

    Handles the order lifecycle: create, read, list, replace, status change
    and delete. Stateless; all state lives in the repository.
    """

    # Lifecycle graph applied when transitions are enforced
    ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
        OrderStatus.CREATED: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
        OrderStatus.PAID: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
        OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
        OrderStatus.DELIVERED: frozenset(),
        OrderStatus.CANCELLED: frozenset(),
    }

    def __init__(
        self,
        repository: OrderRepositoryProtocol,
        enforce_transitions: bool = False,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ):
        """
        Initialize Order Service

        Args:
            repository: Order repository for data access
            enforce_transitions: Reject status moves outside ALLOWED_TRANSITIONS
            default_page_size: Page size used when the caller gives none
            max_page_size: Upper bound for requested page sizes
        """
        self.repository = repository
        self.enforce_transitions = enforce_transitions
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    # Order Lifecycle Operations

    async def create_order(self, request: OrderPayload) -> OrderResponse:
        """
        Create a new order

        Args:
            request: Order payload (OrderRequest or raw mapping)

        Returns:
            The stored order view

        Raises:
            OrderValidationError: If the payload is malformed
            OrderServiceError: If storage fails
        """
        order_request = parse_order_request(request)
        entity = to_entity(order_request, INITIAL_ORDER_STATUS)

        try:
            saved = await self.repository.save(entity)
        except Exception as e:
            logger.error(f"Failed to create order: {e}")
            raise OrderServiceError("Failed to create order") from e

        logger.info(f"Order created: {saved.id} for {saved.customer_email}")
        return to_response(saved)

    async def get_order(self, order_id: UUID) -> OrderResponse:
        """Get order by ID"""
        try:
            entity = await self.repository.find_by_id(order_id)
        except Exception as e:
            logger.error(f"Failed to get order {order_id}: {e}")
            raise OrderServiceError("Failed to get order") from e

        if entity is None:
            raise OrderNotFoundError(order_id)
        return to_response(entity)

    async def list_orders(
        self,
        status: Union[OrderStatus, str, None] = None,
        page: int = 0,
        size: Optional[int] = None
    ) -> OrderPage:
        """
        List orders, optionally filtered by exact status

        An out-of-range page yields an empty item list with the real total.
        """
        if size is None:
            size = self.default_page_size
        errors = {}
        if page < 0:
            errors["page"] = "Must be greater than or equal to 0"
        if size < 1:
            errors["size"] = "Must be greater than or equal to 1"
        if errors:
            raise OrderValidationError(errors)
        size = min(size, self.max_page_size)
        status_filter = parse_status(status) if status is not None else None

        try:
            if status_filter is None:
                entities, total = await self.repository.find_all(page, size)
            else:
                entities, total = await self.repository.find_by_status(status_filter, page, size)
        except Exception as e:
            logger.error(f"Failed to list orders: {e}")
            raise OrderServiceError("Failed to list orders") from e

        return to_page(entities, total, page, size)

    async def update_order(self, order_id: UUID, request: OrderPayload) -> OrderResponse:
        """Fully replace customer, items and total of an existing order"""
        order_request = parse_order_request(request)

        try:
            saved = await self.repository.update(
                order_id, lambda existing: copy_to_entity(order_request, existing)
            )
        except OrderServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to update order {order_id}: {e}")
            raise OrderServiceError("Failed to update order") from e

        if saved is None:
            raise OrderNotFoundError(order_id)

        logger.info(f"Order updated: {order_id}")
        return to_response(saved)

    async def update_order_status(
        self,
        order_id: UUID,
        new_status: Union[OrderStatus, str]
    ) -> OrderResponse:
        """Set the order status; legality checked only when enforcing transitions"""
        target = parse_status(new_status)

        def change_status(existing: Order) -> Order:
            self._check_transition(existing.status, target)
            return with_status(existing, target)

        try:
            saved = await self.repository.update(order_id, change_status)
        except OrderServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to update status of order {order_id}: {e}")
            raise OrderServiceError("Failed to update order status") from e

        if saved is None:
            raise OrderNotFoundError(order_id)

        logger.info(f"Order {order_id} status set to {target.value}")
        return to_response(saved)

    async def delete_order(self, order_id: UUID) -> None:
        """Delete an order; a missing order is an error, not a no-op"""
        try:
            deleted = await self.repository.delete_by_id(order_id)
        except Exception as e:
            logger.error(f"Failed to delete order {order_id}: {e}")
            raise OrderServiceError("Failed to delete order") from e

        if not deleted:
            raise OrderNotFoundError(order_id)

        logger.info(f"Order deleted: {order_id}")

    # Service Operations

    async def health_check(self) -> Dict[str, Any]:
        """Health check for the service"""
        try:
            connected = await self.repository.ping()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            connected = False
        return {
            "status": "healthy" if connected else "unhealthy",
            "database": "connected" if connected else "disconnected",
            "timestamp": datetime.now(timezone.utc),
        }

    # Private Helper Methods

    def can_transition(self, current: OrderStatus, target: OrderStatus) -> bool:
        """Whether current -> target is allowed under the active policy"""
        if not self.enforce_transitions or current == target:
            return True
        return target in self.ALLOWED_TRANSITIONS.get(current, frozenset())

    def _check_transition(self, current: OrderStatus, target: OrderStatus) -> None:
        if not self.can_transition(current, target):
            raise InvalidStatusTransitionError(current, target)
