"""
Order Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Callable, Dict, List, Optional, Protocol, Tuple, runtime_checkable
from uuid import UUID

# Import only models (no I/O dependencies)
from .models import Order, OrderStatus


# ============================================================================
# Custom Exceptions - defined here to avoid importing repository
# ============================================================================

class OrderServiceError(Exception):
    """Unexpected order service failure"""
    pass


class OrderValidationError(OrderServiceError):
    """Malformed or missing input, keyed by field name"""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        summary = "; ".join(f"{field}: {message}" for field, message in self.errors.items())
        super().__init__(summary or "Invalid request")


class InvalidStatusTransitionError(OrderValidationError):
    """Status change not allowed by the lifecycle graph"""

    def __init__(self, current: OrderStatus, requested: OrderStatus):
        self.current = current
        self.requested = requested
        super().__init__({
            "status": f"Cannot change status from {current.value} to {requested.value}"
        })


class OrderNotFoundError(OrderServiceError):
    """Order not found error"""

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


# ============================================================================
# Repository Protocol
# ============================================================================

@runtime_checkable
class OrderRepositoryProtocol(Protocol):
    """
    Interface for Order Repository.

    Implementations must provide these methods.
    Used for dependency injection to enable testing.
    """

    async def save(self, order: Order) -> Order:
        """Insert or fully replace an order"""
        ...

    async def find_by_id(self, order_id: UUID) -> Optional[Order]:
        """Get order by ID"""
        ...

    async def exists_by_id(self, order_id: UUID) -> bool:
        """Check whether an order exists"""
        ...

    async def update(
        self,
        order_id: UUID,
        mutate: Callable[[Order], Order]
    ) -> Optional[Order]:
        """Apply `mutate` to the stored order and write the result atomically;
        None when the order does not exist"""
        ...

    async def delete_by_id(self, order_id: UUID) -> bool:
        """Remove an order; False when it did not exist"""
        ...

    async def find_all(self, page: int, size: int) -> Tuple[List[Order], int]:
        """One page of orders plus the total count"""
        ...

    async def find_by_status(
        self,
        status: OrderStatus,
        page: int,
        size: int
    ) -> Tuple[List[Order], int]:
        """One page of orders with the given status plus the total count"""
        ...

    async def ping(self) -> bool:
        """Check storage connectivity"""
        ...
