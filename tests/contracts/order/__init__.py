"""
Order Service Contracts

Data contracts for order_service testing.
"""

from .data_contract import (
    # Enums
    OrderStatusContract,
    # Request / Response Contracts
    OrderItemContract,
    OrderRequestContract,
    OrderResponseContract,
    OrderPageContract,
    # Test Data Factory
    OrderTestDataFactory,
    # Builders
    OrderRequestBuilder,
)

__all__ = [
    "OrderStatusContract",
    "OrderItemContract",
    "OrderRequestContract",
    "OrderResponseContract",
    "OrderPageContract",
    "OrderTestDataFactory",
    "OrderRequestBuilder",
]
