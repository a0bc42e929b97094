"""
Order Service Clients Module

HTTP client for services and gateways calling the order service
"""

from .order_client import OrderServiceClient

__all__ = [
    "OrderServiceClient"
]
