"""
Order Service Client

Client library for other services to interact with the order service
"""

import httpx
import logging
import os
from decimal import Decimal
from typing import Optional, List, Dict, Any, Union

logger = logging.getLogger(__name__)


class OrderServiceClient:
    """Order Service HTTP client"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0
    ):
        """
        Initialize Order Service client

        Args:
            base_url: Order service base URL, defaults to ORDER_SERVICE_URL
            http_client: Preconfigured httpx client (optional)
            timeout: Request timeout in seconds
        """
        base_url = base_url or os.getenv("ORDER_SERVICE_URL", "http://localhost:8210")
        self.base_url = base_url.rstrip('/')
        self.client = http_client or httpx.AsyncClient(timeout=timeout)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # =============================================================================
    # Order Management
    # =============================================================================

    async def create_order(
        self,
        customer_name: str,
        customer_email: str,
        items: List[Dict[str, Any]],
        total_amount: Union[Decimal, float, str]
    ) -> Optional[Dict[str, Any]]:
        """
        Create new order

        Args:
            customer_name: Customer full name
            customer_email: Customer email
            items: Line items with sku, name, quantity, unitPrice
            total_amount: Order total, sent as a decimal string

        Returns:
            Created order data

        Example:
            >>> client = OrderServiceClient()
            >>> order = await client.create_order(
            ...     customer_name="Jane Doe",
            ...     customer_email="jane@example.com",
            ...     items=[{"sku": "A1", "name": "Widget", "quantity": 2, "unitPrice": 9.99}],
            ...     total_amount=19.98
            ... )
        """
        try:
            payload = {
                "customerName": customer_name,
                "customerEmail": customer_email,
                "items": items,
                "totalAmount": str(total_amount)
            }

            response = await self.client.post(
                f"{self.base_url}/api/v1/orders",
                json=payload
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to create order: {e.response.status_code} {e.response.text}")
            return None
        except Exception as e:
            logger.error(f"Error creating order: {e}")
            return None

    async def get_order(
        self,
        order_id: str
    ) -> Optional[Dict[str, Any]]:
        """
        Get order by ID

        Returns:
            Order data, or None when missing or on error
        """
        try:
            response = await self.client.get(
                f"{self.base_url}/api/v1/orders/{order_id}"
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            if e.response.status_code != 404:
                logger.error(f"Failed to get order: {e.response.status_code}")
            return None
        except Exception as e:
            logger.error(f"Error getting order: {e}")
            return None

    async def list_orders(
        self,
        status: Optional[str] = None,
        page: int = 0,
        size: int = 10
    ) -> Optional[Dict[str, Any]]:
        """
        List orders with pagination

        Args:
            status: Exact status filter (optional)
            page: Zero-based page index
            size: Page size

        Returns:
            Page with items, totalCount, page, pageSize, totalPages, hasNext
        """
        try:
            params = {"page": page, "size": size}
            if status:
                params["status"] = status

            response = await self.client.get(
                f"{self.base_url}/api/v1/orders",
                params=params
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to list orders: {e.response.status_code}")
            return None
        except Exception as e:
            logger.error(f"Error listing orders: {e}")
            return None

    async def update_order(
        self,
        order_id: str,
        customer_name: str,
        customer_email: str,
        items: List[Dict[str, Any]],
        total_amount: Union[Decimal, float, str]
    ) -> Optional[Dict[str, Any]]:
        """Replace an order"""
        try:
            payload = {
                "customerName": customer_name,
                "customerEmail": customer_email,
                "items": items,
                "totalAmount": str(total_amount)
            }

            response = await self.client.put(
                f"{self.base_url}/api/v1/orders/{order_id}",
                json=payload
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to update order: {e.response.status_code}")
            return None
        except Exception as e:
            logger.error(f"Error updating order: {e}")
            return None

    async def update_order_status(
        self,
        order_id: str,
        status: str
    ) -> Optional[Dict[str, Any]]:
        """Change order status"""
        try:
            response = await self.client.patch(
                f"{self.base_url}/api/v1/orders/{order_id}/status",
                json={"status": status}
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to update order status: {e.response.status_code}")
            return None
        except Exception as e:
            logger.error(f"Error updating order status: {e}")
            return None

    async def delete_order(
        self,
        order_id: str
    ) -> bool:
        """Delete an order"""
        try:
            response = await self.client.delete(
                f"{self.base_url}/api/v1/orders/{order_id}"
            )
            response.raise_for_status()
            return True

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to delete order: {e.response.status_code}")
            return False
        except Exception as e:
            logger.error(f"Error deleting order: {e}")
            return False

    # =============================================================================
    # Health Check
    # =============================================================================

    async def health_check(self) -> bool:
        """Check service health"""
        try:
            response = await self.client.get(f"{self.base_url}/health")
            return response.status_code == 200
        except Exception:
            return False


__all__ = ["OrderServiceClient"]
