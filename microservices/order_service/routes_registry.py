"""
Order Service Routes Registry
Defines all API routes exposed by the order service
"""

from typing import List, Dict, Any

SERVICE_ROUTES = [
    {
        "path": "/health",
        "methods": ["GET"],
        "description": "Service health check"
    },
    {
        "path": "/status",
        "methods": ["GET"],
        "description": "Service metadata and route table"
    },
    # Order Management
    {
        "path": "/api/v1/orders",
        "methods": ["GET", "POST"],
        "description": "List (status, page, size) or create orders"
    },
    {
        "path": "/api/v1/orders/{order_id}",
        "methods": ["GET", "PUT", "DELETE"],
        "description": "Get, replace or delete an order"
    },
    {
        "path": "/api/v1/orders/{order_id}/status",
        "methods": ["PATCH"],
        "description": "Change order status"
    },
]


def get_routes_summary() -> Dict[str, Any]:
    """Compact route summary for the status endpoint"""
    methods = sorted({m for route in SERVICE_ROUTES for m in route["methods"]})
    return {
        "route_count": len(SERVICE_ROUTES),
        "base_path": "/api/v1/orders",
        "methods": ",".join(methods),
    }


def get_routes() -> List[Dict[str, Any]]:
    return [dict(route) for route in SERVICE_ROUTES]


# Service metadata
SERVICE_METADATA = {
    "service_name": "order_service",
    "version": "1.0.0",
    "tags": ["v1", "order-management", "purchase-orders"],
    "capabilities": [
        "order_creation",
        "order_retrieval",
        "order_listing",
        "order_replacement",
        "order_status_update",
        "order_deletion",
    ]
}
