#!/usr/bin/env python3
"""Order service runtime configuration

HTTP binding, storage schema, paging defaults and the status transition policy.
"""
import os
from dataclasses import dataclass


def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class OrderServiceConfig:
    """Order service settings"""

    service_name: str = "order_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8210
    debug: bool = False

    # Storage
    db_schema: str = "orders"

    # Paging
    default_page_size: int = 10
    max_page_size: int = 100

    # Reject status moves outside the lifecycle graph when true
    enforce_status_transitions: bool = False

    @classmethod
    def from_env(cls) -> 'OrderServiceConfig':
        """Load order service configuration from environment variables"""
        return cls(
            service_name=os.getenv("SERVICE_NAME", "order_service"),
            service_host=os.getenv("ORDER_SERVICE_HOST", "0.0.0.0"),
            service_port=_int(os.getenv("ORDER_SERVICE_PORT", "8210"), 8210),
            debug=_bool(os.getenv("DEBUG", "false")),
            db_schema=os.getenv("ORDER_DB_SCHEMA", "orders"),
            default_page_size=_int(os.getenv("ORDER_DEFAULT_PAGE_SIZE", "10"), 10),
            max_page_size=_int(os.getenv("ORDER_MAX_PAGE_SIZE", "100"), 100),
            enforce_status_transitions=_bool(os.getenv("ORDER_ENFORCE_STATUS_TRANSITIONS", "false")),
        )
