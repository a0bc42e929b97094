"""
Order Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules.

Usage:
    from .factory import create_order_service
    service = create_order_service()
"""
from typing import Optional

from core.config import Settings, get_settings

from .order_service import OrderService


def create_order_service(
    settings: Optional[Settings] = None,
    repository=None,
) -> OrderService:
    """
    Create OrderService with real dependencies.

    This function imports the real repository (which has I/O dependencies).
    Use this in production, NOT in tests.

    Args:
        settings: Application settings (defaults to global settings)
        repository: Repository override; a PostgreSQL repository is built when omitted

    Returns:
        Configured OrderService instance
    """
    settings = settings or get_settings()

    if repository is None:
        # Import real repository here (not at module level)
        from .order_repository import OrderRepository

        repository = OrderRepository(
            config=settings.infra,
            schema=settings.service.db_schema,
        )

    return OrderService(
        repository=repository,
        enforce_transitions=settings.service.enforce_status_transitions,
        default_page_size=settings.service.default_page_size,
        max_page_size=settings.service.max_page_size,
    )


__all__ = ["create_order_service"]
