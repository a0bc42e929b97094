#!/usr/bin/env python3
"""
Core Module for the Order Service

Shared infrastructure components used by the order microservice.

COMPONENTS:
    - config/: Dataclass configuration loaded from environment and dotenv files
    - logger.py: Service logger setup
    - postgres_client.py: asyncpg connection pool wrapper

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger

    settings = get_settings()
    logger = setup_service_logger("order_service")
"""

__version__ = "2.0.0"
