#!/usr/bin/env python3
"""
Integration Test Pytest Configuration and Fixtures

Repository tests against a real PostgreSQL instance. Every test runs in
its own throwaway schema; tests are skipped when the database is unreachable.
"""

import os
import sys
import uuid
from typing import AsyncGenerator

import asyncpg
import pytest
import pytest_asyncio

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from core.config import InfraConfig
from core.postgres_client import PostgresClientWrapper
from microservices.order_service.order_repository import OrderRepository


# ==================== Environment ====================

class TestConfig:
    """Integration test configuration"""

    POSTGRES_HOST = os.getenv("POSTGRES_HOST", "localhost")
    POSTGRES_PORT = int(os.getenv("POSTGRES_PORT", "5432"))
    POSTGRES_DB = os.getenv("POSTGRES_DB", "postgres")
    POSTGRES_USER = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")

    @classmethod
    def infra(cls) -> InfraConfig:
        return InfraConfig(
            postgres_host=cls.POSTGRES_HOST,
            postgres_port=cls.POSTGRES_PORT,
            postgres_db=cls.POSTGRES_DB,
            postgres_user=cls.POSTGRES_USER,
            postgres_password=cls.POSTGRES_PASSWORD,
            postgres_pool_min=1,
            postgres_pool_max=5,
        )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: requires a running PostgreSQL"
    )


@pytest.fixture(scope="session")
def config() -> TestConfig:
    return TestConfig()


# ==================== Repository Fixtures ====================

@pytest_asyncio.fixture(scope="function")
async def order_repository(config) -> AsyncGenerator[OrderRepository, None]:
    """OrderRepository bound to a fresh schema, dropped afterwards"""
    schema = f"orders_test_{uuid.uuid4().hex[:8]}"
    db = PostgresClientWrapper("order_service_test", config=config.infra())
    repository = OrderRepository(db=db, schema=schema)

    try:
        await repository.initialize()
    except (OSError, asyncpg.PostgresError) as e:
        await db.close()
        pytest.skip(f"PostgreSQL not available: {e}")

    try:
        yield repository
    finally:
        async with db.transaction() as conn:
            await conn.execute(f'DROP SCHEMA IF EXISTS "{schema}" CASCADE')
        await repository.close()
