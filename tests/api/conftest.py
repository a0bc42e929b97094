"""
API Test Layer Configuration

Layer 1: API Contract Tests
- The FastAPI app runs in-process through httpx's ASGI transport
- The repository is replaced by the in-memory mock via dependency overrides
- Validates HTTP status codes, camelCase bodies and error formats

Usage:
    pytest tests/api -v
    pytest tests/api -v -k "status"
"""

import os
import sys
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

os.environ.setdefault("ENV", "testing")

# Add project root
sys.path.insert(
    0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
)

from microservices.order_service.main import app, get_order_service
from microservices.order_service.order_service import OrderService
from tests.component.golden.order_service.mocks import MockOrderRepository


# =============================================================================
# Configuration
# =============================================================================


class APITestConfig:
    """API test configuration"""

    BASE_URL = "http://test"
    ORDERS_PATH = "/api/v1/orders"
    HTTP_TIMEOUT = 30.0


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def order_repository() -> MockOrderRepository:
    return MockOrderRepository()


@pytest.fixture
def enforce_transitions() -> bool:
    """Override in a test module to run against the strict lifecycle"""
    return False


@pytest.fixture
def order_service(order_repository, enforce_transitions) -> OrderService:
    return OrderService(repository=order_repository, enforce_transitions=enforce_transitions)


@pytest_asyncio.fixture
async def http_client(order_service) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client bound to the app with the mock-backed service"""
    app.dependency_overrides[get_order_service] = lambda: order_service
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(
            transport=transport,
            base_url=APITestConfig.BASE_URL,
            timeout=APITestConfig.HTTP_TIMEOUT,
        ) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


# =============================================================================
# Assertion Helpers
# =============================================================================


class APIAssertions:
    """API-specific assertion helpers"""

    @staticmethod
    def assert_success(response: httpx.Response, expected_status: int = 200):
        """Assert response is successful"""
        assert response.status_code == expected_status, (
            f"Expected {expected_status}, got {response.status_code}: {response.text}"
        )

    @staticmethod
    def assert_created(response: httpx.Response):
        """Assert resource was created"""
        assert response.status_code == 201, (
            f"Expected 201, got {response.status_code}: {response.text}"
        )

    @staticmethod
    def assert_not_found(response: httpx.Response):
        """Assert resource not found with the error body"""
        assert response.status_code == 404, f"Expected 404, got {response.status_code}"
        assert response.json()["error"].startswith("Order not found: ")

    @staticmethod
    def assert_validation_error(response: httpx.Response, *fields: str):
        """Assert 400 with a field -> message body naming the given fields"""
        assert response.status_code == 400, (
            f"Expected 400, got {response.status_code}: {response.text}"
        )
        body = response.json()
        missing = [f for f in fields if f not in body]
        assert not missing, f"Missing error fields: {missing} in {body}"

    @staticmethod
    def assert_has_fields(data: dict, fields: list):
        """Assert response has required fields"""
        missing = [f for f in fields if f not in data]
        assert not missing, f"Missing fields: {missing}"


@pytest.fixture
def api_assert() -> APIAssertions:
    """Provide API assertion helpers"""
    return APIAssertions()
