"""
Component Test Layer Configuration (Layer 3)

Services run against in-memory repository mocks; no database or network.

Usage:
    pytest tests/component -v
    pytest tests/component/golden -v
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tests.component.golden.order_service.mocks import MockOrderRepository


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )
    config.addinivalue_line(
        "markers", "golden: safety net tests - DO NOT MODIFY"
    )


# =============================================================================
# Repository Mocks
# =============================================================================

@pytest.fixture
def mock_order_repository() -> MockOrderRepository:
    """Mock Order Repository with protocol implementation"""
    return MockOrderRepository()
