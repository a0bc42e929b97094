"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - api/        : HTTP contract tests (in-process app, mocked repository)
    - integration/: Repository tests against a real PostgreSQL
    - component/  : Service tests (mocked repository)
    - unit/       : Pure functions and models, no I/O
"""
import os
import sys

import pytest

os.environ.setdefault("ENV", "testing")

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from tests.contracts.order import OrderTestDataFactory


# =============================================================================
# Test Configuration
# =============================================================================

def pytest_configure(config):
    """Register markers shared by every layer"""
    for marker, description in (
        ("unit", "pure logic, no I/O"),
        ("component", "service with mocked repository"),
        ("api", "HTTP contract through the ASGI app"),
        ("integration", "requires a running PostgreSQL"),
        ("golden", "characterization tests of current behavior"),
    ):
        config.addinivalue_line("markers", f"{marker}: {description}")


@pytest.fixture(scope="session")
def order_factory():
    """Order test data factory"""
    return OrderTestDataFactory
