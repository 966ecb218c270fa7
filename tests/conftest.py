"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date
from fastapi.testclient import TestClient

from app.main import app
from app.calculations.lease import LeaseContract


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def monthly_lease():
    """Two-year monthly lease at 6% starting on the first of the month."""
    return LeaseContract(
        lease_term_years=2,
        payment_amount=1000,
        payment_frequency="monthly",
        interest_rate=6,
        start_date=date(2024, 1, 1),
    )
