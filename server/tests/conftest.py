"""Test configuration and fixtures."""

from datetime import date, timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from travel_agency.core.store import InMemoryStore
from travel_agency.models import Traveler
from travel_agency.services.booking_service import BookingService
from travel_agency.services.customer_service import CustomerService
from travel_agency.services.package_service import PackageService

# Fixed "today" so fee tiers are deterministic
TODAY = date(2025, 3, 1)


@pytest.fixture
def today():
    """The date the service clock reports during tests."""
    return TODAY


@pytest.fixture
def store():
    """Create a fresh in-memory store."""
    return InMemoryStore()


@pytest.fixture
def package_service(store):
    return PackageService(store)


@pytest.fixture
def customer_service(store):
    return CustomerService(store)


@pytest.fixture
def booking_service(store, today):
    return BookingService(store, clock=lambda: today)


@pytest.fixture
def sample_package_data(today):
    """Sample package: 10 seats at 100 per seat, departing in 40 days."""
    return {
        "name": "Alpine Lakes Explorer",
        "description": "Seven days hiking between the lakes of the Swiss Alps",
        "start_date": today + timedelta(days=40),
        "end_date": today + timedelta(days=47),
        "price": Decimal("100"),
        "total_seats": 10,
    }


@pytest.fixture
def sample_customer_data():
    return {
        "name": "Asha Verma",
        "email": "asha@example.com",
        "phone": "+91 98765 43210",
    }


@pytest.fixture
def package(package_service, sample_package_data):
    return package_service.create_package(**sample_package_data)


@pytest.fixture
def customer(customer_service, sample_customer_data):
    return customer_service.create_customer(**sample_customer_data)


@pytest.fixture
def make_travelers():
    """Factory for a list of distinct travelers."""
    def _make(count: int) -> list[Traveler]:
        return [Traveler(name=f"Traveler {i + 1}", age=30 + i) for i in range(count)]
    return _make


@pytest_asyncio.fixture
async def test_app(store):
    """Create a test FastAPI application serving the test store."""
    from travel_agency.main import create_app

    yield create_app(store=store)


@pytest_asyncio.fixture
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_package_payload():
    """Sample package request body."""
    return {
        "name": "Kerala Backwaters",
        "description": "Houseboat cruise through the Kerala backwaters",
        "start_date": "2099-01-10",
        "end_date": "2099-01-15",
        "price": "100.00",
        "total_seats": 10,
    }


@pytest.fixture
def sample_customer_payload(sample_customer_data):
    return dict(sample_customer_data)
