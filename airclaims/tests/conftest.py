from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from airclaims.core.eligibility.schemas import BookingLookupResult, CaseRecord, EligibilityPolicy
from airclaims.integrations.booking import StaticBookingLookup

TODAY = date(2025, 6, 15)


def make_case(**overrides) -> CaseRecord:
    data = {
        "consumer_name": "Sara Al-Harbi",
        "national_id": "1098765432",
        "phone": "+966 50 123 4567",
        "email": "sara@example.com",
        "booking_reference": "ABC123",
        "flight_number": "SV246",
        "flight_date": TODAY - timedelta(days=30),
        "origin": "JED",
        "destination": "RUH",
        "dispute_category": "Flight Delay (> 3 hours)",
        "description": "The flight departed more than five hours late with no assistance offered.",
        "has_documents": True,
        "consent_given": True,
    }
    data.update(overrides)
    return CaseRecord(**data)


FOUND = BookingLookupResult(found=True, message="Booking reference verified successfully")
NOT_FOUND = BookingLookupResult(found=False, message="Booking reference not found in system")


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def policy() -> EligibilityPolicy:
    return EligibilityPolicy()


@pytest.fixture
def valid_case() -> CaseRecord:
    return make_case()


@pytest.fixture
def booking_lookup() -> StaticBookingLookup:
    return StaticBookingLookup()


def api_case(**overrides) -> dict:
    """A valid case payload dated relative to the server's clock."""
    server_today = datetime.now(timezone.utc).date()
    overrides.setdefault("flight_date", server_today - timedelta(days=30))
    case = make_case(**overrides)
    return case.model_dump(mode="json")


@pytest.fixture
async def client(booking_lookup):
    from airclaims.api.deps import get_booking_lookup, get_identity_verifier
    from airclaims.main import app

    app.dependency_overrides[get_booking_lookup] = lambda: booking_lookup
    app.dependency_overrides[get_identity_verifier] = lambda: None

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def mock_celery_tasks():
    """Mock Celery task.delay() calls to prevent actual task execution in tests."""
    with patch("airclaims.tasks.eligibility_tasks.check_case_eligibility.delay") as delay:
        delay.return_value.id = "task-123"
        yield delay
