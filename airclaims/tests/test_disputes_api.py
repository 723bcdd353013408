from unittest.mock import MagicMock, patch

import pytest

from airclaims.api.deps import get_booking_lookup
from airclaims.api.v1.disputes import JOB_FAILED_MESSAGE
from airclaims.common.exceptions import BookingLookupError
from airclaims.core.eligibility.schemas import BookingLookupResult
from airclaims.integrations.booking import BookingLookupPort
from airclaims.main import app
from airclaims.tasks.celery_app import app as celery_app

from conftest import api_case


class UnreachableBookingLookup(BookingLookupPort):
    def __init__(self):
        super().__init__("booking_unreachable")

    async def health_check(self) -> bool:
        return False

    async def lookup(self, booking_reference: str) -> BookingLookupResult:
        raise BookingLookupError("connection refused")


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Request-ID" in response.headers


# ---------- Validation ----------


@pytest.mark.asyncio
async def test_validate_valid_form(client):
    response = await client.post("/api/v1/disputes/validate", json=api_case())

    assert response.status_code == 200
    assert response.json() == {"is_valid": True, "errors": [], "warnings": []}


@pytest.mark.asyncio
async def test_validate_empty_form_lists_errors(client):
    response = await client.post("/api/v1/disputes/validate", json={})

    assert response.status_code == 200
    data = response.json()
    assert data["is_valid"] is False
    assert len(data["errors"]) == 11
    assert data["errors"][0] == "Full name is required"


@pytest.mark.asyncio
async def test_validate_identity_step(client):
    response = await client.post(
        "/api/v1/disputes/validate/identity",
        json=api_case(email="not-an-email"),
    )

    assert response.status_code == 200
    assert response.json()["errors"] == ["Please enter a valid email address"]


@pytest.mark.asyncio
async def test_validate_documents_step_is_advisory(client):
    response = await client.post(
        "/api/v1/disputes/validate/documents",
        json=api_case(has_documents=False),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["is_valid"] is True
    assert len(data["warnings"]) == 2


@pytest.mark.asyncio
async def test_validate_unknown_step(client):
    response = await client.post("/api/v1/disputes/validate/payment", json=api_case())
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unparseable_flight_date_is_rejected(client):
    payload = api_case()
    payload["flight_date"] = "yesterday"

    response = await client.post("/api/v1/disputes/validate", json=payload)
    assert response.status_code == 422


# ---------- Eligibility ----------


@pytest.mark.asyncio
async def test_eligibility_eligible(client):
    response = await client.post("/api/v1/disputes/eligibility", json=api_case())

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "eligible"
    assert len(data["details"]) == 3


@pytest.mark.asyncio
async def test_eligibility_unknown_booking(client):
    response = await client.post(
        "/api/v1/disputes/eligibility",
        json=api_case(booking_reference="ZZZ999"),
    )

    assert response.status_code == 200
    assert response.json()["status"] == "invalid"
    assert response.json()["message"] == "Booking reference not found in system"


@pytest.mark.asyncio
async def test_eligibility_missing_documents_on_hold(client):
    response = await client.post(
        "/api/v1/disputes/eligibility",
        json=api_case(has_documents=False),
    )

    assert response.status_code == 200
    assert response.json()["status"] == "hold"


@pytest.mark.asyncio
async def test_eligibility_lookup_outage_is_502(client):
    app.dependency_overrides[get_booking_lookup] = UnreachableBookingLookup

    response = await client.post("/api/v1/disputes/eligibility", json=api_case())

    assert response.status_code == 502
    assert response.json()["detail"] == BookingLookupError.USER_MESSAGE


# ---------- Background jobs ----------


@pytest.mark.asyncio
async def test_enqueue_eligibility_job(client, mock_celery_tasks):
    payload = api_case()

    response = await client.post("/api/v1/disputes/eligibility/jobs", json=payload)

    assert response.status_code == 202
    assert response.json() == {"task_id": "task-123"}
    mock_celery_tasks.assert_called_once()
    queued_case, queued_today = mock_celery_tasks.call_args.args
    assert queued_case["booking_reference"] == "ABC123"
    assert len(queued_today) == 10


@pytest.mark.asyncio
async def test_job_status_success(client):
    finished = MagicMock(state="SUCCESS", result={"status": "eligible", "message": "ok", "details": []})

    with patch.object(celery_app, "AsyncResult", return_value=finished):
        response = await client.get("/api/v1/disputes/eligibility/jobs/task-123")

    assert response.status_code == 200
    data = response.json()
    assert data["state"] == "SUCCESS"
    assert data["verdict"]["status"] == "eligible"


@pytest.mark.asyncio
async def test_job_status_pending(client):
    with patch.object(celery_app, "AsyncResult", return_value=MagicMock(state="PENDING")):
        response = await client.get("/api/v1/disputes/eligibility/jobs/task-123")

    assert response.json() == {"task_id": "task-123", "state": "PENDING", "verdict": None, "detail": None}


@pytest.mark.asyncio
async def test_job_status_booking_outage_asks_to_retry(client):
    failed = MagicMock(state="FAILURE", result=BookingLookupError("timed out"))

    with patch.object(celery_app, "AsyncResult", return_value=failed):
        response = await client.get("/api/v1/disputes/eligibility/jobs/task-123")

    assert response.json()["detail"] == BookingLookupError.USER_MESSAGE
    assert response.json()["verdict"] is None


@pytest.mark.asyncio
async def test_job_status_other_failure_hides_internal_error(client):
    failed = MagicMock(state="FAILURE", result=ValueError("flight_date: invalid date format"))

    with patch.object(celery_app, "AsyncResult", return_value=failed):
        response = await client.get("/api/v1/disputes/eligibility/jobs/task-123")

    data = response.json()
    assert data["detail"] == JOB_FAILED_MESSAGE
    assert "flight_date" not in data["detail"]
    assert data["verdict"] is None


# ---------- Case summary ----------


@pytest.mark.asyncio
async def test_open_case(client):
    response = await client.post("/api/v1/disputes/summary", json=api_case())

    assert response.status_code == 201
    data = response.json()
    assert data["case_id"].startswith("CS-")
    assert data["current_status"] == "Under Initial Review"
    assert data["priority"] == "high"
    assert data["eligibility"]["status"] == "eligible"


@pytest.mark.asyncio
async def test_open_case_requires_consent(client):
    response = await client.post("/api/v1/disputes/summary", json=api_case(consent_given=False))

    assert response.status_code == 400
    assert response.json()["detail"] == "Consent is required before a case can be opened"


@pytest.mark.asyncio
async def test_open_case_with_invalid_form(client):
    response = await client.post("/api/v1/disputes/summary", json=api_case(flight_number="EK202"))

    assert response.status_code == 400
    assert "Flight number must start with 'SV'" in response.json()["detail"]


@pytest.mark.asyncio
async def test_open_case_rejected_booking_is_recorded(client):
    response = await client.post("/api/v1/disputes/summary", json=api_case(booking_reference="ZZZ999"))

    assert response.status_code == 201
    assert response.json()["current_status"] == "Rejected"
