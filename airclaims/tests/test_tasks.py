from unittest.mock import patch

import pytest

from airclaims.common.exceptions import BookingLookupError
from airclaims.tasks.eligibility_tasks import check_case_eligibility

from conftest import TODAY, make_case


def _payload(**overrides) -> dict:
    return make_case(**overrides).model_dump(mode="json")


def test_task_returns_serialized_verdict():
    result = check_case_eligibility(_payload(), TODAY.isoformat())

    assert result["status"] == "eligible"
    assert result["message"] == "Your dispute is eligible for processing under GACA regulations"


def test_task_reports_unknown_booking():
    result = check_case_eligibility(_payload(booking_reference="ZZZ999"), TODAY.isoformat())
    assert result["status"] == "invalid"


def test_task_uses_the_date_it_was_queued_with():
    result = check_case_eligibility(_payload(), "2027-01-01")
    assert result["message"] == "Flight date is outside the allowable complaint period"


def test_task_failure_propagates():
    with patch(
        "airclaims.integrations.booking.ReservationClient.lookup",
        side_effect=BookingLookupError("timed out"),
    ):
        with pytest.raises(BookingLookupError):
            check_case_eligibility(_payload(), TODAY.isoformat())
