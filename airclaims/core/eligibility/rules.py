"""Eligibility decision procedure.

An ordered chain of guards; the first guard that fails decides the verdict
and later guards never run. Each guard's message assumes every earlier guard
passed, so the order below is part of the contract:

1. completeness        -> invalid
2. booking existence   -> invalid
3. complaint window    -> invalid
4. category coverage   -> invalid
5. documentation       -> hold
6. jurisdiction        -> hold
7. otherwise           -> eligible
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from airclaims.common.enums import DisputeCategory, EligibilityStatus
from airclaims.common.logging import get_logger
from airclaims.core.eligibility.reference_data import KNOWN_CATEGORIES
from airclaims.core.eligibility.schemas import (
    BookingLookupResult,
    CaseRecord,
    EligibilityPolicy,
    EligibilityVerdict,
)
from airclaims.core.eligibility.validators import require_case_record
from airclaims.core.eligibility.windows import is_outside_window

logger = get_logger("eligibility.rules")

_DEFAULT_POLICY = EligibilityPolicy()

Guard = Callable[[CaseRecord, BookingLookupResult, date, EligibilityPolicy], EligibilityVerdict | None]


def check_completeness(case: CaseRecord) -> EligibilityVerdict | None:
    case = require_case_record(case)
    required = (
        case.consumer_name,
        case.national_id,
        case.phone,
        case.email,
        case.booking_reference,
        case.flight_number,
    )
    if all(value.strip() for value in required):
        return None
    return EligibilityVerdict(
        status=EligibilityStatus.INVALID,
        message="Missing required consumer information or booking details",
        details=["Please ensure all mandatory fields are completed"],
    )


def _completeness_guard(case, booking, today, policy):
    return check_completeness(case)


def _booking_guard(case, booking, today, policy):
    if booking.found:
        return None
    return EligibilityVerdict(
        status=EligibilityStatus.INVALID,
        message="Booking reference not found in system",
        details=[
            "The provided booking reference does not match any reservation in our system",
            "Please verify the booking reference and try again",
        ],
    )


def _window_guard(case, booking, today, policy):
    # An undated case cannot be placed inside the window.
    if case.flight_date is not None and not is_outside_window(
        case.flight_date, today, policy.complaint_window_months
    ):
        return None

    when = case.flight_date.isoformat() if case.flight_date else "an unspecified date"
    return EligibilityVerdict(
        status=EligibilityStatus.INVALID,
        message="Flight date is outside the allowable complaint period",
        details=[
            f"Under aviation regulations, complaints must be filed within "
            f"{policy.complaint_window_months} months of the incident",
            f"Your flight was on {when}, which exceeds this timeframe",
        ],
    )


def _category_guard(case, booking, today, policy):
    category = case.dispute_category
    if category in policy.covered_categories:
        return None

    if category == DisputeCategory.OTHER.value:
        return EligibilityVerdict(
            status=EligibilityStatus.INVALID,
            message="Dispute category not covered under current policy",
            details=[
                "The selected category may not be eligible for compensation",
                "Please review covered categories or contact customer service for clarification",
            ],
        )

    if category not in KNOWN_CATEGORIES:
        return EligibilityVerdict(
            status=EligibilityStatus.INVALID,
            message="Dispute category not recognized",
            details=[
                f"'{category}' is not one of the supported dispute categories",
                "Please select a category from the list and resubmit",
            ],
        )

    # Known but uncovered categories (e.g. refund requests) go on to the
    # remaining checks and are handled downstream.
    return None


def _documentation_guard(case, booking, today, policy):
    if case.has_documents:
        return None
    return EligibilityVerdict(
        status=EligibilityStatus.HOLD,
        message="Supporting documentation required to proceed",
        details=[
            "Please upload boarding pass, ticket receipt, or other relevant documents",
            "Your case will be placed on hold until documentation is received",
            "You can upload documents through our customer portal",
        ],
    )


def is_covered_route(origin: str, destination: str, policy: EligibilityPolicy) -> bool:
    airports = policy.jurisdiction_airports
    return origin in airports or destination in airports


def _jurisdiction_guard(case, booking, today, policy):
    if is_covered_route(case.origin, case.destination, policy):
        return None
    return EligibilityVerdict(
        status=EligibilityStatus.HOLD,
        message="Case flagged for manual review due to regulatory jurisdiction",
        details=[
            "Flight route may fall outside standard consumer protection regulations",
            "Case will be reviewed by our regulatory compliance team",
            "Expected review time: 3-5 business days",
        ],
    )


GUARDS: tuple[Guard, ...] = (
    _completeness_guard,
    _booking_guard,
    _window_guard,
    _category_guard,
    _documentation_guard,
    _jurisdiction_guard,
)


def check_eligibility(
    case: CaseRecord,
    booking: BookingLookupResult,
    *,
    today: date,
    policy: EligibilityPolicy | None = None,
) -> EligibilityVerdict:
    """Run the guard chain for ``case`` given the reservation system's answer."""
    case = require_case_record(case)
    policy = policy or _DEFAULT_POLICY

    for guard in GUARDS:
        verdict = guard(case, booking, today, policy)
        if verdict is not None:
            logger.info(
                "Eligibility for booking %s: %s (%s)",
                case.booking_reference or "-",
                verdict.status.value,
                guard.__name__.strip("_"),
            )
            return verdict

    logger.info("Eligibility for booking %s: eligible", case.booking_reference)
    return EligibilityVerdict(
        status=EligibilityStatus.ELIGIBLE,
        message=f"Your dispute is eligible for processing under {policy.regulator_name} regulations",
        details=[
            "All eligibility requirements met",
            "Case will proceed to compensation calculation",
            "Expected processing time: 5-10 business days",
        ],
    )
