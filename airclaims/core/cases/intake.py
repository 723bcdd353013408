"""Case intake: turns a validated, assessed claim into a case summary.

Priority and the compensation estimate are keyword heuristics over the
category label, so free-text categories that mention a known claim type
still triage sensibly.
"""

from __future__ import annotations

import random
from datetime import date, datetime, timedelta
from decimal import Decimal

from airclaims.common.enums import CasePriority, CaseStatus, EligibilityStatus
from airclaims.common.exceptions import BadRequestError
from airclaims.common.logging import get_logger
from airclaims.core.cases.schemas import CaseSummary
from airclaims.core.eligibility.reference_data import REGULATORY_REFERENCES, SUGGESTED_DOCUMENTS
from airclaims.core.eligibility.schemas import CaseRecord, EligibilityPolicy, EligibilityVerdict
from airclaims.core.eligibility.validators import validate_all

logger = get_logger("cases.intake")

NEXT_ACTION_DAYS = 7

# (keyword, amount) pairs; first match wins.
_COMPENSATION_TABLE: list[tuple[str, Decimal]] = [
    ("delay", Decimal("400.00")),
    ("cancellation", Decimal("600.00")),
    ("denied boarding", Decimal("400.00")),
    ("baggage", Decimal("200.00")),
    ("refund", Decimal("500.00")),
]
_DEFAULT_COMPENSATION = Decimal("250.00")

_STATUS_BY_ELIGIBILITY: dict[EligibilityStatus, CaseStatus] = {
    EligibilityStatus.ELIGIBLE: CaseStatus.UNDER_REVIEW,
    EligibilityStatus.HOLD: CaseStatus.ON_HOLD,
    EligibilityStatus.INVALID: CaseStatus.REJECTED,
}


def generate_case_id(now: datetime, rng: random.Random | None = None) -> str:
    suffix = (rng or random).randint(0, 999_999)
    return f"CS-{now.year}-{suffix:06d}"


def determine_priority(category: str) -> CasePriority:
    label = (category or "").lower()

    if "delay" in label and "> 3 hours" in label:
        return CasePriority.HIGH
    if "denied boarding" in label or "cancellation" in label:
        return CasePriority.HIGH
    if "baggage" in label or "refund" in label:
        return CasePriority.MEDIUM
    return CasePriority.LOW


def estimate_compensation(category: str) -> Decimal:
    label = (category or "").lower()
    for keyword, amount in _COMPENSATION_TABLE:
        if keyword in label:
            return amount
    return _DEFAULT_COMPENSATION


def ensure_ready_for_intake(case: CaseRecord, *, today: date, policy: EligibilityPolicy) -> None:
    """Reject cases without consent or with outstanding validation errors."""
    if not case.consent_given:
        raise BadRequestError("Consent is required before a case can be opened")

    validation = validate_all(case, today=today, policy=policy)
    if not validation.is_valid:
        raise BadRequestError("; ".join(validation.errors))


def build_case_summary(
    case: CaseRecord,
    verdict: EligibilityVerdict,
    *,
    now: datetime,
    policy: EligibilityPolicy | None = None,
    case_id: str | None = None,
) -> CaseSummary:
    policy = policy or EligibilityPolicy()
    ensure_ready_for_intake(case, today=now.date(), policy=policy)

    summary = CaseSummary(
        case_id=case_id or generate_case_id(now),
        date_opened=now.date(),
        consumer_name=case.consumer_name.strip(),
        booking_reference=case.booking_reference,
        flight_details=f"{case.flight_number.upper()}, {case.flight_date.isoformat()}",
        route=f"{case.origin} → {case.destination}",
        dispute_category=case.dispute_category,
        summary_of_facts=case.description.strip(),
        requested_resolution=f"Compensation as per {policy.regulator_name} regulations",
        supporting_documentation=(
            [doc.capitalize() for doc in SUGGESTED_DOCUMENTS] if case.has_documents else ["To be provided"]
        ),
        regulatory_references=[ref.format(regulator=policy.regulator_name) for ref in REGULATORY_REFERENCES],
        current_status=_STATUS_BY_ELIGIBILITY[verdict.status].value,
        priority=determine_priority(case.dispute_category).value,
        estimated_compensation=estimate_compensation(case.dispute_category),
        eligibility=verdict,
        next_action_due=(now + timedelta(days=NEXT_ACTION_DAYS)).date(),
        generated_at=now,
    )
    logger.info(
        "Opened case %s (%s, priority=%s)", summary.case_id, summary.current_status, summary.priority
    )
    return summary
