"""Field and step validators for the dispute intake wizard.

Each step validator checks the fields entered on one wizard screen and
collects every violation; nothing short-circuits across fields. Within a
field the first failing condition wins, so a missing value never also
reports a format error. ``validate_all`` runs the four steps in order and
concatenates their findings, which is the same rule set a full submission is
checked against.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date

from airclaims.common.enums import DisputeCategory, WizardStep
from airclaims.common.exceptions import CaseRecordError
from airclaims.common.logging import get_logger
from airclaims.core.eligibility.reference_data import (
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    NAME_MIN_LENGTH,
    NATIONAL_ID_MIN_LENGTH,
    PHONE_MIN_DIGITS,
    SUGGESTED_DOCUMENTS,
)
from airclaims.core.eligibility.schemas import CaseRecord, EligibilityPolicy, ValidationVerdict
from airclaims.core.eligibility.windows import (
    is_future,
    is_outside_window,
    needs_extended_processing,
)

logger = get_logger("eligibility.validators")

_ALNUM_RE = re.compile(r"[A-Za-z0-9]+")
_PHONE_RE = re.compile(r"\+?[0-9 \-()]+")
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_BOOKING_REF_RE = re.compile(r"[A-Z0-9]{6}")
_AIRPORT_RE = re.compile(r"[A-Z]{3}")

_DEFAULT_POLICY = EligibilityPolicy()


def require_case_record(case: object) -> CaseRecord:
    if not isinstance(case, CaseRecord):
        raise CaseRecordError(case)
    return case


def _is_valid_phone(phone: str) -> bool:
    if not _PHONE_RE.fullmatch(phone):
        return False
    return sum(ch.isdigit() for ch in phone) >= PHONE_MIN_DIGITS


# ---------------------------------------------------------------------------
# Step 1: consumer identity & contact
# ---------------------------------------------------------------------------


def validate_identity(
    case: CaseRecord, *, today: date | None = None, policy: EligibilityPolicy | None = None
) -> ValidationVerdict:
    case = require_case_record(case)
    errors: list[str] = []

    name = case.consumer_name.strip()
    if not name:
        errors.append("Full name is required")
    elif len(name) < NAME_MIN_LENGTH:
        errors.append("Full name must be at least 2 characters long")

    if not case.national_id.strip():
        errors.append("National ID or Passport number is required")
    elif len(case.national_id) < NATIONAL_ID_MIN_LENGTH:
        errors.append("National ID or Passport number must be at least 8 characters")
    elif not _ALNUM_RE.fullmatch(case.national_id):
        errors.append("National ID or Passport number must contain only letters and numbers")

    if not case.phone.strip():
        errors.append("Phone number is required")
    elif not _is_valid_phone(case.phone):
        errors.append("Please enter a valid phone number (minimum 10 digits)")

    if not case.email.strip():
        errors.append("Email address is required")
    elif not _EMAIL_RE.fullmatch(case.email):
        errors.append("Please enter a valid email address")

    return ValidationVerdict.from_findings(errors, [])


# ---------------------------------------------------------------------------
# Step 2: flight & booking data
# ---------------------------------------------------------------------------


def validate_flight(
    case: CaseRecord, *, today: date, policy: EligibilityPolicy | None = None
) -> ValidationVerdict:
    case = require_case_record(case)
    policy = policy or _DEFAULT_POLICY
    errors: list[str] = []
    warnings: list[str] = []

    if not case.booking_reference.strip():
        errors.append("Booking reference is required")
    elif not _BOOKING_REF_RE.fullmatch(case.booking_reference):
        errors.append("Booking reference must be exactly 6 alphanumeric characters")

    carrier = policy.carrier_code
    if not case.flight_number.strip():
        errors.append("Flight number is required")
    elif not re.fullmatch(rf"{re.escape(carrier)}[0-9]+", case.flight_number, re.IGNORECASE):
        errors.append(
            f"Flight number must start with '{carrier}' followed by numbers (e.g., {carrier}123)"
        )

    if case.flight_date is None:
        errors.append("Flight date is required")
    else:
        if is_outside_window(case.flight_date, today, policy.complaint_window_months):
            errors.append(
                f"Flight date must be within the last {policy.complaint_window_months} months "
                "for complaint eligibility"
            )
        if is_future(case.flight_date, today):
            errors.append("Flight date cannot be in the future")
        if needs_extended_processing(
            case.flight_date,
            today,
            policy.extended_processing_months,
            policy.complaint_window_months,
        ):
            warnings.append(
                f"Flight is older than {policy.extended_processing_months} months - "
                "processing may take longer"
            )

    if not case.origin.strip():
        errors.append("Origin airport is required")
    elif not _AIRPORT_RE.fullmatch(case.origin):
        errors.append("Origin airport must be a 3-letter airport code (e.g., RUH)")

    if not case.destination.strip():
        errors.append("Destination airport is required")
    elif not _AIRPORT_RE.fullmatch(case.destination):
        errors.append("Destination airport must be a 3-letter airport code (e.g., JED)")

    if case.origin and case.destination and case.origin == case.destination:
        errors.append("Origin and destination airports cannot be the same")

    return ValidationVerdict.from_findings(errors, warnings)


# ---------------------------------------------------------------------------
# Step 3: complaint details
# ---------------------------------------------------------------------------


def validate_complaint(
    case: CaseRecord, *, today: date | None = None, policy: EligibilityPolicy | None = None
) -> ValidationVerdict:
    case = require_case_record(case)
    errors: list[str] = []
    warnings: list[str] = []

    if not case.dispute_category:
        errors.append("Dispute category is required")

    description = case.description.strip()
    if not description:
        errors.append("Description of the issue is required")
    elif len(description) < DESCRIPTION_MIN_LENGTH:
        errors.append("Please provide a more detailed description (minimum 20 characters)")
    elif len(description) > DESCRIPTION_MAX_LENGTH:
        errors.append("Description is too long (maximum 2000 characters)")

    if case.dispute_category == DisputeCategory.OTHER.value:
        warnings.append(
            "'Other' category may require manual review and longer processing time"
        )

    return ValidationVerdict.from_findings(errors, warnings)


# ---------------------------------------------------------------------------
# Step 4: supporting documents (advisory only)
# ---------------------------------------------------------------------------


def validate_documents(
    case: CaseRecord, *, today: date | None = None, policy: EligibilityPolicy | None = None
) -> ValidationVerdict:
    case = require_case_record(case)
    warnings: list[str] = []

    if not case.has_documents:
        warnings.append("Supporting documents are highly recommended for faster processing")
        warnings.append(f"Required documents: {', '.join(SUGGESTED_DOCUMENTS)}")

    return ValidationVerdict(is_valid=True, errors=[], warnings=warnings)


StepValidator = Callable[..., ValidationVerdict]

STEP_VALIDATORS: dict[WizardStep, StepValidator] = {
    WizardStep.IDENTITY: validate_identity,
    WizardStep.FLIGHT: validate_flight,
    WizardStep.COMPLAINT: validate_complaint,
    WizardStep.DOCUMENTS: validate_documents,
}


def validate_step(
    step: WizardStep | str,
    case: CaseRecord,
    *,
    today: date,
    policy: EligibilityPolicy | None = None,
) -> ValidationVerdict:
    validator = STEP_VALIDATORS[WizardStep(step)]
    return validator(case, today=today, policy=policy)


def validate_all(
    case: CaseRecord, *, today: date, policy: EligibilityPolicy | None = None
) -> ValidationVerdict:
    verdict = ValidationVerdict()
    for step in WizardStep:
        verdict = verdict + validate_step(step, case, today=today, policy=policy)

    logger.debug(
        "Validated case form: %d errors, %d warnings",
        len(verdict.errors),
        len(verdict.warnings),
    )
    return verdict
