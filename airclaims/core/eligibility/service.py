import asyncio
from datetime import date

from airclaims.common.enums import WizardStep
from airclaims.common.exceptions import BookingLookupError, ExternalServiceError
from airclaims.common.logging import get_logger
from airclaims.core.eligibility.rules import check_completeness, check_eligibility
from airclaims.core.eligibility.schemas import (
    BookingLookupResult,
    CaseRecord,
    EligibilityPolicy,
    EligibilityVerdict,
    IdentityCheckResult,
    ValidationVerdict,
)
from airclaims.core.eligibility.validators import validate_all, validate_step
from airclaims.integrations.booking import BookingLookupPort
from airclaims.integrations.identity import IdentityVerifier

logger = get_logger("eligibility.service")

IDENTITY_UNAVAILABLE_WARNING = "Identity verification service temporarily unavailable"


def _identity_warnings(result: IdentityCheckResult) -> list[str]:
    warnings = [f"Identity verification confidence: {result.confidence:.0%}"]
    if not result.is_valid:
        warnings.append("Identity details could not be fully verified and may be reviewed manually")
    # The service's own errors are opinions here, never blocking findings.
    warnings.extend(result.warnings)
    warnings.extend(result.errors)
    return warnings


class EligibilityService:
    """Runs the rule engine against its collaborators.

    The validators and the guard chain stay pure; this class owns the one
    remote call the guard chain needs (the booking lookup) and the optional
    identity-verification opinion.
    """

    def __init__(
        self,
        booking_lookup: BookingLookupPort,
        identity_verifier: IdentityVerifier | None = None,
        policy: EligibilityPolicy | None = None,
        lookup_timeout: float | None = None,
    ) -> None:
        self.booking_lookup = booking_lookup
        self.identity_verifier = identity_verifier
        self.policy = policy or EligibilityPolicy.from_settings()
        self.lookup_timeout = lookup_timeout

    async def validate_step(self, step: WizardStep, case: CaseRecord, *, today: date) -> ValidationVerdict:
        verdict = validate_step(step, case, today=today, policy=self.policy)
        if step == WizardStep.IDENTITY and verdict.is_valid:
            verdict = await self._with_identity_opinion(verdict, case)
        return verdict

    def validate_all(self, case: CaseRecord, *, today: date) -> ValidationVerdict:
        return validate_all(case, today=today, policy=self.policy)

    async def _with_identity_opinion(self, verdict: ValidationVerdict, case: CaseRecord) -> ValidationVerdict:
        if self.identity_verifier is None:
            return verdict

        try:
            result = await self.identity_verifier.verify(case)
        except ExternalServiceError as e:
            logger.warning("Identity verification unavailable: %s", e.detail)
            extra = [IDENTITY_UNAVAILABLE_WARNING]
        else:
            extra = _identity_warnings(result)

        return ValidationVerdict(
            is_valid=verdict.is_valid,
            errors=verdict.errors,
            warnings=verdict.warnings + extra,
        )

    async def check_eligibility(self, case: CaseRecord, *, today: date) -> EligibilityVerdict:
        """Decide eligibility, consulting the reservation system when needed.

        Raises ``BookingLookupError`` when the reservation system cannot
        answer; that is never reported as an ``invalid`` verdict.
        """
        incomplete = check_completeness(case)
        if incomplete is not None:
            return incomplete

        try:
            booking = await asyncio.wait_for(
                self.booking_lookup.lookup(case.booking_reference),
                timeout=self.lookup_timeout,
            )
        except BookingLookupError:
            raise
        except asyncio.TimeoutError as e:
            logger.error(
                "Booking lookup for %s timed out (timeout=%s)", case.booking_reference, self.lookup_timeout
            )
            raise BookingLookupError("timed out") from e
        except Exception as e:
            logger.error("Booking lookup for %s failed: %r", case.booking_reference, e)
            raise BookingLookupError("lookup failed") from e

        if not isinstance(booking, BookingLookupResult):
            logger.error(
                "Booking lookup for %s returned %s", case.booking_reference, type(booking).__name__
            )
            raise BookingLookupError("malformed response")

        return check_eligibility(case, booking, today=today, policy=self.policy)
