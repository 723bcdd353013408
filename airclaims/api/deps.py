from fastapi import Depends

from airclaims.config import settings
from airclaims.core.eligibility.schemas import EligibilityPolicy
from airclaims.core.eligibility.service import EligibilityService
from airclaims.integrations.booking import BookingLookupPort, ReservationClient
from airclaims.integrations.identity import IdentityVerificationClient, IdentityVerifier


def get_policy() -> EligibilityPolicy:
    return EligibilityPolicy.from_settings()


def get_booking_lookup() -> BookingLookupPort:
    return ReservationClient()


def get_identity_verifier() -> IdentityVerifier | None:
    return IdentityVerificationClient()


def get_eligibility_service(
    booking_lookup: BookingLookupPort = Depends(get_booking_lookup),
    identity_verifier: IdentityVerifier | None = Depends(get_identity_verifier),
    policy: EligibilityPolicy = Depends(get_policy),
) -> EligibilityService:
    return EligibilityService(
        booking_lookup=booking_lookup,
        identity_verifier=identity_verifier,
        policy=policy,
        lookup_timeout=settings.BOOKING_TIMEOUT_SECONDS,
    )
