"""AirClaims integration clients.

Every client implements ``BaseIntegration``; when configured with a
``mock_`` API key it answers locally without making external calls.
"""

from airclaims.integrations.base import BaseIntegration
from airclaims.integrations.booking import BookingLookupPort, ReservationClient, StaticBookingLookup
from airclaims.integrations.identity import IdentityVerificationClient, IdentityVerifier

__all__ = [
    "BaseIntegration",
    "BookingLookupPort",
    "IdentityVerificationClient",
    "IdentityVerifier",
    "ReservationClient",
    "StaticBookingLookup",
]
