"""Lookup tables shared by the validators and the eligibility rules."""

from airclaims.common.enums import DisputeCategory

COMPLAINT_WINDOW_MONTHS = 12
EXTENDED_PROCESSING_MONTHS = 6

NAME_MIN_LENGTH = 2
NATIONAL_ID_MIN_LENGTH = 8
PHONE_MIN_DIGITS = 10
DESCRIPTION_MIN_LENGTH = 20
DESCRIPTION_MAX_LENGTH = 2000

# Categories compensable under the consumer-protection regulation.
COVERED_CATEGORIES: tuple[str, ...] = (
    DisputeCategory.FLIGHT_DELAY.value,
    DisputeCategory.CANCELLATION.value,
    DisputeCategory.BAGGAGE.value,
    DisputeCategory.DENIED_BOARDING.value,
)

KNOWN_CATEGORIES: frozenset[str] = frozenset(c.value for c in DisputeCategory)

SUGGESTED_DOCUMENTS: tuple[str, ...] = (
    "boarding pass",
    "ticket receipt",
    "communication with airline",
)

# Seed data for the static booking lookup and the reservation client's mock mode.
SAMPLE_BOOKINGS: dict[str, dict[str, str]] = {
    "ABC123": {"flight_number": "SV246", "date": "2025-05-25", "route": "JED → RUH"},
    "DEF456": {"flight_number": "SV102", "date": "2025-05-20", "route": "RUH → JED"},
    "GHI789": {"flight_number": "SV445", "date": "2025-05-15", "route": "RUH → DXB"},
    "SVX7YQ": {"flight_number": "SV246", "date": "2025-05-25", "route": "JED → RUH"},
}

REGULATORY_REFERENCES: tuple[str, ...] = (
    "{regulator} Consumer Protection Regulation",
    "Montreal Convention Article 19",
)
