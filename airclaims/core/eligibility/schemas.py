from __future__ import annotations

import datetime
from datetime import date

from pydantic import BaseModel, Field, field_validator

from airclaims.common.enums import EligibilityStatus
from airclaims.config import settings
from airclaims.core.eligibility.reference_data import (
    COMPLAINT_WINDOW_MONTHS,
    COVERED_CATEGORIES,
    EXTENDED_PROCESSING_MONTHS,
)


class CaseRecord(BaseModel):
    """A (possibly partial) dispute claim as entered in the intake wizard."""

    consumer_name: str = ""
    national_id: str = ""
    phone: str = ""
    email: str = ""
    booking_reference: str = ""
    flight_number: str = ""
    flight_date: date | None = None
    origin: str = ""
    destination: str = ""
    dispute_category: str = ""
    description: str = ""
    has_documents: bool = False
    consent_given: bool = False

    model_config = {"frozen": True}

    @field_validator("flight_date", mode="before")
    @classmethod
    def _blank_date_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator(
        "consumer_name",
        "national_id",
        "phone",
        "email",
        "booking_reference",
        "flight_number",
        "origin",
        "destination",
        "dispute_category",
        "description",
        mode="before",
    )
    @classmethod
    def _none_is_blank(cls, value):
        return "" if value is None else value


class ValidationVerdict(BaseModel):
    is_valid: bool = True
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_findings(cls, errors: list[str], warnings: list[str]) -> ValidationVerdict:
        return cls(is_valid=not errors, errors=list(errors), warnings=list(warnings))

    def __add__(self, other: ValidationVerdict) -> ValidationVerdict:
        return ValidationVerdict.from_findings(
            self.errors + other.errors, self.warnings + other.warnings
        )


class EligibilityVerdict(BaseModel):
    status: EligibilityStatus
    message: str
    details: list[str] = Field(default_factory=list)


class FlightDetails(BaseModel):
    flight_number: str
    date: datetime.date
    route: str


class BookingLookupResult(BaseModel):
    found: bool
    flight_details: FlightDetails | None = None
    message: str = ""


class ValidatedFields(BaseModel):
    name: bool = False
    national_id: bool = False
    phone: bool = False
    email: bool = False


class IdentityCheckResult(BaseModel):
    is_valid: bool
    confidence: float = Field(ge=0.0, le=1.0)
    validated_fields: ValidatedFields = Field(default_factory=ValidatedFields)
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    risk_score: float = Field(default=0.0, ge=0.0, le=1.0)
    recommendations: list[str] = Field(default_factory=list)


class EligibilityPolicy(BaseModel):
    """Carrier- and regulator-specific parameters of the rule engine."""

    carrier_code: str = "SV"
    regulator_name: str = "GACA"
    jurisdiction_airports: frozenset[str] = frozenset(
        {"RUH", "JED", "DMM", "AHB", "TIF", "MED", "GIZ", "AQI"}
    )
    covered_categories: tuple[str, ...] = COVERED_CATEGORIES
    complaint_window_months: int = Field(default=COMPLAINT_WINDOW_MONTHS, gt=0)
    extended_processing_months: int = Field(default=EXTENDED_PROCESSING_MONTHS, gt=0)

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls) -> EligibilityPolicy:
        return cls(
            carrier_code=settings.CARRIER_CODE,
            regulator_name=settings.REGULATOR_NAME,
            jurisdiction_airports=settings.jurisdiction_airports,
        )
