from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel

from airclaims.core.eligibility.schemas import EligibilityVerdict


class CaseSummary(BaseModel):
    case_id: str
    date_opened: date
    consumer_name: str
    booking_reference: str
    flight_details: str
    route: str
    dispute_category: str
    summary_of_facts: str
    requested_resolution: str
    supporting_documentation: list[str]
    regulatory_references: list[str]
    current_status: str
    priority: str
    estimated_compensation: Decimal
    eligibility: EligibilityVerdict
    next_action_due: date
    generated_at: datetime
