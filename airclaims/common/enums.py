import enum


class WizardStep(str, enum.Enum):
    IDENTITY = "identity"
    FLIGHT = "flight"
    COMPLAINT = "complaint"
    DOCUMENTS = "documents"


class EligibilityStatus(str, enum.Enum):
    ELIGIBLE = "eligible"
    INVALID = "invalid"
    HOLD = "hold"


class DisputeCategory(str, enum.Enum):
    FLIGHT_DELAY = "Flight Delay (> 3 hours)"
    CANCELLATION = "Cancellation without 14 days notice"
    BAGGAGE = "Lost/damaged baggage"
    DENIED_BOARDING = "Denied boarding/reaccommodation"
    REFUND_REQUEST = "Refund Request"
    OTHER = "Other"


class CasePriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CaseStatus(str, enum.Enum):
    UNDER_REVIEW = "Under Initial Review"
    ON_HOLD = "On Hold"
    REJECTED = "Rejected"
