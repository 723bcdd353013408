from fastapi import HTTPException, status


class AirClaimsException(HTTPException):
    def __init__(self, detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(status_code=status_code, detail=detail)


class NotFoundError(AirClaimsException):
    def __init__(self, resource: str, resource_id: str | None = None):
        detail = f"{resource} not found"
        if resource_id:
            detail = f"{resource} '{resource_id}' not found"
        super().__init__(detail=detail, status_code=status.HTTP_404_NOT_FOUND)


class BadRequestError(AirClaimsException):
    def __init__(self, detail: str):
        super().__init__(detail=detail, status_code=status.HTTP_400_BAD_REQUEST)


class CaseRecordError(AirClaimsException):
    """Raised when the engine is handed something that is not a case record."""

    def __init__(self, received: object):
        super().__init__(
            detail=f"Expected a CaseRecord, got {type(received).__name__}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


class ExternalServiceError(AirClaimsException):
    def __init__(self, service: str, detail: str | None = None):
        msg = f"External service error: {service}"
        if detail:
            msg += f" - {detail}"
        self.service = service
        super().__init__(detail=msg, status_code=status.HTTP_502_BAD_GATEWAY)


class BookingLookupError(ExternalServiceError):
    """The reservation system could not confirm or deny a booking reference.

    Distinct from a "booking not found" verdict: the caller should retry or
    show a transient error, never record the case as invalid.
    """

    USER_MESSAGE = "Booking verification is temporarily unavailable. Please try again."

    def __init__(self, reason: str):
        super().__init__("reservations", reason)
        self.reason = reason
