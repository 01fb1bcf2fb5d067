"""Access and booking errors surfaced to API clients.

Every rejection a guard or the conflict detector can produce is one of the
classes below. Each carries a fixed error code, HTTP status and message, so
the exception handler never has to inspect ad hoc attributes.

Response body shape:
    {"message": "...", "errors": {"startDate": "...", "endDate": "..."}}

`errors` is only present for booking conflicts.
"""

from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict

from .enums import ConflictReason, ResourceKind


class ErrorCode(str, Enum):
    """Error codes for access and booking failures."""

    AUTH_REQUIRED = "AUTH_REQUIRED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    BOOKING_CONFLICT = "BOOKING_CONFLICT"
    PAST_DATE = "PAST_DATE"


# Field-level messages for booking conflicts
CONFLICT_FIELD_MESSAGES: dict[ConflictReason, str] = {
    ConflictReason.START_CONFLICT: "Start date conflicts with an existing booking",
    ConflictReason.END_CONFLICT: "End date conflicts with an existing booking",
}


class ErrorResponse(BaseModel):
    """JSON body returned for every access error."""

    model_config = ConfigDict(strict=True)

    message: str
    errors: Optional[dict[str, str]] = None


class AccessError(Exception):
    """Base class for errors raised by guards and the conflict detector."""

    code: ClassVar[ErrorCode]
    status_code: ClassVar[int]

    def __init__(self, message: str, errors: Optional[dict[str, str]] = None):
        self.message = message
        self.errors = errors
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert this exception to the client-facing error body."""
        return ErrorResponse(message=self.message, errors=self.errors)


class Unauthenticated(AccessError):
    """No valid identity on the request."""

    code = ErrorCode.AUTH_REQUIRED
    status_code = 401

    def __init__(self) -> None:
        super().__init__("Authentication required")


class Forbidden(AccessError):
    """Valid identity, insufficient permission."""

    code = ErrorCode.FORBIDDEN
    status_code = 403

    def __init__(
        self,
        message: str = "Forbidden",
        errors: Optional[dict[str, str]] = None,
    ):
        super().__init__(message, errors)


class NotFound(AccessError):
    """Referenced resource does not exist."""

    code = ErrorCode.NOT_FOUND
    status_code = 404

    def __init__(self, kind: ResourceKind):
        self.kind = kind
        super().__init__(f"{kind.label} couldn't be found")


class BookingConflict(Forbidden):
    """Candidate dates overlap an existing booking on the same listing."""

    code = ErrorCode.BOOKING_CONFLICT

    def __init__(self, reasons: frozenset[ConflictReason]):
        self.reasons = reasons
        errors = {
            reason.value: CONFLICT_FIELD_MESSAGES[reason]
            for reason in (ConflictReason.START_CONFLICT, ConflictReason.END_CONFLICT)
            if reason in reasons
        }
        super().__init__(
            "Sorry, this spot is already booked for the specified dates",
            errors,
        )


class PastDateBooking(Forbidden):
    """Candidate start date is today or earlier."""

    code = ErrorCode.PAST_DATE

    def __init__(self) -> None:
        super().__init__("Bookings may not be made for a past date")
