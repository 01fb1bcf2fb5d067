"""Pydantic models for Staybook data entities."""

from .booking import MAX_BOOKING_DAYS, Booking, ConflictVerdict
from .caller import CallerContext
from .enums import ConflictReason, ResourceKind
from .errors import (
    AccessError,
    BookingConflict,
    ErrorCode,
    ErrorResponse,
    Forbidden,
    NotFound,
    PastDateBooking,
    Unauthenticated,
)
from .listing import Listing, Review
from .user import SafeUser, TokenClaims, User

__all__ = [
    # Enums
    "ConflictReason",
    "ResourceKind",
    # Users
    "User",
    "SafeUser",
    "TokenClaims",
    "CallerContext",
    # Resources
    "Listing",
    "Review",
    "Booking",
    "ConflictVerdict",
    "MAX_BOOKING_DAYS",
    # Errors
    "AccessError",
    "BookingConflict",
    "ErrorCode",
    "ErrorResponse",
    "Forbidden",
    "NotFound",
    "PastDateBooking",
    "Unauthenticated",
]
