"""API request/response models for session, booking and review endpoints."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, model_validator

from staybook.models import MAX_BOOKING_DAYS, Booking, SafeUser


class SessionResponse(BaseModel):
    """Current session: the caller's public identity, or null."""

    user: SafeUser | None = None


class MessageResponse(BaseModel):
    message: str


class BookingCreateRequest(BaseModel):
    """Request to book a listing.

    Field names follow the client's camelCase JSON. The requesting user is
    taken from the session, never from the body.
    """

    model_config = ConfigDict(
        # JSON has no native date type, dates arrive as ISO strings
        strict=False,
        populate_by_name=True,
        json_schema_extra={
            "examples": [{"startDate": "2025-07-15", "endDate": "2025-07-22"}]
        },
    )

    start_date: dt.date = Field(..., alias="startDate", description="First day")
    end_date: dt.date = Field(..., alias="endDate", description="Last day")

    @model_validator(mode="after")
    def check_range(self) -> "BookingCreateRequest":
        if self.end_date <= self.start_date:
            raise ValueError("endDate cannot be on or before startDate")
        if (self.end_date - self.start_date).days + 1 > MAX_BOOKING_DAYS:
            raise ValueError(f"Bookings may not exceed {MAX_BOOKING_DAYS} days")
        return self


class BookingSummary(BaseModel):
    """Dates-only view of a booking shown to callers who don't own the listing."""

    listing_id: str
    start_date: dt.date
    end_date: dt.date


class BookingListResponse(BaseModel):
    bookings: list[Booking | BookingSummary]


class ReviewCreateRequest(BaseModel):
    """Request to review a listing."""

    model_config = ConfigDict(strict=False)

    review: str = Field(..., min_length=1, description="Review text")
    stars: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
