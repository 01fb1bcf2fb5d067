"""Booking (reservation interval) models and conflict verdicts."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from .enums import ConflictReason

# One storage transaction holds the booking plus one claim per day.
MAX_BOOKING_DAYS = 90


class Booking(BaseModel):
    """A reservation of a listing by a user for an inclusive date range."""

    model_config = ConfigDict(strict=True)

    booking_id: str = Field(..., description="Unique booking ID")
    listing_id: str = Field(..., description="Booked listing")
    user_id: str = Field(..., description="Requesting user")
    start_date: dt.date = Field(..., description="First day of the stay")
    end_date: dt.date = Field(..., description="Last day of the stay")
    created_at: dt.datetime = Field(..., description="Creation timestamp")

    @property
    def days(self) -> list[dt.date]:
        """Every calendar day the booking occupies, both ends included."""
        return [
            self.start_date + dt.timedelta(days=i)
            for i in range((self.end_date - self.start_date).days + 1)
        ]


class ConflictVerdict(BaseModel):
    """Outcome of checking a candidate date range against existing bookings."""

    model_config = ConfigDict(frozen=True)

    rejected: bool = False
    reasons: frozenset[ConflictReason] = frozenset()
    conflicting: Booking | None = None

    @classmethod
    def no_conflict(cls) -> "ConflictVerdict":
        return cls()

    @classmethod
    def reject(
        cls,
        *reasons: ConflictReason,
        conflicting: Booking | None = None,
    ) -> "ConflictVerdict":
        return cls(rejected=True, reasons=frozenset(reasons), conflicting=conflicting)

    @property
    def is_past_date(self) -> bool:
        return ConflictReason.PAST_DATE in self.reasons
