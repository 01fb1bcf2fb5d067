"""Booking service: conflict check plus atomic reservation write."""

import datetime as dt
import uuid

from staybook.models import (
    Booking,
    BookingConflict,
    CallerContext,
    ConflictReason,
    Listing,
)
from staybook.utils.logging import get_logger, log_auth_event

from .conflicts import ensure_no_conflict
from .store import ResourceStore

logger = get_logger(__name__)


class BookingService:
    """Creates and cancels bookings for authorized callers.

    Access guards (authenticated, listing exists, caller is not the owner) run
    before this service is called.
    """

    def __init__(self, store: ResourceStore) -> None:
        self.store = store

    def create_booking(
        self,
        caller: CallerContext,
        listing: Listing,
        start_date: dt.date,
        end_date: dt.date,
        today: dt.date | None = None,
    ) -> Booking:
        """Book a listing for the caller.

        The conflict check reads a fresh snapshot of the listing's bookings.
        The write then claims every day atomically, so a booking inserted by a
        concurrent request between check and write still loses.

        Raises:
            PastDateBooking: If the stay starts today or earlier
            BookingConflict: If the stay overlaps an existing booking
        """
        existing = self.store.find_bookings_for_listing(listing.listing_id)
        ensure_no_conflict(start_date, end_date, existing, today or dt.date.today())

        booking = Booking(
            booking_id=f"BK-{uuid.uuid4().hex[:12].upper()}",
            listing_id=listing.listing_id,
            user_id=caller.user_id,
            start_date=start_date,
            end_date=end_date,
            created_at=dt.datetime.now(dt.UTC),
        )

        if not self.store.create_booking(booking):
            log_auth_event(
                logger,
                "booking_claim_lost",
                user_id=caller.user_id,
                resource=f"listing:{listing.listing_id}",
                reason="concurrent_booking",
                rejected=True,
            )
            raise BookingConflict(
                frozenset({ConflictReason.START_CONFLICT, ConflictReason.END_CONFLICT})
            )

        logger.info(
            "Booking created",
            extra={"booking_id": booking.booking_id, "listing_id": listing.listing_id},
        )
        return booking

    def cancel_booking(self, booking: Booking) -> None:
        """Delete a booking and release its days."""
        if not self.store.delete_booking(booking):
            raise RuntimeError(f"Failed to release booking {booking.booking_id}")
        logger.info("Booking cancelled", extra={"booking_id": booking.booking_id})
