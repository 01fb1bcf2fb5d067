"""Booking conflict detection.

A candidate stay is rejected when it starts today or earlier, or when it
touches any existing booking on the same listing. Every boundary comparison
is inclusive: a stay ending on the day another begins is a conflict.

Existing bookings are scanned in the order the store returned them and the
first conflicting booking decides the verdict.
"""

import datetime as dt
from collections.abc import Iterable

from staybook.models import (
    Booking,
    BookingConflict,
    ConflictReason,
    ConflictVerdict,
    PastDateBooking,
)

START = ConflictReason.START_CONFLICT
END = ConflictReason.END_CONFLICT


def _within(day: dt.date, booking: Booking) -> bool:
    return booking.start_date <= day <= booking.end_date


def _compare(start: dt.date, end: dt.date, existing: Booking) -> ConflictVerdict:
    # Candidate sandwiches existing
    if start <= existing.start_date and end >= existing.end_date:
        return ConflictVerdict.reject(START, END, conflicting=existing)

    start_inside = _within(start, existing)
    end_inside = _within(end, existing)

    # Existing sandwiches candidate
    if start_inside and end_inside:
        return ConflictVerdict.reject(START, END, conflicting=existing)
    if start_inside:
        return ConflictVerdict.reject(START, conflicting=existing)
    if end_inside:
        return ConflictVerdict.reject(END, conflicting=existing)
    return ConflictVerdict.no_conflict()


def detect_conflict(
    start: dt.date,
    end: dt.date,
    existing: Iterable[Booking],
    today: dt.date,
) -> ConflictVerdict:
    """Decide whether a candidate stay may be booked.

    Args:
        start: Candidate first day
        end: Candidate last day
        existing: Bookings already on the listing, in store order
        today: Current date

    Returns:
        ConflictVerdict; rejected verdicts name the offending boundaries and
        the first conflicting booking.
    """
    if start <= today:
        return ConflictVerdict.reject(ConflictReason.PAST_DATE)

    for booking in existing:
        verdict = _compare(start, end, booking)
        if verdict.rejected:
            return verdict

    return ConflictVerdict.no_conflict()


def ensure_no_conflict(
    start: dt.date,
    end: dt.date,
    existing: Iterable[Booking],
    today: dt.date,
) -> None:
    """Raise the client-facing error for a rejected candidate.

    Raises:
        PastDateBooking: If the stay starts today or earlier
        BookingConflict: If the stay overlaps an existing booking
    """
    verdict = detect_conflict(start, end, existing, today)
    if not verdict.rejected:
        return
    if verdict.is_past_date:
        raise PastDateBooking()
    raise BookingConflict(verdict.reasons)
