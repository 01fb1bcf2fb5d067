"""Unit tests for BookingService with a mocked store."""

from datetime import date
from typing import Callable
from unittest.mock import MagicMock

import pytest

from staybook.models import (
    Booking,
    BookingConflict,
    CallerContext,
    Listing,
    PastDateBooking,
    User,
)
from staybook.services.booking import BookingService

TODAY = date(2024, 5, 1)


@pytest.fixture
def mock_store() -> MagicMock:
    store = MagicMock()
    store.find_bookings_for_listing.return_value = []
    store.create_booking.return_value = True
    store.delete_booking.return_value = True
    return store


@pytest.fixture
def service(mock_store: MagicMock) -> BookingService:
    return BookingService(store=mock_store)


class TestCreateBooking:
    def test_creates_booking_for_caller(
        self, service: BookingService, mock_store: MagicMock, guest: User, listing: Listing
    ) -> None:
        booking = service.create_booking(
            CallerContext.authenticated(guest),
            listing,
            date(2024, 6, 10),
            date(2024, 6, 15),
            today=TODAY,
        )

        assert booking.user_id == guest.user_id
        assert booking.listing_id == listing.listing_id
        assert booking.start_date == date(2024, 6, 10)
        assert booking.end_date == date(2024, 6, 15)
        assert booking.booking_id.startswith("BK-")
        mock_store.find_bookings_for_listing.assert_called_once_with(listing.listing_id)
        mock_store.create_booking.assert_called_once_with(booking)

    def test_conflict_is_raised_before_writing(
        self,
        service: BookingService,
        mock_store: MagicMock,
        guest: User,
        listing: Listing,
        make_booking: Callable[..., Booking],
    ) -> None:
        mock_store.find_bookings_for_listing.return_value = [
            make_booking(date(2024, 6, 10), date(2024, 6, 15), user_id="someone-else")
        ]

        with pytest.raises(BookingConflict) as exc_info:
            service.create_booking(
                CallerContext.authenticated(guest),
                listing,
                date(2024, 6, 1),
                date(2024, 6, 12),
                today=TODAY,
            )

        assert exc_info.value.errors == {
            "endDate": "End date conflicts with an existing booking"
        }
        mock_store.create_booking.assert_not_called()

    def test_past_date_is_rejected(
        self, service: BookingService, mock_store: MagicMock, guest: User, listing: Listing
    ) -> None:
        with pytest.raises(PastDateBooking):
            service.create_booking(
                CallerContext.authenticated(guest),
                listing,
                TODAY,
                date(2024, 5, 4),
                today=TODAY,
            )

        mock_store.create_booking.assert_not_called()

    def test_lost_race_is_reported_as_conflict(
        self, service: BookingService, mock_store: MagicMock, guest: User, listing: Listing
    ) -> None:
        """A booking committed between check and write makes the claim fail."""
        mock_store.create_booking.return_value = False

        with pytest.raises(BookingConflict) as exc_info:
            service.create_booking(
                CallerContext.authenticated(guest),
                listing,
                date(2024, 6, 10),
                date(2024, 6, 15),
                today=TODAY,
            )

        assert set(exc_info.value.errors or {}) == {"startDate", "endDate"}


class TestCancelBooking:
    def test_releases_booking(
        self,
        service: BookingService,
        mock_store: MagicMock,
        make_booking: Callable[..., Booking],
    ) -> None:
        booking = make_booking(date(2024, 6, 10), date(2024, 6, 15))

        service.cancel_booking(booking)

        mock_store.delete_booking.assert_called_once_with(booking)

    def test_failed_release_raises(
        self,
        service: BookingService,
        mock_store: MagicMock,
        make_booking: Callable[..., Booking],
    ) -> None:
        mock_store.delete_booking.return_value = False

        with pytest.raises(RuntimeError):
            service.cancel_booking(make_booking(date(2024, 6, 10), date(2024, 6, 15)))
