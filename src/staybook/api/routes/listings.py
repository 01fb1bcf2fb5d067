"""Listing endpoints for booking and reviewing a listing.

All endpoints require a session. Creating a booking or review additionally
requires that the caller does not own the listing.
"""

import datetime as dt
import uuid

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from staybook.api.dependencies import get_booking_service, get_store
from staybook.api.guards import authenticated_caller, bookable_listing, existing_listing
from staybook.api.models import (
    BookingCreateRequest,
    BookingListResponse,
    BookingSummary,
    ReviewCreateRequest,
)
from staybook.models import Booking, CallerContext, Listing, Review
from staybook.services.booking import BookingService
from staybook.services.store import ResourceStore

router = APIRouter(prefix="/listings", tags=["listings"])


@router.post(
    "/{listing_id}/bookings",
    summary="Book a listing",
    response_model=Booking,
    status_code=HTTP_201_CREATED,
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Own listing, past date, or dates already booked"},
        404: {"description": "Listing couldn't be found"},
    },
)
def create_booking(
    body: BookingCreateRequest,
    listing: Listing = Depends(bookable_listing),
    caller: CallerContext = Depends(authenticated_caller),
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    """Create a booking after the conflict check passes."""
    return service.create_booking(caller, listing, body.start_date, body.end_date)


@router.get(
    "/{listing_id}/bookings",
    summary="List bookings of a listing",
    response_model=BookingListResponse,
)
def list_bookings(
    listing: Listing = Depends(existing_listing),
    caller: CallerContext = Depends(authenticated_caller),
    store: ResourceStore = Depends(get_store),
) -> BookingListResponse:
    """Owners see full bookings; everyone else sees dates only."""
    bookings = store.find_bookings_for_listing(listing.listing_id)
    if caller.user_id == listing.owner_id:
        return BookingListResponse(bookings=list(bookings))
    return BookingListResponse(
        bookings=[
            BookingSummary(
                listing_id=b.listing_id, start_date=b.start_date, end_date=b.end_date
            )
            for b in bookings
        ]
    )


@router.post(
    "/{listing_id}/reviews",
    summary="Review a listing",
    response_model=Review,
    status_code=HTTP_201_CREATED,
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Own listing"},
        404: {"description": "Listing couldn't be found"},
    },
)
def create_review(
    body: ReviewCreateRequest,
    listing: Listing = Depends(bookable_listing),
    caller: CallerContext = Depends(authenticated_caller),
    store: ResourceStore = Depends(get_store),
) -> Review:
    review = Review(
        review_id=f"RV-{uuid.uuid4().hex[:12].upper()}",
        listing_id=listing.listing_id,
        user_id=caller.user_id,
        review=body.review,
        stars=body.stars,
        created_at=dt.datetime.now(dt.UTC),
    )
    if not store.create_review(review):
        raise RuntimeError(f"Review ID collision: {review.review_id}")
    return review
