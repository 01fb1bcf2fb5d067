"""FastAPI dependencies composing the access guards per route.

Order matters and is encoded in the dependency chain: authentication first,
then existence, then ownership.

Usage in routes:
    @router.delete("/reviews/{review_id}")
    def delete_review(review: Review = Depends(owned_review)):
        ...
"""

from fastapi import Depends, Request

from staybook.models import (
    Booking,
    CallerContext,
    Listing,
    ResourceKind,
    Review,
)
from staybook.services.access_guard import (
    require_authenticated,
    require_not_owner,
    require_owner,
    require_resource_exists,
)
from staybook.services.store import ResourceStore

from .dependencies import get_store


def get_caller(request: Request) -> CallerContext:
    """Caller context set by IdentityMiddleware (anonymous if absent)."""
    caller: CallerContext | None = getattr(request.state, "caller", None)
    return caller or CallerContext.anonymous()


def authenticated_caller(caller: CallerContext = Depends(get_caller)) -> CallerContext:
    require_authenticated(caller)
    return caller


def existing_listing(
    listing_id: str,
    caller: CallerContext = Depends(authenticated_caller),
    store: ResourceStore = Depends(get_store),
) -> Listing:
    listing = require_resource_exists(store, ResourceKind.LISTING, listing_id)
    assert isinstance(listing, Listing)
    return listing


def bookable_listing(
    listing: Listing = Depends(existing_listing),
    caller: CallerContext = Depends(authenticated_caller),
) -> Listing:
    """Listing the caller may book or review: it exists and is not theirs."""
    require_not_owner(caller, listing)
    return listing


def owned_review(
    review_id: str,
    caller: CallerContext = Depends(authenticated_caller),
    store: ResourceStore = Depends(get_store),
) -> Review:
    """Review written by the caller (404 if absent, 403 if someone else's)."""
    review = store.find_review_by_id(review_id)
    owned = require_owner(caller, review, ResourceKind.REVIEW)
    assert isinstance(owned, Review)
    return owned


def owned_booking(
    booking_id: str,
    caller: CallerContext = Depends(authenticated_caller),
    store: ResourceStore = Depends(get_store),
) -> Booking:
    """Booking requested by the caller (404 if absent, 403 if someone else's)."""
    booking = require_resource_exists(store, ResourceKind.BOOKING, booking_id)
    owned = require_owner(caller, booking, ResourceKind.BOOKING)
    assert isinstance(owned, Booking)
    return owned
