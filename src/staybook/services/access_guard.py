"""Authorization predicates for protected routes.

Each guard either returns (possibly the resolved resource) or raises an
AccessError. Guards are order-sensitive: existence must be checked before
ownership, since ownership checks read fields of the resource.
"""

from staybook.models import (
    Booking,
    CallerContext,
    Forbidden,
    Listing,
    NotFound,
    ResourceKind,
    Review,
    Unauthenticated,
    User,
)
from staybook.utils.logging import get_logger, log_auth_event

from .store import ResourceStore

logger = get_logger(__name__)


def require_authenticated(caller: CallerContext) -> User:
    """Reject anonymous callers with 401."""
    if caller.user is None:
        raise Unauthenticated()
    return caller.user


def require_resource_exists(
    store: ResourceStore, kind: ResourceKind, resource_id: str
) -> Listing | Review | Booking:
    """Look up a resource by kind and ID.

    Raises:
        NotFound: If the store has no such resource
    """
    resource: Listing | Review | Booking | None
    if kind is ResourceKind.LISTING:
        resource = store.find_listing_by_id(resource_id)
    elif kind is ResourceKind.REVIEW:
        resource = store.find_review_by_id(resource_id)
    else:
        resource = store.find_booking_by_id(resource_id)

    if resource is None:
        raise NotFound(kind)
    return resource


def require_not_owner(caller: CallerContext, listing: Listing) -> None:
    """Block owners from booking or reviewing their own listing.

    The caller must already be authenticated; see CallerContext.user_id.
    """
    if caller.user_id == listing.owner_id:
        log_auth_event(
            logger,
            "guard_owner_blocked",
            user_id=caller.user_id,
            resource=f"listing:{listing.listing_id}",
            rejected=True,
        )
        raise Forbidden()


def require_owner(
    caller: CallerContext, resource: Review | Booking | None, kind: ResourceKind
) -> Review | Booking:
    """Require the caller to be the author of a review or requester of a booking.

    A missing review is reported as 404 before ownership is considered. A
    missing booking is a wiring error: bookings are resolved by
    require_resource_exists first.
    """
    if resource is None:
        if kind is ResourceKind.REVIEW:
            raise NotFound(kind)
        raise RuntimeError("Booking must be resolved before checking ownership")

    if resource.user_id != caller.user_id:
        resource_id = (
            resource.review_id if isinstance(resource, Review) else resource.booking_id
        )
        log_auth_event(
            logger,
            "guard_not_owner",
            user_id=caller.user_id,
            resource=f"{kind.value}:{resource_id}",
            rejected=True,
        )
        raise Forbidden()
    return resource
