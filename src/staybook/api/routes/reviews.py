"""Review endpoints (author only)."""

from fastapi import APIRouter, Depends

from staybook.api.dependencies import get_store
from staybook.api.guards import owned_review
from staybook.api.models import MessageResponse
from staybook.models import Review
from staybook.services.store import ResourceStore

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.delete(
    "/{review_id}",
    summary="Delete a review",
    response_model=MessageResponse,
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Review belongs to another user"},
        404: {"description": "Review couldn't be found"},
    },
)
def delete_review(
    review: Review = Depends(owned_review),
    store: ResourceStore = Depends(get_store),
) -> MessageResponse:
    store.delete_review(review.review_id)
    return MessageResponse(message="Successfully deleted")
