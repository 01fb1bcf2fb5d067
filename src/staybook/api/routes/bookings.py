"""Booking endpoints (requester only)."""

from fastapi import APIRouter, Depends

from staybook.api.dependencies import get_booking_service
from staybook.api.guards import owned_booking
from staybook.api.models import MessageResponse
from staybook.models import Booking
from staybook.services.booking import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get(
    "/{booking_id}",
    summary="Get a booking",
    response_model=Booking,
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Booking belongs to another user"},
        404: {"description": "Booking couldn't be found"},
    },
)
def get_booking(booking: Booking = Depends(owned_booking)) -> Booking:
    return booking


@router.delete(
    "/{booking_id}",
    summary="Cancel a booking",
    response_model=MessageResponse,
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Booking belongs to another user"},
        404: {"description": "Booking couldn't be found"},
    },
)
def cancel_booking(
    booking: Booking = Depends(owned_booking),
    service: BookingService = Depends(get_booking_service),
) -> MessageResponse:
    service.cancel_booking(booking)
    return MessageResponse(message="Successfully deleted")
