"""Shared FastAPI dependency providers and error mapping for the controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from hotel_booking.domain.errors import (
    ArgumentInvalidError,
    BookingOverlapError,
    HotelError,
    ItemNotFoundError,
)
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.guest_service import GuestService
from hotel_booking.services.room_service import RoomService


def _service_from_state(request: Request, name: str, label: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{label} service is not initialized",
        )
    return service


def get_booking_service(request: Request) -> BookingService:
    return _service_from_state(request, "booking_service", "Booking")


def get_room_service(request: Request) -> RoomService:
    return _service_from_state(request, "room_service", "Room")


def get_guest_service(request: Request) -> GuestService:
    return _service_from_state(request, "guest_service", "Guest")


def to_http_exception(exc: HotelError) -> HTTPException:
    """Map a rejected hotel operation onto its HTTP status."""
    if isinstance(exc, ItemNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, BookingOverlapError):
        status_code = status.HTTP_409_CONFLICT
    elif isinstance(exc, ArgumentInvalidError):
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=status_code, detail=str(exc))
