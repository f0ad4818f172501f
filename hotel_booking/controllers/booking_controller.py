"""HTTP controller layer for bookings."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field, field_validator

from hotel_booking.controllers.dependencies import get_booking_service, to_http_exception
from hotel_booking.domain.errors import HotelError
from hotel_booking.domain.models import Booking, BookingCandidate
from hotel_booking.services.booking_service import BookingService
from hotel_booking.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


class BookingRequest(BaseModel):
    """Input DTO for creating or replacing a booking."""

    guest_id: int = Field(gt=0)
    room_id: int = Field(gt=0)
    occupancy: int = Field(gt=0)
    start: date
    end: date

    def to_candidate(self) -> BookingCandidate:
        return BookingCandidate(
            guest_id=self.guest_id,
            room_id=self.room_id,
            occupancy=self.occupancy,
            start=self.start,
            end=self.end,
        )


class BookingDatesRequest(BaseModel):
    start: date
    end: date


class FirstAvailableRequest(BaseModel):
    guest_id: int = Field(gt=0)
    occupancy: int = Field(gt=0)
    start: date
    end: date
    room_ids: Optional[list[int]] = None

    @field_validator("room_ids")
    @classmethod
    def validate_room_ids(cls, value: Optional[list[int]]) -> Optional[list[int]]:
        if value is None:
            return None
        if not value:
            raise ValueError("room_ids must contain at least one room id when provided")
        for room_id in value:
            if room_id <= 0:
                raise ValueError("room_ids values must be positive integers")
        return value


class BookingResponse(BaseModel):
    booking_id: int = Field(gt=0)
    guest_id: int = Field(gt=0)
    room_id: int = Field(gt=0)
    occupancy: int = Field(gt=0)
    start: date
    end: date
    nights: int = Field(gt=0)

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingResponse":
        return cls(
            booking_id=booking.booking_id,
            guest_id=booking.guest_id,
            room_id=booking.room_id,
            occupancy=booking.occupancy,
            start=booking.start,
            end=booking.end,
            nights=booking.interval.nights,
        )


class DeleteResponse(BaseModel):
    deleted: bool


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    payload: BookingRequest,
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """Admit a booking if the room is free for the whole stay."""
    try:
        booking = service.create(payload.to_candidate())
        return BookingResponse.from_booking(booking)
    except HotelError as exc:
        raise to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover - unexpected failure
        logger.exception("Unexpected booking creation failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create booking",
        ) from exc


@router.get("", response_model=list[BookingResponse])
async def list_bookings(
    room_id: Optional[int] = Query(default=None, gt=0),
    service: BookingService = Depends(get_booking_service),
) -> list[BookingResponse]:
    bookings = service.find_all() if room_id is None else service.find_for_room(room_id)
    return [BookingResponse.from_booking(booking) for booking in bookings]


@router.post(
    "/first-available",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def book_first_available(
    payload: FirstAvailableRequest,
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """Book the first listed room (or first room overall) that fits and is free."""
    try:
        booking = service.find_and_book_first_available(
            guest_id=payload.guest_id,
            occupancy=payload.occupancy,
            start=payload.start,
            end=payload.end,
            room_ids=payload.room_ids,
        )
        return BookingResponse.from_booking(booking)
    except HotelError as exc:
        raise to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover - unexpected failure
        logger.exception("Unexpected first-available booking failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to book first available room",
        ) from exc


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    try:
        return BookingResponse.from_booking(service.find_by_id(booking_id))
    except HotelError as exc:
        raise to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover - unexpected failure
        logger.exception("Unexpected booking lookup failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load booking",
        ) from exc


@router.put("/{booking_id}/dates", response_model=BookingResponse)
async def update_booking_dates(
    booking_id: int,
    payload: BookingDatesRequest,
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    try:
        booking = service.update_dates(booking_id, payload.start, payload.end)
        return BookingResponse.from_booking(booking)
    except HotelError as exc:
        raise to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover - unexpected failure
        logger.exception("Unexpected booking date update failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update booking dates",
        ) from exc


@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: int,
    payload: BookingRequest,
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """Change room, occupancy or dates; the guest must stay the same."""
    try:
        booking = service.update_booking(booking_id, payload.to_candidate())
        return BookingResponse.from_booking(booking)
    except HotelError as exc:
        raise to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover - unexpected failure
        logger.exception("Unexpected booking update failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update booking",
        ) from exc


@router.delete("/{booking_id}", response_model=DeleteResponse)
async def delete_booking(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
) -> DeleteResponse:
    try:
        return DeleteResponse(deleted=service.delete_by_id(booking_id))
    except HotelError as exc:
        raise to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover - unexpected failure
        logger.exception("Unexpected booking deletion failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete booking",
        ) from exc
