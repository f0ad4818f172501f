"""HTTP controller layer for guests."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from hotel_booking.controllers.dependencies import get_guest_service, to_http_exception
from hotel_booking.domain.errors import HotelError
from hotel_booking.domain.models import Gender, Guest
from hotel_booking.services.guest_service import GuestService


router = APIRouter(prefix="/guests", tags=["guests"])


class GuestRequest(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    gender: Gender

    def to_guest(self, guest_id: int = 0) -> Guest:
        return Guest(
            guest_id=guest_id,
            first_name=self.first_name,
            last_name=self.last_name,
            gender=self.gender,
        )


class GuestResponse(BaseModel):
    guest_id: int = Field(gt=0)
    first_name: str
    last_name: str
    gender: Gender

    @classmethod
    def from_guest(cls, guest: Guest) -> "GuestResponse":
        return cls(
            guest_id=guest.guest_id,
            first_name=guest.first_name,
            last_name=guest.last_name,
            gender=guest.gender,
        )


class DeleteResponse(BaseModel):
    deleted: bool


@router.get("", response_model=list[GuestResponse])
async def list_guests(
    service: GuestService = Depends(get_guest_service),
) -> list[GuestResponse]:
    return [GuestResponse.from_guest(guest) for guest in service.find_all()]


@router.post("", response_model=list[GuestResponse], status_code=status.HTTP_201_CREATED)
async def create_guests(
    payload: list[GuestRequest],
    service: GuestService = Depends(get_guest_service),
) -> list[GuestResponse]:
    """Register every guest in the payload and return the full guest list."""
    try:
        guests = service.save_all(item.to_guest() for item in payload)
        return [GuestResponse.from_guest(guest) for guest in guests]
    except HotelError as exc:
        raise to_http_exception(exc) from exc


@router.get("/{guest_id}", response_model=GuestResponse)
async def get_guest(
    guest_id: int,
    service: GuestService = Depends(get_guest_service),
) -> GuestResponse:
    try:
        return GuestResponse.from_guest(service.find_by_id(guest_id))
    except HotelError as exc:
        raise to_http_exception(exc) from exc


@router.put("/{guest_id}", response_model=GuestResponse)
async def update_guest(
    guest_id: int,
    payload: GuestRequest,
    service: GuestService = Depends(get_guest_service),
) -> GuestResponse:
    try:
        return GuestResponse.from_guest(service.update_guest(payload.to_guest(guest_id)))
    except HotelError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/{guest_id}", response_model=DeleteResponse)
async def delete_guest(
    guest_id: int,
    service: GuestService = Depends(get_guest_service),
) -> DeleteResponse:
    try:
        return DeleteResponse(deleted=service.delete_by_id(guest_id))
    except HotelError as exc:
        raise to_http_exception(exc) from exc
