"""HTTP controller layer for rooms and their commodities."""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from hotel_booking.controllers.dependencies import get_room_service, to_http_exception
from hotel_booking.domain.commodities import Bed, BedType, commodity_kind
from hotel_booking.domain.errors import HotelError
from hotel_booking.domain.models import Room
from hotel_booking.services.room_service import CommoditySpec, RoomService
from hotel_booking.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/rooms", tags=["rooms"])


class BedRequest(BaseModel):
    type: Literal["bed"]
    bed_type: BedType


class ToiletRequest(BaseModel):
    type: Literal["toilet"]


class ShowerRequest(BaseModel):
    type: Literal["shower"]


CommodityRequest = Annotated[
    Union[BedRequest, ToiletRequest, ShowerRequest],
    Field(discriminator="type"),
]


class RoomRequest(BaseModel):
    commodities: list[CommodityRequest] = Field(min_length=1)

    def to_specs(self) -> list[CommoditySpec]:
        return [
            CommoditySpec(kind=item.type, bed_type=getattr(item, "bed_type", None))
            for item in self.commodities
        ]


class CommodityResponse(BaseModel):
    inventory_id: int = Field(gt=0)
    type: str
    bed_type: Optional[BedType] = None


class RoomResponse(BaseModel):
    room_id: int = Field(gt=0)
    capacity: int = Field(gt=0)
    commodities: list[CommodityResponse]

    @classmethod
    def from_room(cls, room: Room) -> "RoomResponse":
        return cls(
            room_id=room.room_id,
            capacity=room.capacity,
            commodities=[
                CommodityResponse(
                    inventory_id=item.inventory_id,
                    type=commodity_kind(item),
                    bed_type=item.bed_type if isinstance(item, Bed) else None,
                )
                for item in room.commodities
            ],
        )


class PrepareRoomResponse(BaseModel):
    room_id: int = Field(gt=0)
    tasks: list[str]


class DeleteResponse(BaseModel):
    deleted: bool


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    payload: RoomRequest,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    """Create a room; its capacity is the sum of its bed sizes."""
    try:
        room = service.save_room(service.build_room(payload.to_specs()))
        return RoomResponse.from_room(room)
    except HotelError as exc:
        raise to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover - unexpected failure
        logger.exception("Unexpected room creation failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create room",
        ) from exc


@router.post("/list", response_model=list[RoomResponse], status_code=status.HTTP_201_CREATED)
async def create_rooms(
    payload: list[RoomRequest],
    service: RoomService = Depends(get_room_service),
) -> list[RoomResponse]:
    try:
        rooms = service.save_rooms(service.build_rooms([item.to_specs() for item in payload]))
        return [RoomResponse.from_room(room) for room in rooms]
    except HotelError as exc:
        raise to_http_exception(exc) from exc


@router.get("", response_model=list[RoomResponse])
async def list_rooms(
    service: RoomService = Depends(get_room_service),
) -> list[RoomResponse]:
    return [RoomResponse.from_room(room) for room in service.find_rooms()]


@router.delete("/all", response_model=DeleteResponse)
async def delete_all_rooms(
    service: RoomService = Depends(get_room_service),
) -> DeleteResponse:
    service.delete_all()
    return DeleteResponse(deleted=True)


@router.get("/{room_id}", response_model=RoomResponse)
async def get_room(
    room_id: int,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    try:
        return RoomResponse.from_room(service.get_room_by_id(room_id))
    except HotelError as exc:
        raise to_http_exception(exc) from exc


@router.put("/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: int,
    payload: RoomRequest,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    """Replace the room's commodities and recompute its capacity."""
    try:
        return RoomResponse.from_room(service.replace_commodities(room_id, payload.to_specs()))
    except HotelError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/{room_id}", response_model=DeleteResponse)
async def delete_room(
    room_id: int,
    service: RoomService = Depends(get_room_service),
) -> DeleteResponse:
    try:
        return DeleteResponse(deleted=service.delete_room_by_id(room_id))
    except HotelError as exc:
        raise to_http_exception(exc) from exc


@router.post("/{room_id}/prepare", response_model=PrepareRoomResponse)
async def prepare_room(
    room_id: int,
    service: RoomService = Depends(get_room_service),
) -> PrepareRoomResponse:
    try:
        return PrepareRoomResponse(room_id=room_id, tasks=service.prepare_room(room_id))
    except HotelError as exc:
        raise to_http_exception(exc) from exc
