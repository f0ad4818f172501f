"""Room directory management: creation from commodity specs, updates, housekeeping."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from typing import ContextManager, Iterable, Optional, Sequence

from hotel_booking.domain.commodities import (
    Bed,
    BedType,
    Commodity,
    Shower,
    Toilet,
    preparation_task,
)
from hotel_booking.domain.errors import ArgumentInvalidError, ItemNotFoundError
from hotel_booking.domain.interfaces import BookingStore
from hotel_booking.domain.models import Room
from hotel_booking.repository.room_repository import RoomRepository
from hotel_booking.utils.logger import get_logger


logger = get_logger(__name__)

COMMODITY_KINDS = ("bed", "toilet", "shower")


@dataclass(frozen=True)
class CommoditySpec:
    """Requested commodity before an inventory id is assigned."""

    kind: str
    bed_type: Optional[BedType] = None


class RoomService:
    """Room directory writes.

    With a ``booking_store`` the room changes take the same per-room locks as
    booking admission, so a booking is never admitted against a capacity that
    is being replaced or a room that is being deleted.
    """

    def __init__(
        self,
        repository: Optional[RoomRepository] = None,
        booking_store: Optional[BookingStore] = None,
    ) -> None:
        self._repository = repository or RoomRepository()
        self._booking_store = booking_store

    def _room_locks(self, *room_ids: int) -> ContextManager[None]:
        if self._booking_store is None:
            return nullcontext()
        return self._booking_store.room_locks(*room_ids)

    def find_rooms(self) -> list[Room]:
        return self._repository.find_all()

    def get_room_by_id(self, room_id: int) -> Room:
        if not self._repository.exists(room_id):
            raise ItemNotFoundError(f"Room with id {room_id} does not exist!")
        return self._repository.get(room_id)

    def build_commodity(self, spec: CommoditySpec) -> Commodity:
        if spec is None or spec.kind not in COMMODITY_KINDS:
            raise ArgumentInvalidError(f"Invalid commodity: {spec!r}")
        inventory_id = self._repository.commodity_ids.next_id()
        if spec.kind == "bed":
            if spec.bed_type is None:
                raise ArgumentInvalidError("A bed requires a bed type")
            try:
                bed_type = BedType(spec.bed_type)
            except ValueError as exc:
                raise ArgumentInvalidError(f"Unknown bed type: {spec.bed_type!r}") from exc
            return Bed(inventory_id=inventory_id, bed_type=bed_type)
        if spec.kind == "toilet":
            return Toilet(inventory_id=inventory_id)
        return Shower(inventory_id=inventory_id)

    def build_room(self, commodities: Sequence[CommoditySpec], room_id: int = 0) -> Room:
        """Turn commodity specs into a ``Room``; it is not stored."""
        if commodities is None:
            raise ArgumentInvalidError("Invalid room transfer object!")
        return Room(
            room_id=room_id,
            commodities=tuple(self.build_commodity(spec) for spec in commodities),
        )

    def build_rooms(self, rooms: Sequence[Sequence[CommoditySpec]]) -> list[Room]:
        if not rooms:
            raise ArgumentInvalidError("Room list not valid!")
        return [self.build_room(commodities) for commodities in rooms]

    def save_room(self, room: Room) -> Room:
        _validate_room(room)
        room_id = self._repository.insert(room)
        saved = self._repository.get(room_id)
        logger.info("Room created | room_id=%s | capacity=%s", room_id, saved.capacity)
        return saved

    def save_rooms(self, rooms: Iterable[Room]) -> list[Room]:
        """Validate every room first, then store them all."""
        if rooms is None:
            raise ArgumentInvalidError("Invalid list of rooms!")
        pending = list(rooms)
        for room in pending:
            _validate_room(room)
        for room in pending:
            self.save_room(room)
        return self.find_rooms()

    def update_room(self, room: Room) -> Room:
        """Replace the commodities of an existing room; capacity follows."""
        _validate_room(room)
        with self._room_locks(room.room_id):
            if not self._repository.exists(room.room_id):
                raise ItemNotFoundError(f"Room with id {room.room_id} does not exist!")
            updated = self._repository.replace(room.room_id, room)
        logger.info(
            "Room updated | room_id=%s | capacity=%s",
            updated.room_id,
            updated.capacity,
        )
        return updated

    def replace_commodities(self, room_id: int, commodities: Sequence[CommoditySpec]) -> Room:
        self.get_room_by_id(room_id)
        return self.update_room(self.build_room(commodities, room_id=room_id))

    def delete_room_by_id(self, room_id: int) -> bool:
        with self._room_locks(room_id):
            removed = self._repository.remove(room_id)
        if not removed:
            raise ItemNotFoundError(f"Room with id {room_id} does not exist!")
        logger.info("Room deleted | room_id=%s", room_id)
        return True

    def delete_room(self, room: Room) -> bool:
        _validate_room(room)
        if not self._repository.exists(room.room_id):
            raise ItemNotFoundError("Cannot delete non-existing room!")
        return self.delete_room_by_id(room.room_id)

    def delete_all(self) -> None:
        room_ids = [room.room_id for room in self._repository.find_all()]
        with self._room_locks(*room_ids):
            self._repository.clear()
        logger.info("All rooms deleted")

    def prepare_room(self, room_id: int) -> list[str]:
        """Run housekeeping for every commodity in the room and report the tasks."""
        room = self.get_room_by_id(room_id)
        tasks = [preparation_task(commodity) for commodity in room.commodities]
        for task in tasks:
            logger.info("Housekeeping | room_id=%s | %s", room_id, task)
        return tasks


def _validate_room(room: Room) -> None:
    if room is None or not isinstance(room, Room):
        raise ArgumentInvalidError("Invalid room!")
    if room.capacity <= 0:
        raise ArgumentInvalidError("Invalid room!")
