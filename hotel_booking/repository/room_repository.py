"""In-memory room directory."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from hotel_booking.domain.models import Room
from hotel_booking.repository.id_allocator import IdAllocator
from hotel_booking.repository.keyed_store import KeyedStore


class RoomRepository(KeyedStore[Room]):
    """Rooms keyed by id. Also owns the inventory id sequence for commodities."""

    item_label = "room"

    def __init__(
        self,
        id_allocator: Optional[IdAllocator] = None,
        commodity_id_allocator: Optional[IdAllocator] = None,
    ) -> None:
        super().__init__(
            key_of=lambda room: room.room_id,
            with_key=lambda room, room_id: replace(room, room_id=room_id),
            id_allocator=id_allocator,
        )
        self._commodity_ids = commodity_id_allocator or IdAllocator()

    @property
    def commodity_ids(self) -> IdAllocator:
        return self._commodity_ids

    def capacity_of(self, room_id: int) -> int:
        return self.get(room_id).capacity

    def list_rooms(self) -> list[Room]:
        return self.find_all()

    def reset(self) -> None:
        super().reset()
        self._commodity_ids.reset()
