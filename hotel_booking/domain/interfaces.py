"""Collaborator contracts the booking engine depends on.

Anything that satisfies these protocols can back the engine: the in-memory
repositories in ``hotel_booking.repository`` or a test double.
"""

from __future__ import annotations

from typing import ContextManager, Protocol, Sequence

from hotel_booking.domain.models import Booking, Room


class RoomDirectory(Protocol):
    def exists(self, room_id: int) -> bool: ...

    def capacity_of(self, room_id: int) -> int: ...

    def list_rooms(self) -> list[Room]: ...


class GuestDirectory(Protocol):
    def exists(self, guest_id: int) -> bool: ...


class BookingStore(Protocol):
    def find_all(self) -> list[Booking]: ...

    def exists(self, booking_id: int) -> bool: ...

    def all_for_room(self, room_id: int) -> Sequence[Booking]: ...

    def insert(self, booking: Booking) -> int: ...

    def replace(self, booking_id: int, booking: Booking) -> Booking: ...

    def remove(self, booking_id: int) -> bool: ...

    def remove_exact(self, booking: Booking) -> bool: ...

    def clear(self) -> None: ...

    def get(self, booking_id: int) -> Booking: ...

    def room_locks(self, *room_ids: int) -> ContextManager[None]: ...
