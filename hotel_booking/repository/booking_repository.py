"""Authoritative in-memory store of bookings."""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import replace
from threading import Lock, RLock
from typing import Iterator, Optional

from hotel_booking.domain.models import Booking
from hotel_booking.repository.id_allocator import IdAllocator
from hotel_booking.repository.keyed_store import KeyedStore


class BookingRepository(KeyedStore[Booking]):
    """Bookings keyed by id, plus one mutation lock per room.

    The room locks let the booking service run its overlap check and the
    following write as one unit per room while other rooms proceed.
    """

    item_label = "booking"

    def __init__(self, id_allocator: Optional[IdAllocator] = None) -> None:
        super().__init__(
            key_of=lambda booking: booking.booking_id,
            with_key=lambda booking, booking_id: replace(booking, booking_id=booking_id),
            id_allocator=id_allocator,
        )
        self._room_locks: dict[int, Lock] = {}
        self._room_locks_guard = RLock()

    def all_for_room(self, room_id: int) -> list[Booking]:
        with self._lock:
            return [booking for booking in self._items.values() if booking.room_id == room_id]

    def _lock_for_room(self, room_id: int) -> Lock:
        with self._room_locks_guard:
            lock = self._room_locks.get(room_id)
            if lock is None:
                lock = Lock()
                self._room_locks[room_id] = lock
            return lock

    @contextmanager
    def room_locks(self, *room_ids: int) -> Iterator[None]:
        """Hold the mutation locks of ``room_ids``, taken in ascending id order."""
        with ExitStack() as stack:
            for room_id in sorted(set(room_ids)):
                stack.enter_context(self._lock_for_room(room_id))
            yield
