"""Booking lifecycle: create, move, re-date and cancel reservations."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import replace
from datetime import date
from typing import Iterable, Iterator, Optional, Sequence

from hotel_booking.domain.errors import ArgumentInvalidError, ItemNotFoundError
from hotel_booking.domain.interfaces import BookingStore
from hotel_booking.domain.models import Booking, BookingCandidate
from hotel_booking.repository.booking_repository import BookingRepository
from hotel_booking.repository.guest_repository import GuestRepository
from hotel_booking.repository.room_repository import RoomRepository
from hotel_booking.services.conflict_engine import ConflictResolutionEngine
from hotel_booking.utils.config import Settings, get_settings
from hotel_booking.utils.logger import get_logger


logger = get_logger(__name__)


class BookingService:
    """Validates through the conflict engine before every booking write.

    Every check-then-write runs while holding the booking store's lock for the
    rooms involved, so two requests for one room cannot both pass the overlap
    check and both commit.
    """

    def __init__(
        self,
        booking_repository: Optional[BookingStore] = None,
        room_repository: Optional[RoomRepository] = None,
        guest_repository: Optional[GuestRepository] = None,
        settings: Optional[Settings] = None,
        engine: Optional[ConflictResolutionEngine] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._bookings: BookingStore = booking_repository or BookingRepository()
        self._rooms = room_repository or RoomRepository()
        self._guests = guest_repository or GuestRepository()
        self._engine = engine or ConflictResolutionEngine(
            rooms=self._rooms,
            guests=self._guests,
            settings=self._settings,
        )

    def find_all(self) -> list[Booking]:
        return self._bookings.find_all()

    def find_for_room(self, room_id: int) -> list[Booking]:
        return self._bookings.all_for_room(room_id)

    def find_by_id(self, booking_id: int) -> Booking:
        if not self._bookings.exists(booking_id):
            raise ItemNotFoundError(f"Booking with id {booking_id} does not exist!")
        return self._bookings.get(booking_id)

    @contextmanager
    def _hold_booking(self, booking_id: int, *other_room_ids: int) -> Iterator[Booking]:
        """Lock the booking's current room (plus ``other_room_ids``) and yield it.

        A concurrent room change can move the booking after it was read, so the
        record is re-read under the lock and the lock retaken if the room moved.
        """
        while True:
            snapshot = self.find_by_id(booking_id)
            with self._bookings.room_locks(snapshot.room_id, *other_room_ids):
                current = self.find_by_id(booking_id)
                if current.room_id == snapshot.room_id:
                    yield current
                    return

    def create(self, candidate: BookingCandidate) -> Booking:
        if candidate is None:
            raise ArgumentInvalidError("Invalid Booking!")
        with self._bookings.room_locks(candidate.room_id):
            interval = self._engine.validate_candidate(candidate)
            self._engine.ensure_can_place(
                candidate.room_id,
                interval,
                self._bookings.all_for_room(candidate.room_id),
            )
            booking_id = self._bookings.insert(
                Booking(
                    booking_id=0,
                    guest_id=candidate.guest_id,
                    room_id=candidate.room_id,
                    occupancy=candidate.occupancy,
                    interval=interval,
                )
            )
            created = self._bookings.get(booking_id)
        logger.info(
            "Booking created | booking_id=%s | guest_id=%s | room_id=%s | start=%s | end=%s",
            created.booking_id,
            created.guest_id,
            created.room_id,
            created.start,
            created.end,
        )
        return created

    def save_all(self, candidates: Iterable[BookingCandidate]) -> list[Booking]:
        """Create bookings in order; stops at the first rejected one.

        Bookings created before the failure stay committed.
        """
        if candidates is None:
            raise ArgumentInvalidError("Invalid list of bookings!")
        return [self.create(candidate) for candidate in candidates]

    def update_dates(
        self,
        booking_id: int,
        start: Optional[date],
        end: Optional[date],
    ) -> Booking:
        self.find_by_id(booking_id)
        interval = self._engine.interval_for(start, end)
        with self._hold_booking(booking_id) as current:
            self._engine.ensure_can_place(
                current.room_id,
                interval,
                self._bookings.all_for_room(current.room_id),
                ignore_booking_id=booking_id,
            )
            updated = self._bookings.replace(booking_id, current.with_interval(interval))
        logger.info(
            "Booking dates updated | booking_id=%s | room_id=%s | start=%s | end=%s",
            booking_id,
            updated.room_id,
            updated.start,
            updated.end,
        )
        return updated

    def update_booking(self, booking_id: int, new_booking: BookingCandidate) -> Booking:
        """Move a booking to another room, occupancy or stay for the same guest."""
        existing = self.find_by_id(booking_id)
        if new_booking is None:
            raise ArgumentInvalidError("Invalid Booking!")
        if new_booking.guest_id != existing.guest_id:
            logger.warning(
                "Booking update rejected | reason=guest_change | booking_id=%s",
                booking_id,
            )
            raise ArgumentInvalidError("You are not allowed to change guest id!")

        with self._hold_booking(booking_id, new_booking.room_id) as current:
            interval = self._engine.validate_candidate(new_booking)
            self._engine.ensure_can_place(
                new_booking.room_id,
                interval,
                self._bookings.all_for_room(new_booking.room_id),
                ignore_booking_id=booking_id,
            )
            updated = self._bookings.replace(
                booking_id,
                replace(
                    current,
                    room_id=new_booking.room_id,
                    occupancy=new_booking.occupancy,
                    interval=interval,
                ),
            )
        logger.info(
            "Booking updated | booking_id=%s | room_id=%s | occupancy=%s",
            booking_id,
            updated.room_id,
            updated.occupancy,
        )
        return updated

    def delete_by_id(self, booking_id: int) -> bool:
        if not self._bookings.remove(booking_id):
            raise ItemNotFoundError(f"Booking with id {booking_id} does not exist!")
        logger.info("Booking deleted | booking_id=%s", booking_id)
        return True

    def delete(self, booking: Booking) -> bool:
        """Delete the stored booking equal to ``booking`` in every field."""
        if booking is None:
            raise ArgumentInvalidError("Invalid Booking!")
        if not self._bookings.remove_exact(booking):
            raise ItemNotFoundError(
                f"No booking matching id {booking.booking_id} with the given details"
            )
        logger.info("Booking deleted | booking_id=%s", booking.booking_id)
        return True

    def delete_all(self) -> None:
        self._bookings.clear()
        logger.info("All bookings deleted")

    def find_and_book_first_available(
        self,
        guest_id: int,
        occupancy: int,
        start: Optional[date],
        end: Optional[date],
        room_ids: Optional[Sequence[int]] = None,
    ) -> Booking:
        """Book the first room, in ``room_ids`` order, that fits and is free.

        Without ``room_ids`` the rooms are tried in the directory's order.
        """
        interval = self._engine.interval_for(start, end)
        self._engine.require_guest(guest_id)
        if room_ids is None:
            locked_ids = [room.room_id for room in self._rooms.list_rooms()]
        else:
            locked_ids = list(room_ids)

        with self._bookings.room_locks(*locked_ids):
            # Rooms are re-read under the locks so capacities cannot change mid-search.
            if room_ids is None:
                rooms = [room for room in self._rooms.list_rooms() if room.room_id in locked_ids]
            else:
                rooms = [self._rooms.get(room_id) for room_id in locked_ids]
            bookings = [
                booking
                for room in rooms
                for booking in self._bookings.all_for_room(room.room_id)
            ]
            room_id = self._engine.first_available_room(rooms, bookings, occupancy, interval)
            booking_id = self._bookings.insert(
                Booking(
                    booking_id=0,
                    guest_id=guest_id,
                    room_id=room_id,
                    occupancy=occupancy,
                    interval=interval,
                )
            )
            created = self._bookings.get(booking_id)
        logger.info(
            "First available room booked | booking_id=%s | room_id=%s | occupancy=%s",
            created.booking_id,
            created.room_id,
            created.occupancy,
        )
        return created
