"""Booking admission: overlap checks, candidate validation and first-fit room search."""

from __future__ import annotations

from datetime import date
from typing import Callable, Iterable, Optional, Sequence

from hotel_booking.domain.errors import (
    ArgumentInvalidError,
    BookingOverlapError,
    FailedInitializationError,
    ItemNotFoundError,
    NoRoomAvailableError,
)
from hotel_booking.domain.interfaces import GuestDirectory, RoomDirectory
from hotel_booking.domain.intervals import DateInterval, overlaps
from hotel_booking.domain.models import Booking, BookingCandidate, Room
from hotel_booking.utils.config import Settings, get_settings
from hotel_booking.utils.logger import get_logger


logger = get_logger(__name__)


def can_place(
    room_id: int,
    interval: DateInterval,
    bookings: Iterable[Booking],
    ignore_booking_id: Optional[int] = None,
) -> bool:
    """Return True when ``interval`` collides with no booking of ``room_id``.

    ``bookings`` may hold other rooms' bookings; they are skipped. The booking
    whose id equals ``ignore_booking_id`` is skipped too, so a booking being
    re-validated never conflicts with its own stored record.
    """
    if interval is None:
        raise ArgumentInvalidError("Invalid dates!")
    for booking in bookings:
        if booking.room_id != room_id:
            continue
        if ignore_booking_id is not None and booking.booking_id == ignore_booking_id:
            continue
        if overlaps(interval, booking.interval):
            logger.debug(
                "Overlap detected | room_id=%s | requested=%s..%s | booking_id=%s",
                room_id,
                interval.start,
                interval.end,
                booking.booking_id,
            )
            return False
    return True


def find_first_available_room(
    rooms: Sequence[Room],
    bookings: Iterable[Booking],
    required_occupancy: int,
    interval: DateInterval,
) -> int:
    """Return the id of the first room in ``rooms`` that fits and is free.

    Rooms are tried in the order given; callers express priority through that
    order. Raises ``NoRoomAvailableError`` when every room is rejected.
    """
    if interval is None:
        raise ArgumentInvalidError("Invalid dates!")
    if required_occupancy is None or required_occupancy <= 0:
        raise ArgumentInvalidError("Number of guests must be greater than 0")
    known_bookings = list(bookings)
    for room in rooms:
        if room.capacity < required_occupancy:
            continue
        if not can_place(room.room_id, interval, known_bookings):
            continue
        return room.room_id
    raise NoRoomAvailableError(
        f"No room available for {required_occupancy} guest(s) "
        f"from {interval.start.isoformat()} to {interval.end.isoformat()}"
    )


def build_interval(start: Optional[date], end: Optional[date]) -> DateInterval:
    """Build a stay interval, reporting bad dates as ``ArgumentInvalidError``."""
    if start is None or end is None:
        raise ArgumentInvalidError("Invalid dates!")
    try:
        return DateInterval(start=start, end=end)
    except FailedInitializationError as exc:
        raise ArgumentInvalidError(f"Invalid dates! {exc}") from exc


def validate_occupancy(occupancy: int, capacity: int) -> None:
    if occupancy is None or occupancy <= 0:
        raise ArgumentInvalidError("Number of guests must be greater than 0")
    if occupancy > capacity:
        raise ArgumentInvalidError(
            f"Number of guests {occupancy} exceeds room capacity {capacity}"
        )


class ConflictResolutionEngine:
    """Admission decisions against the room and guest directories."""

    def __init__(
        self,
        rooms: RoomDirectory,
        guests: GuestDirectory,
        settings: Optional[Settings] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._rooms = rooms
        self._guests = guests
        self._settings = settings or get_settings()
        self._today = today

    def interval_for(self, start: Optional[date], end: Optional[date]) -> DateInterval:
        interval = build_interval(start, end)
        if self._settings.reject_past_bookings and interval.start < self._today():
            raise ArgumentInvalidError(
                f"Stay can not start in the past: {interval.start.isoformat()}"
            )
        return interval

    def require_room(self, room_id: int) -> int:
        """Return the capacity of ``room_id`` or raise ``ItemNotFoundError``."""
        if not self._rooms.exists(room_id):
            raise ItemNotFoundError(f"Room with id {room_id} does not exist!")
        return self._rooms.capacity_of(room_id)

    def require_guest(self, guest_id: int) -> None:
        if not self._guests.exists(guest_id):
            raise ItemNotFoundError(f"Guest with id {guest_id} does not exist!")

    def validate_candidate(self, candidate: BookingCandidate) -> DateInterval:
        """Check everything about ``candidate`` except overlap; return its interval."""
        if candidate is None:
            raise ArgumentInvalidError("Invalid Booking!")
        interval = self.interval_for(candidate.start, candidate.end)
        self.require_guest(candidate.guest_id)
        capacity = self.require_room(candidate.room_id)
        validate_occupancy(candidate.occupancy, capacity)
        return interval

    def ensure_can_place(
        self,
        room_id: int,
        interval: DateInterval,
        bookings: Iterable[Booking],
        ignore_booking_id: Optional[int] = None,
    ) -> None:
        if not can_place(room_id, interval, bookings, ignore_booking_id=ignore_booking_id):
            logger.warning(
                "Booking rejected | reason=overlap | room_id=%s | start=%s | end=%s",
                room_id,
                interval.start,
                interval.end,
            )
            raise BookingOverlapError(
                f"Room {room_id} is already booked between "
                f"{interval.start.isoformat()} and {interval.end.isoformat()}"
            )

    def first_available_room(
        self,
        rooms: Sequence[Room],
        bookings: Iterable[Booking],
        required_occupancy: int,
        interval: DateInterval,
    ) -> int:
        try:
            return find_first_available_room(rooms, bookings, required_occupancy, interval)
        except NoRoomAvailableError:
            logger.warning(
                "First-fit search exhausted | rooms=%s | occupancy=%s | start=%s | end=%s",
                len(rooms),
                required_occupancy,
                interval.start,
                interval.end,
            )
            raise
