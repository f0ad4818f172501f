"""Domain models for guests, rooms and bookings."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Iterable

from hotel_booking.domain.commodities import Commodity, bed_capacity
from hotel_booking.domain.errors import FailedInitializationError
from hotel_booking.domain.intervals import DateInterval


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


@dataclass(frozen=True)
class Guest:
    guest_id: int
    first_name: str
    last_name: str
    gender: Gender


@dataclass(frozen=True)
class Room:
    """A room and its commodities; capacity is derived from the beds."""

    room_id: int
    commodities: tuple[Commodity, ...]

    def __post_init__(self) -> None:
        if not self.commodities:
            raise FailedInitializationError("Room has no commodities!")
        if any(item is None for item in self.commodities):
            raise FailedInitializationError("Room commodities must not contain empty items")
        if bed_capacity(self.commodities) <= 0:
            raise FailedInitializationError("Room can not be empty")

    @property
    def capacity(self) -> int:
        return bed_capacity(self.commodities)

    def with_commodities(self, commodities: Iterable[Commodity]) -> "Room":
        return replace(self, commodities=tuple(commodities))


@dataclass(frozen=True)
class Booking:
    booking_id: int
    guest_id: int
    room_id: int
    occupancy: int
    interval: DateInterval

    @property
    def start(self) -> date:
        return self.interval.start

    @property
    def end(self) -> date:
        return self.interval.end

    def with_interval(self, interval: DateInterval) -> "Booking":
        return replace(self, interval=interval)


@dataclass(frozen=True)
class BookingCandidate:
    """A requested booking that has not been admitted yet."""

    guest_id: int
    room_id: int
    occupancy: int
    start: date | None
    end: date | None
