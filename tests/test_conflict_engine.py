"""Tests for overlap admission and first-fit room search."""

from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from hotel_booking.domain.commodities import Bed, BedType, Shower, Toilet
from hotel_booking.domain.errors import (
    ArgumentInvalidError,
    BookingOverlapError,
    ItemNotFoundError,
    NoRoomAvailableError,
)
from hotel_booking.domain.intervals import DateInterval
from hotel_booking.domain.models import Booking, BookingCandidate, Gender, Guest, Room
from hotel_booking.repository.guest_repository import GuestRepository
from hotel_booking.repository.room_repository import RoomRepository
from hotel_booking.services.conflict_engine import (
    ConflictResolutionEngine,
    build_interval,
    can_place,
    find_first_available_room,
    validate_occupancy,
)
from hotel_booking.utils.config import get_settings


def _stay(start: date, end: date) -> DateInterval:
    return DateInterval(start=start, end=end)


def _booking(booking_id: int, room_id: int, start: date, end: date) -> Booking:
    return Booking(
        booking_id=booking_id,
        guest_id=1,
        room_id=room_id,
        occupancy=1,
        interval=_stay(start, end),
    )


def _room(room_id: int, *bed_types: BedType) -> Room:
    commodities = tuple(
        Bed(inventory_id=room_id * 10 + index, bed_type=bed_type)
        for index, bed_type in enumerate(bed_types)
    )
    return Room(room_id=room_id, commodities=commodities + (Toilet(inventory_id=room_id * 100),))


EXISTING = _booking(1, 1, date(2019, 8, 15), date(2019, 8, 18))


# --- can_place ---

def test_room_without_bookings_admits_any_stay() -> None:
    assert can_place(1, _stay(date(2019, 8, 15), date(2019, 8, 18)), [])


def test_adjacent_stay_is_admitted() -> None:
    assert can_place(1, _stay(date(2019, 8, 18), date(2019, 8, 20)), [EXISTING])
    assert can_place(1, _stay(date(2019, 8, 10), date(2019, 8, 15)), [EXISTING])


def test_strictly_overlapping_stay_is_rejected() -> None:
    assert not can_place(1, _stay(date(2019, 8, 17), date(2019, 8, 19)), [EXISTING])


def test_nested_stay_is_rejected_in_both_directions() -> None:
    assert not can_place(1, _stay(date(2019, 8, 16), date(2019, 8, 17)), [EXISTING])
    assert not can_place(1, _stay(date(2019, 8, 1), date(2019, 8, 30)), [EXISTING])


def test_bookings_of_other_rooms_are_ignored() -> None:
    assert can_place(2, _stay(date(2019, 8, 16), date(2019, 8, 17)), [EXISTING])


def test_ignored_booking_does_not_conflict_with_itself() -> None:
    assert can_place(
        1,
        EXISTING.interval,
        [EXISTING],
        ignore_booking_id=EXISTING.booking_id,
    )


def test_ignoring_one_booking_still_checks_the_others() -> None:
    other = _booking(2, 1, date(2019, 8, 20), date(2019, 8, 25))
    assert not can_place(
        1,
        _stay(date(2019, 8, 16), date(2019, 8, 21)),
        [EXISTING, other],
        ignore_booking_id=EXISTING.booking_id,
    )


# --- find_first_available_room ---

def test_first_fit_skips_rooms_that_are_too_small() -> None:
    small = _room(1, BedType.SINGLE)
    large = _room(2, BedType.DOUBLE, BedType.SINGLE)
    assert small.capacity == 1
    assert large.capacity == 3

    room_id = find_first_available_room(
        [small, large],
        [],
        2,
        _stay(date(2019, 8, 15), date(2019, 8, 18)),
    )
    assert room_id == 2


def test_first_fit_follows_caller_order() -> None:
    first = _room(1, BedType.DOUBLE)
    second = _room(2, BedType.KING_SIZE)
    stay = _stay(date(2019, 8, 15), date(2019, 8, 18))

    assert find_first_available_room([first, second], [], 2, stay) == 1
    assert find_first_available_room([second, first], [], 2, stay) == 2


def test_first_fit_skips_booked_rooms() -> None:
    booked = _room(1, BedType.DOUBLE)
    free = _room(2, BedType.DOUBLE)
    room_id = find_first_available_room(
        [booked, free],
        [EXISTING],
        1,
        _stay(date(2019, 8, 16), date(2019, 8, 17)),
    )
    assert room_id == 2


def test_first_fit_raises_when_every_room_is_rejected() -> None:
    with pytest.raises(NoRoomAvailableError) as excinfo:
        find_first_available_room(
            [_room(1, BedType.DOUBLE), _room(2, BedType.SINGLE)],
            [EXISTING],
            2,
            _stay(date(2019, 8, 16), date(2019, 8, 17)),
        )
    assert isinstance(excinfo.value, BookingOverlapError)


def test_first_fit_with_no_rooms_raises() -> None:
    with pytest.raises(NoRoomAvailableError):
        find_first_available_room([], [], 1, _stay(date(2019, 8, 16), date(2019, 8, 17)))


def test_missing_interval_is_rejected_even_for_an_empty_room() -> None:
    with pytest.raises(ArgumentInvalidError):
        can_place(1, None, [])


def test_first_fit_rejects_missing_interval() -> None:
    with pytest.raises(ArgumentInvalidError):
        find_first_available_room([_room(1, BedType.SINGLE)], [], 1, None)


@pytest.mark.parametrize("occupancy", [0, -5])
def test_first_fit_rejects_non_positive_occupancy(occupancy: int) -> None:
    with pytest.raises(ArgumentInvalidError):
        find_first_available_room(
            [_room(1, BedType.SINGLE)],
            [],
            occupancy,
            _stay(date(2019, 8, 16), date(2019, 8, 17)),
        )


# --- validation helpers ---

def test_build_interval_rejects_missing_dates() -> None:
    with pytest.raises(ArgumentInvalidError):
        build_interval(None, date(2019, 8, 18))


def test_build_interval_rejects_zero_length_stay() -> None:
    with pytest.raises(ArgumentInvalidError):
        build_interval(date(2019, 8, 18), date(2019, 8, 18))


def test_occupancy_equal_to_capacity_passes() -> None:
    validate_occupancy(2, 2)


def test_occupancy_above_capacity_raises() -> None:
    with pytest.raises(ArgumentInvalidError):
        validate_occupancy(3, 2)


def test_non_positive_occupancy_raises() -> None:
    with pytest.raises(ArgumentInvalidError):
        validate_occupancy(0, 2)


# --- ConflictResolutionEngine ---

def _build_engine(
    today: date = date(2019, 1, 1),
    reject_past_bookings: bool = False,
) -> ConflictResolutionEngine:
    settings = replace(get_settings(), reject_past_bookings=reject_past_bookings)
    rooms = RoomRepository()
    rooms.insert(
        Room(
            room_id=0,
            commodities=(Bed(inventory_id=1, bed_type=BedType.DOUBLE), Shower(inventory_id=2)),
        )
    )
    guests = GuestRepository()
    guests.insert(_guest())
    return ConflictResolutionEngine(rooms=rooms, guests=guests, settings=settings, today=lambda: today)


def _guest() -> Guest:
    return Guest(guest_id=0, first_name="John", last_name="Miller", gender=Gender.MALE)


def test_engine_accepts_valid_candidate() -> None:
    engine = _build_engine()
    interval = engine.validate_candidate(
        BookingCandidate(1, 1, 2, date(2019, 8, 15), date(2019, 8, 18))
    )
    assert interval == _stay(date(2019, 8, 15), date(2019, 8, 18))


def test_engine_reports_unknown_room() -> None:
    engine = _build_engine()
    with pytest.raises(ItemNotFoundError):
        engine.validate_candidate(BookingCandidate(1, 99, 1, date(2019, 8, 15), date(2019, 8, 18)))


def test_engine_reports_unknown_guest() -> None:
    engine = _build_engine()
    with pytest.raises(ItemNotFoundError):
        engine.validate_candidate(BookingCandidate(99, 1, 1, date(2019, 8, 15), date(2019, 8, 18)))


def test_engine_reports_capacity_overflow() -> None:
    engine = _build_engine()
    with pytest.raises(ArgumentInvalidError):
        engine.validate_candidate(BookingCandidate(1, 1, 3, date(2019, 8, 15), date(2019, 8, 18)))


def test_engine_accepts_past_stays_by_default() -> None:
    engine = _build_engine(today=date(2026, 1, 1))
    engine.interval_for(date(2019, 8, 15), date(2019, 8, 18))


def test_engine_rejects_past_stays_when_configured() -> None:
    engine = _build_engine(today=date(2026, 1, 1), reject_past_bookings=True)
    with pytest.raises(ArgumentInvalidError):
        engine.interval_for(date(2019, 8, 15), date(2019, 8, 18))


def test_engine_raises_overlap_error() -> None:
    engine = _build_engine()
    with pytest.raises(BookingOverlapError):
        engine.ensure_can_place(1, _stay(date(2019, 8, 17), date(2019, 8, 19)), [EXISTING])


def test_engine_first_fit_rejects_non_positive_occupancy() -> None:
    engine = _build_engine()
    with pytest.raises(ArgumentInvalidError):
        engine.first_available_room(
            [_room(1, BedType.DOUBLE)],
            [],
            0,
            _stay(date(2019, 8, 15), date(2019, 8, 18)),
        )
