#!/usr/bin/env python3
"""Validate local booking-engine environment readiness."""

from __future__ import annotations

import importlib
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from hotel_booking.domain.errors import BookingOverlapError
from hotel_booking.domain.models import BookingCandidate
from hotel_booking.repository.booking_repository import BookingRepository
from hotel_booking.repository.guest_repository import GuestRepository
from hotel_booking.repository.room_repository import RoomRepository
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.guest_service import GuestService
from hotel_booking.services.room_service import RoomService
from hotel_booking.services.seed_service import seed_demo_hotel
from hotel_booking.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1: Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable
    package_names = ["fastapi", "uvicorn", "pydantic", "httpx", "pytest"]
    import_errors: list[str] = []
    for module_name in package_names:
        try:
            importlib.import_module(module_name)
        except ImportError as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    settings = replace(get_settings(), reject_past_bookings=False)
    room_repository = RoomRepository()
    guest_repository = GuestRepository()
    booking_repository = BookingRepository()
    room_service = RoomService(room_repository, booking_store=booking_repository)
    guest_service = GuestService(guest_repository)
    booking_service = BookingService(
        booking_repository=booking_repository,
        room_repository=room_repository,
        guest_repository=guest_repository,
        settings=settings,
    )

    # CHECK 3: Demo seeding
    try:
        seed_demo_hotel(room_service, guest_service)
        room_count = len(room_service.find_rooms())
        if room_count != 3:
            raise RuntimeError(f"expected 3 rooms, got {room_count}")
        ok, line = _print_result("Demo seed: 3 rooms", True)
    except Exception as exc:
        ok, line = _print_result("Demo seed", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4: Booking admission and overlap rejection
    try:
        booking_service.create(
            BookingCandidate(1, 1, 2, date(2019, 8, 15), date(2019, 8, 18))
        )
        try:
            booking_service.create(
                BookingCandidate(2, 1, 1, date(2019, 8, 17), date(2019, 8, 19))
            )
        except BookingOverlapError:
            pass
        else:
            raise RuntimeError("overlapping booking was admitted")
        ok, line = _print_result("Booking admission and overlap rejection", True)
    except Exception as exc:
        ok, line = _print_result("Booking admission", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 5: First-fit search
    try:
        booking = booking_service.find_and_book_first_available(
            guest_id=2,
            occupancy=2,
            start=date(2019, 8, 16),
            end=date(2019, 8, 17),
        )
        ok, line = _print_result(
            "First-fit search",
            True,
            f": room {booking.room_id}",
        )
    except Exception as exc:
        ok, line = _print_result("First-fit search", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Booking Engine Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
