"""Demo hotel seeding for local runs."""

from __future__ import annotations

from hotel_booking.domain.commodities import BedType
from hotel_booking.domain.models import Gender, Guest
from hotel_booking.services.guest_service import GuestService
from hotel_booking.services.room_service import CommoditySpec, RoomService
from hotel_booking.utils.logger import get_logger


logger = get_logger(__name__)


DEMO_ROOM_LAYOUTS: tuple[tuple[CommoditySpec, ...], ...] = (
    (CommoditySpec("bed", BedType.DOUBLE), CommoditySpec("toilet"), CommoditySpec("shower")),
    (CommoditySpec("bed", BedType.SINGLE), CommoditySpec("toilet"), CommoditySpec("shower")),
    (CommoditySpec("bed", BedType.KING_SIZE), CommoditySpec("toilet"), CommoditySpec("shower")),
)

DEMO_GUESTS: tuple[tuple[str, str, Gender], ...] = (
    ("John", "Miller", Gender.MALE),
    ("Maria", "Tam", Gender.FEMALE),
)


def seed_demo_hotel(room_service: RoomService, guest_service: GuestService) -> bool:
    """Create demo rooms and guests when both directories are empty.

    Returns True when data was seeded.
    """
    if room_service.find_rooms() or guest_service.find_all():
        logger.info("Hotel data already present; skipping demo seed")
        return False

    room_service.save_rooms(room_service.build_rooms(DEMO_ROOM_LAYOUTS))
    guest_service.save_all(
        Guest(guest_id=0, first_name=first, last_name=last, gender=gender)
        for first, last, gender in DEMO_GUESTS
    )
    logger.info(
        "Demo seed completed | rooms=%s | guests=%s",
        len(DEMO_ROOM_LAYOUTS),
        len(DEMO_GUESTS),
    )
    return True
