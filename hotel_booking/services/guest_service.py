"""Guest registration and maintenance."""

from __future__ import annotations

from typing import Iterable, Optional

from hotel_booking.domain.errors import ArgumentInvalidError, ItemNotFoundError
from hotel_booking.domain.models import Gender, Guest
from hotel_booking.repository.guest_repository import GuestRepository
from hotel_booking.utils.logger import get_logger


logger = get_logger(__name__)


class GuestService:
    def __init__(self, repository: Optional[GuestRepository] = None) -> None:
        self._repository = repository or GuestRepository()

    def find_all(self) -> list[Guest]:
        return self._repository.find_all()

    def find_by_id(self, guest_id: int) -> Guest:
        if not self._repository.exists(guest_id):
            raise ItemNotFoundError(f"Guest with id {guest_id} does not exist!")
        return self._repository.get(guest_id)

    def save(self, guest: Guest) -> Guest:
        """Register ``guest`` under a new id; its ``guest_id`` field is ignored."""
        _validate_guest(guest)
        guest_id = self._repository.insert(guest)
        logger.info("Guest registered | guest_id=%s", guest_id)
        return self._repository.get(guest_id)

    def save_all(self, guests: Iterable[Guest]) -> list[Guest]:
        if guests is None:
            raise ArgumentInvalidError("Invalid list of guests!")
        pending = list(guests)
        for guest in pending:
            _validate_guest(guest)
        for guest in pending:
            self.save(guest)
        return self.find_all()

    def update_guest(self, guest: Guest) -> Guest:
        _validate_guest(guest)
        self.find_by_id(guest.guest_id)
        updated = self._repository.replace(guest.guest_id, guest)
        logger.info("Guest updated | guest_id=%s", guest.guest_id)
        return updated

    def delete_by_id(self, guest_id: int) -> bool:
        if not self._repository.remove(guest_id):
            raise ItemNotFoundError(f"Guest with id {guest_id} does not exist!")
        logger.info("Guest deleted | guest_id=%s", guest_id)
        return True

    def delete_guest(self, guest: Guest) -> bool:
        _validate_guest(guest)
        self.find_by_id(guest.guest_id)
        return self.delete_by_id(guest.guest_id)

    def delete_all(self) -> None:
        self._repository.clear()
        logger.info("All guests deleted")


def _validate_guest(guest: Guest) -> None:
    if guest is None:
        raise ArgumentInvalidError("Invalid guest!")
    if (
        not guest.first_name
        or not guest.last_name
        or not guest.first_name.strip()
        or not guest.last_name.strip()
        or not isinstance(guest.gender, Gender)
    ):
        raise ArgumentInvalidError("Invalid guest fields!")
