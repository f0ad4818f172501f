"""In-memory guest directory."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from hotel_booking.domain.models import Guest
from hotel_booking.repository.id_allocator import IdAllocator
from hotel_booking.repository.keyed_store import KeyedStore


class GuestRepository(KeyedStore[Guest]):
    item_label = "guest"

    def __init__(self, id_allocator: Optional[IdAllocator] = None) -> None:
        super().__init__(
            key_of=lambda guest: guest.guest_id,
            with_key=lambda guest, guest_id: replace(guest, guest_id=guest_id),
            id_allocator=id_allocator,
        )
