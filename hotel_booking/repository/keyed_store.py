"""Thread-safe in-memory keyed collection backing every repository."""

from __future__ import annotations

from threading import RLock
from typing import Callable, Generic, Optional, TypeVar

from hotel_booking.domain.errors import ItemNotFoundError
from hotel_booking.repository.id_allocator import IdAllocator


T = TypeVar("T")


class KeyedStore(Generic[T]):
    """Insertion-ordered ``id -> value`` map of frozen values.

    Values are immutable, so handing them out directly is equivalent to
    returning a copy.
    """

    item_label = "item"

    def __init__(
        self,
        key_of: Callable[[T], int],
        with_key: Callable[[T, int], T],
        id_allocator: Optional[IdAllocator] = None,
    ) -> None:
        self._key_of = key_of
        self._with_key = with_key
        self._ids = id_allocator or IdAllocator()
        self._items: dict[int, T] = {}
        self._lock = RLock()

    @property
    def id_allocator(self) -> IdAllocator:
        return self._ids

    def find_all(self) -> list[T]:
        with self._lock:
            return list(self._items.values())

    def exists(self, item_id: int) -> bool:
        with self._lock:
            return item_id in self._items

    def get(self, item_id: int) -> T:
        with self._lock:
            item = self._items.get(item_id)
        if item is None:
            raise ItemNotFoundError(f"A {self.item_label} with id: {item_id} was not found!")
        return item

    def insert(self, item: T) -> int:
        """Store ``item`` under a freshly allocated id and return that id."""
        new_id = self._ids.next_id()
        with self._lock:
            self._items[new_id] = self._with_key(item, new_id)
        return new_id

    def replace(self, item_id: int, item: T) -> T:
        """Swap the stored value in one step; readers never see it missing."""
        stored = self._with_key(item, item_id)
        with self._lock:
            if item_id not in self._items:
                raise ItemNotFoundError(
                    f"A {self.item_label} with id: {item_id} was not found!"
                )
            self._items[item_id] = stored
        return stored

    def remove(self, item_id: int) -> bool:
        with self._lock:
            return self._items.pop(item_id, None) is not None

    def remove_exact(self, item: T) -> bool:
        """Remove ``item`` only when the stored value equals it field for field."""
        item_id = self._key_of(item)
        with self._lock:
            if self._items.get(item_id) != item:
                return False
            del self._items[item_id]
            return True

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def reset(self) -> None:
        """Clear all values and restart id allocation. For tests and reseeding."""
        with self._lock:
            self._items.clear()
            self._ids.reset()
