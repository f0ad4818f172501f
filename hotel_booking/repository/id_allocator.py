"""Monotonic id generation owned by a store instance."""

from __future__ import annotations

from threading import Lock


class IdAllocator:
    """Hands out increasing integer ids starting at ``start``."""

    def __init__(self, start: int = 1) -> None:
        if start <= 0:
            raise ValueError("start must be > 0")
        self._start = start
        self._next = start
        self._lock = Lock()

    def next_id(self) -> int:
        with self._lock:
            allocated = self._next
            self._next += 1
            return allocated

    def reset(self) -> None:
        with self._lock:
            self._next = self._start
