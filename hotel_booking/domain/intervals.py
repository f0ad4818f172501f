"""Half-open date intervals used for stays."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from hotel_booking.domain.errors import FailedInitializationError


def is_valid_interval(start: Optional[date], end: Optional[date]) -> bool:
    """Return True when both dates are present and ``start`` is strictly before ``end``."""
    if start is None or end is None:
        return False
    return start < end


@dataclass(frozen=True)
class DateInterval:
    """A stay ``[start, end)``: the guest leaves on ``end``, freeing the room that day."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start is None or self.end is None:
            raise FailedInitializationError("Stay dates must not be empty")
        if not is_valid_interval(self.start, self.end):
            raise FailedInitializationError(
                f"Stay start {self.start.isoformat()} must be before end {self.end.isoformat()}"
            )

    @property
    def nights(self) -> int:
        return (self.end - self.start).days


def overlaps(first: DateInterval, second: DateInterval) -> bool:
    """Strict half-open overlap: touching endpoints do not collide."""
    return first.start < second.end and second.start < first.end
