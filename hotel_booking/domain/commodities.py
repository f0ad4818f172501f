"""Room commodities as a closed set of value types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union


class BedType(str, Enum):
    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    KING_SIZE = "KING_SIZE"

    @property
    def size(self) -> int:
        return _BED_SIZES[self]


_BED_SIZES = {
    BedType.SINGLE: 1,
    BedType.DOUBLE: 2,
    BedType.KING_SIZE: 2,
}


@dataclass(frozen=True)
class Bed:
    inventory_id: int
    bed_type: BedType

    @property
    def size(self) -> int:
        return self.bed_type.size


@dataclass(frozen=True)
class Toilet:
    inventory_id: int


@dataclass(frozen=True)
class Shower:
    inventory_id: int


Commodity = Union[Bed, Toilet, Shower]


def bed_capacity(commodities: Iterable[Commodity]) -> int:
    """Number of guests the beds among ``commodities`` can sleep."""
    return sum(item.size for item in commodities if isinstance(item, Bed))


def preparation_task(commodity: Commodity) -> str:
    """Housekeeping action required before the next stay."""
    if isinstance(commodity, Bed):
        return "The bed sheets are being replaced!"
    if isinstance(commodity, Toilet):
        return "The toilet is being cleaned!"
    if isinstance(commodity, Shower):
        return "The shower is being cleaned!"
    raise TypeError(f"Unsupported commodity: {commodity!r}")


def commodity_kind(commodity: Commodity) -> str:
    if isinstance(commodity, Bed):
        return "bed"
    if isinstance(commodity, Toilet):
        return "toilet"
    if isinstance(commodity, Shower):
        return "shower"
    raise TypeError(f"Unsupported commodity: {commodity!r}")
