"""Error taxonomy shared by the engine, the services and the HTTP layer."""

from __future__ import annotations


class HotelError(Exception):
    """Base exception for rejected hotel operations."""


class ArgumentInvalidError(HotelError):
    """Raised when a required field is missing or violates a business rule."""


class FailedInitializationError(ArgumentInvalidError):
    """Raised when a domain value cannot be constructed from its inputs."""


class ItemNotFoundError(HotelError):
    """Raised when a booking, room or guest id is unknown."""


class BookingOverlapError(HotelError):
    """Raised when a stay overlaps an existing booking for the same room."""


class NoRoomAvailableError(BookingOverlapError):
    """Raised when first-fit search rejects every candidate room."""
