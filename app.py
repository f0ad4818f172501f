"""
app.py: FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires repositories and services, registers routers, and seeds demo data.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from hotel_booking.controllers.booking_controller import router as booking_router
from hotel_booking.controllers.guest_controller import router as guest_router
from hotel_booking.controllers.room_controller import router as room_router
from hotel_booking.repository.booking_repository import BookingRepository
from hotel_booking.repository.guest_repository import GuestRepository
from hotel_booking.repository.room_repository import RoomRepository
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.guest_service import GuestService
from hotel_booking.services.room_service import RoomService
from hotel_booking.services.seed_service import seed_demo_hotel
from hotel_booking.utils.config import Settings, get_settings
from hotel_booking.utils.logger import configure_logging, get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    Every repository and service is created here and exposed through
    app.state, so each dependency is traceable from this function.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, force=True)

    # --- Repositories (in-memory keyed stores) ---
    room_repository = RoomRepository()
    guest_repository = GuestRepository()
    booking_repository = BookingRepository()

    # --- Services ---
    room_service = RoomService(
        repository=room_repository,
        booking_store=booking_repository,
    )
    guest_service = GuestService(repository=guest_repository)
    booking_service = BookingService(
        booking_repository=booking_repository,
        room_repository=room_repository,
        guest_repository=guest_repository,
        settings=settings,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Run startup initialization before accepting requests."""
        _startup(app)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # --- Routers ---
    app.include_router(guest_router)
    app.include_router(room_router)
    app.include_router(booking_router)

    # --- Inject services into app.state for dependency resolution ---
    app.state.settings = settings
    app.state.room_service = room_service
    app.state.guest_service = guest_service
    app.state.booking_service = booking_service

    return app


def _startup(app: FastAPI) -> None:
    """Idempotent startup sequence; seeding is skipped when data exists."""
    settings: Settings = app.state.settings
    if settings.seed_demo_data:
        logger.info("Startup: seeding demo rooms and guests")
        seed_demo_hotel(app.state.room_service, app.state.guest_service)
    logger.info("Startup complete, booking engine ready")


# Module-level app object for uvicorn
app = create_app()
