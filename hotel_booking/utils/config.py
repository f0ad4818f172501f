"""Runtime configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    app_name: str = "Hotel Booking Engine"
    app_version: str = "1.0.0"
    log_level: str = "INFO"
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    seed_demo_data: bool = True
    reject_past_bookings: bool = False


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def validate_settings(settings: Settings) -> None:
    if not settings.app_name.strip():
        raise ValueError("app_name must be non-empty")
    if settings.log_level.upper() not in _LOG_LEVELS:
        raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
    if not 0 < settings.api_port < 65536:
        raise ValueError("api_port must be in (0, 65536)")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; call ``cache_clear()`` to reload."""
    defaults = Settings()
    settings = Settings(
        app_name=os.getenv("APP_NAME", defaults.app_name),
        app_version=os.getenv("APP_VERSION", defaults.app_version),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        api_host=os.getenv("API_HOST", defaults.api_host),
        api_port=_env_int("API_PORT", defaults.api_port),
        seed_demo_data=_env_bool("SEED_DEMO_DATA", defaults.seed_demo_data),
        reject_past_bookings=_env_bool(
            "REJECT_PAST_BOOKINGS",
            defaults.reject_past_bookings,
        ),
    )
    validate_settings(settings)
    return settings
