"""
main.py: Server launcher and entry point.

Run this file to start the booking API:

    python main.py

Interactive API docs are served at http://<API_HOST>:<API_PORT>/docs

This file does NOT contain application logic. See app.py for the FastAPI
application, service wiring, and startup sequence.

Direct uvicorn usage:
    uvicorn app:app --reload
"""

from __future__ import annotations

import uvicorn

from hotel_booking.utils.config import get_settings


def main() -> None:
    """Start the booking API server."""
    settings = get_settings()
    base_url = f"http://{settings.api_host}:{settings.api_port}"

    print("=" * 60)
    print(f"  {settings.app_name} v{settings.app_version}")
    print("=" * 60)
    print(f"  Server   : {base_url}")
    print(f"  API docs : {base_url}/docs")
    print(f"  Demo seed: {'on' if settings.seed_demo_data else 'off'}")
    print("=" * 60)
    print("  Press CTRL+C to stop\n")

    # Blocks until CTRL+C
    uvicorn.run(
        "app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
