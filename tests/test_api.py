from __future__ import annotations

from dataclasses import replace

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app import create_app
from hotel_booking.controllers.booking_controller import router as booking_router
from hotel_booking.utils.config import get_settings


def _build_client(seed_demo_data: bool = True) -> TestClient:
    settings = replace(
        get_settings(),
        seed_demo_data=seed_demo_data,
        reject_past_bookings=False,
    )
    return TestClient(create_app(settings))


def _booking_payload(**overrides) -> dict:
    payload = {
        "guest_id": 1,
        "room_id": 1,
        "occupancy": 2,
        "start": "2019-08-15",
        "end": "2019-08-18",
    }
    payload.update(overrides)
    return payload


def test_startup_seeds_demo_hotel() -> None:
    with _build_client() as client:
        rooms = client.get("/rooms").json()
        guests = client.get("/guests").json()

    assert [room["capacity"] for room in rooms] == [2, 1, 2]
    assert [guest["first_name"] for guest in guests] == ["John", "Maria"]


def test_startup_without_seed_leaves_hotel_empty() -> None:
    with _build_client(seed_demo_data=False) as client:
        assert client.get("/rooms").json() == []
        assert client.get("/bookings").json() == []


def test_create_booking_returns_201() -> None:
    with _build_client() as client:
        response = client.post("/bookings", json=_booking_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["booking_id"] == 1
    assert body["nights"] == 3
    assert body["start"] == "2019-08-15"


def test_adjacent_booking_is_admitted_and_overlap_conflicts() -> None:
    with _build_client() as client:
        client.post("/bookings", json=_booking_payload())
        adjacent = client.post(
            "/bookings",
            json=_booking_payload(guest_id=2, occupancy=1, start="2019-08-18", end="2019-08-20"),
        )
        overlapping = client.post(
            "/bookings",
            json=_booking_payload(guest_id=2, occupancy=1, start="2019-08-17", end="2019-08-19"),
        )
        room_bookings = client.get("/bookings", params={"room_id": 1}).json()

    assert adjacent.status_code == 201
    assert overlapping.status_code == 409
    assert len(room_bookings) == 2


def test_booking_errors_map_to_status_codes() -> None:
    with _build_client() as client:
        unknown_room = client.post("/bookings", json=_booking_payload(room_id=99))
        unknown_guest = client.post("/bookings", json=_booking_payload(guest_id=99))
        over_capacity = client.post("/bookings", json=_booking_payload(occupancy=3))
        reversed_dates = client.post(
            "/bookings",
            json=_booking_payload(start="2019-08-18", end="2019-08-15"),
        )
        zero_occupancy = client.post("/bookings", json=_booking_payload(occupancy=0))

    assert unknown_room.status_code == 404
    assert unknown_guest.status_code == 404
    assert over_capacity.status_code == 400
    assert reversed_dates.status_code == 400
    assert zero_occupancy.status_code == 422


def test_update_dates_with_same_stay_succeeds() -> None:
    with _build_client() as client:
        created = client.post("/bookings", json=_booking_payload()).json()
        response = client.put(
            f"/bookings/{created['booking_id']}/dates",
            json={"start": "2019-08-15", "end": "2019-08-18"},
        )

    assert response.status_code == 200
    assert response.json() == created


def test_update_booking_rejects_guest_change() -> None:
    with _build_client() as client:
        created = client.post("/bookings", json=_booking_payload()).json()
        response = client.put(
            f"/bookings/{created['booking_id']}",
            json=_booking_payload(guest_id=2),
        )
        stored = client.get(f"/bookings/{created['booking_id']}").json()

    assert response.status_code == 400
    assert stored == created


def test_update_booking_moves_room() -> None:
    with _build_client() as client:
        created = client.post("/bookings", json=_booking_payload()).json()
        response = client.put(
            f"/bookings/{created['booking_id']}",
            json=_booking_payload(room_id=3),
        )

    assert response.status_code == 200
    assert response.json()["room_id"] == 3


def test_delete_booking_then_not_found() -> None:
    with _build_client() as client:
        created = client.post("/bookings", json=_booking_payload()).json()
        deleted = client.delete(f"/bookings/{created['booking_id']}")
        missing = client.get(f"/bookings/{created['booking_id']}")
        deleted_again = client.delete(f"/bookings/{created['booking_id']}")

    assert deleted.status_code == 200
    assert deleted.json() == {"deleted": True}
    assert missing.status_code == 404
    assert deleted_again.status_code == 404


def test_first_available_endpoint_picks_free_room() -> None:
    with _build_client() as client:
        client.post("/bookings", json=_booking_payload())
        response = client.post(
            "/bookings/first-available",
            json={
                "guest_id": 2,
                "occupancy": 2,
                "start": "2019-08-16",
                "end": "2019-08-17",
            },
        )
        exhausted = client.post(
            "/bookings/first-available",
            json={
                "guest_id": 2,
                "occupancy": 2,
                "start": "2019-08-16",
                "end": "2019-08-17",
            },
        )

    assert response.status_code == 201
    assert response.json()["room_id"] == 3
    assert exhausted.status_code == 409


def test_first_available_rejects_empty_room_list() -> None:
    with _build_client() as client:
        response = client.post(
            "/bookings/first-available",
            json={
                "guest_id": 1,
                "occupancy": 1,
                "start": "2019-08-16",
                "end": "2019-08-17",
                "room_ids": [],
            },
        )

    assert response.status_code == 422


def test_room_endpoints() -> None:
    with _build_client(seed_demo_data=False) as client:
        created = client.post(
            "/rooms",
            json={
                "commodities": [
                    {"type": "bed", "bed_type": "KING_SIZE"},
                    {"type": "bed", "bed_type": "SINGLE"},
                    {"type": "shower"},
                ]
            },
        )
        room_id = created.json()["room_id"]
        prepared = client.post(f"/rooms/{room_id}/prepare")
        updated = client.put(
            f"/rooms/{room_id}",
            json={"commodities": [{"type": "bed", "bed_type": "SINGLE"}]},
        )
        no_bed = client.post("/rooms", json={"commodities": [{"type": "toilet"}]})
        missing = client.get("/rooms/99")
        deleted = client.delete(f"/rooms/{room_id}")

    assert created.status_code == 201
    assert created.json()["capacity"] == 3
    assert prepared.json()["tasks"] == [
        "The bed sheets are being replaced!",
        "The bed sheets are being replaced!",
        "The shower is being cleaned!",
    ]
    assert updated.json()["capacity"] == 1
    assert no_bed.status_code == 400
    assert missing.status_code == 404
    assert deleted.json() == {"deleted": True}


def test_create_room_list_and_delete_all() -> None:
    with _build_client(seed_demo_data=False) as client:
        created = client.post(
            "/rooms/list",
            json=[
                {"commodities": [{"type": "bed", "bed_type": "DOUBLE"}]},
                {"commodities": [{"type": "bed", "bed_type": "SINGLE"}]},
            ],
        )
        cleared = client.delete("/rooms/all")
        remaining = client.get("/rooms").json()

    assert created.status_code == 201
    assert [room["capacity"] for room in created.json()] == [2, 1]
    assert cleared.json() == {"deleted": True}
    assert remaining == []


def test_guest_endpoints() -> None:
    with _build_client(seed_demo_data=False) as client:
        created = client.post(
            "/guests",
            json=[{"first_name": "Ana", "last_name": "Lopez", "gender": "FEMALE"}],
        )
        guest_id = created.json()[0]["guest_id"]
        updated = client.put(
            f"/guests/{guest_id}",
            json={"first_name": "Ana", "last_name": "Ruiz", "gender": "FEMALE"},
        )
        fetched = client.get(f"/guests/{guest_id}")
        deleted = client.delete(f"/guests/{guest_id}")
        missing = client.get(f"/guests/{guest_id}")

    assert created.status_code == 201
    assert updated.json()["last_name"] == "Ruiz"
    assert fetched.json()["last_name"] == "Ruiz"
    assert deleted.json() == {"deleted": True}
    assert missing.status_code == 404


def test_missing_service_returns_503() -> None:
    bare_app = FastAPI()
    bare_app.include_router(booking_router)
    client = TestClient(bare_app)

    response = client.get("/bookings")

    assert response.status_code == 503


class _FailingBookingService:
    def find_by_id(self, booking_id: int):
        raise RuntimeError("store offline")

    def delete_by_id(self, booking_id: int) -> bool:
        raise RuntimeError("store offline")


def test_unexpected_failures_map_to_500() -> None:
    bare_app = FastAPI()
    bare_app.include_router(booking_router)
    bare_app.state.booking_service = _FailingBookingService()
    client = TestClient(bare_app)

    fetched = client.get("/bookings/1")
    deleted = client.delete("/bookings/1")

    assert fetched.status_code == 500
    assert fetched.json() == {"detail": "Failed to load booking"}
    assert deleted.status_code == 500
    assert deleted.json() == {"detail": "Failed to delete booking"}
