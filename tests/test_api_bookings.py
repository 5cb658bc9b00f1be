"""
API tests for rooms, business hours, availability and bookings
"""

from decimal import Decimal
import uuid

from fastapi import status
from fastapi.testclient import TestClient

from roombook.core.auth import create_access_token
from roombook.models.room import Room
from roombook.models.tenant import Tenant

API = "/api/v1"


def booking_payload(room: Room, start: str, end: str, **extra) -> dict:
    payload = {
        "room_id": str(room.id),
        "customer_name": "Alice",
        "customer_email": "alice@example.com",
        "start_time": start,
        "end_time": end,
    }
    payload.update(extra)
    return payload


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "healthy", "service": "roombook-api"}


# Tenants
def test_register_tenant_seeds_default_hours(client: TestClient):
    response = client.post(f"{API}/tenants/", json={"name": "Night Owl Karaoke", "subdomain": "night-owl"})
    assert response.status_code == status.HTTP_201_CREATED
    tenant = response.json()
    assert tenant["status"] == "active"
    assert tenant["plan_type"] == "free"

    token = create_access_token(user_id=uuid.uuid4(), tenant_id=tenant["id"], role="manager")
    response = client.get(f"{API}/business-hours/", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_200_OK
    hours = response.json()
    assert [entry["day"] for entry in hours] == [
        "sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday",
    ]
    assert not any(entry["is_default"] for entry in hours)
    assert hours[5]["open_time"] == "09:00:00"
    assert hours[5]["close_time"] == "23:00:00"


def test_duplicate_subdomain_conflicts(client: TestClient, test_tenant: Tenant):
    response = client.post(f"{API}/tenants/", json={"name": "Copy", "subdomain": test_tenant.subdomain})
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] == "conflict"


def test_update_own_tenant(client: TestClient, test_tenant: Tenant, headers: dict):
    response = client.put(f"{API}/tenants/{test_tenant.id}", json={"plan_type": "pro"}, headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["plan_type"] == "pro"


def test_deleted_tenant_is_rejected(client: TestClient, test_tenant: Tenant, test_room: Room, headers: dict):
    response = client.delete(f"{API}/tenants/{test_tenant.id}", headers=headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = client.get(f"{API}/rooms/", headers=headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


# Rooms
def test_room_crud(client: TestClient, test_tenant: Tenant, headers: dict):
    response = client.post(
        f"{API}/rooms/",
        json={"name": "Room B", "capacity": 6, "category": "Premium", "hourly_rate": "35.00"},
        headers=headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    room = response.json()
    assert room["tenant_id"] == str(test_tenant.id)
    assert Decimal(room["hourly_rate"]) == Decimal("35.00")

    response = client.put(f"{API}/rooms/{room['id']}", json={"capacity": 8}, headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["capacity"] == 8

    response = client.get(f"{API}/rooms/", headers=headers)
    assert [r["name"] for r in response.json()] == ["Room B"]

    response = client.delete(f"{API}/rooms/{room['id']}", headers=headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = client.get(f"{API}/rooms/{room['id']}", headers=headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_duplicate_room_name_conflicts(client: TestClient, test_room: Room, headers: dict):
    response = client.post(f"{API}/rooms/", json={"name": test_room.name, "capacity": 4}, headers=headers)
    assert response.status_code == status.HTTP_409_CONFLICT


# Availability
def test_availability_for_open_day(client: TestClient, test_room: Room, headers: dict):
    response = client.get(f"{API}/rooms/{test_room.id}/availability", params={"date": "2026-10-19"}, headers=headers)

    assert response.status_code == status.HTTP_200_OK
    slots = response.json()
    assert len(slots) == 52
    assert slots[0] == {
        "start_time": "2026-10-19T09:00:00",
        "end_time": "2026-10-19T09:15:00",
        "is_next_day": False,
    }


def test_availability_with_spanning_hours(client: TestClient, test_room: Room, headers: dict):
    response = client.put(
        f"{API}/business-hours/",
        json={"business_hours": [{"weekday": 6, "open_time": "20:00", "close_time": "02:00"}]},
        headers=headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()[6]["spans_midnight"] is True

    response = client.get(f"{API}/rooms/{test_room.id}/availability", params={"date": "2026-10-17"}, headers=headers)
    slots = response.json()
    assert len(slots) == 24
    assert slots[-1]["start_time"] == "2026-10-18T01:45:00"
    assert slots[-1]["is_next_day"] is True

    response = client.post(
        f"{API}/bookings/",
        json=booking_payload(test_room, "2026-10-17T23:00:00", "2026-10-18T01:00:00"),
        headers=headers,
    )
    assert response.status_code == status.HTTP_201_CREATED


def test_closed_day_has_no_availability(client: TestClient, test_room: Room, headers: dict):
    response = client.put(
        f"{API}/business-hours/",
        json={"business_hours": [{"weekday": 1, "is_closed": True}]},
        headers=headers,
    )
    assert response.status_code == status.HTTP_200_OK

    response = client.get(f"{API}/rooms/{test_room.id}/availability", params={"date": "2026-10-19"}, headers=headers)
    assert response.json() == []


def test_invalid_hours_payload_rejected(client: TestClient, headers: dict):
    response = client.put(
        f"{API}/business-hours/",
        json={"business_hours": [{"weekday": 1, "open_time": "09:00"}]},
        headers=headers,
    )
    assert response.status_code == 422


def test_hours_with_seconds_rejected(client: TestClient, headers: dict):
    response = client.put(
        f"{API}/business-hours/",
        json={"business_hours": [{"weekday": 1, "open_time": "09:00:30", "close_time": "22:00"}]},
        headers=headers,
    )
    assert response.status_code == 422


# Bookings
def test_create_booking_and_block_slots(client: TestClient, test_room: Room, headers: dict):
    response = client.post(
        f"{API}/bookings/",
        json=booking_payload(test_room, "2026-10-19T18:00:00", "2026-10-19T20:00:00"),
        headers=headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    booking = response.json()
    assert booking["status"] == "confirmed"
    assert Decimal(booking["total_price"]) == Decimal("50.00")

    response = client.get(f"{API}/rooms/{test_room.id}/availability", params={"date": "2026-10-19"}, headers=headers)
    starts = [slot["start_time"] for slot in response.json()]
    assert len(starts) == 44
    assert "2026-10-19T18:00:00" not in starts
    assert "2026-10-19T20:00:00" in starts

    response = client.get(f"{API}/bookings/{booking['id']}", headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["customer_email"] == "alice@example.com"


def test_overlapping_booking_conflicts(client: TestClient, test_room: Room, headers: dict):
    client.post(
        f"{API}/bookings/",
        json=booking_payload(test_room, "2026-10-19T18:00:00", "2026-10-19T20:00:00"),
        headers=headers,
    )
    response = client.post(
        f"{API}/bookings/",
        json=booking_payload(test_room, "2026-10-19T19:00:00", "2026-10-19T21:00:00"),
        headers=headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] == "conflict"


def test_booking_outside_hours_conflicts(client: TestClient, test_room: Room, headers: dict):
    response = client.post(
        f"{API}/bookings/",
        json=booking_payload(test_room, "2026-10-19T21:30:00", "2026-10-19T22:30:00"),
        headers=headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert "business hours" in response.json()["detail"]


def test_reversed_interval_is_bad_request(client: TestClient, test_room: Room, headers: dict):
    response = client.post(
        f"{API}/bookings/",
        json=booking_payload(test_room, "2026-10-19T20:00:00", "2026-10-19T18:00:00"),
        headers=headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "invalid_interval"


def test_unknown_room_not_found(client: TestClient, test_tenant: Tenant, headers: dict):
    payload = {
        "room_id": str(uuid.uuid4()),
        "customer_name": "Alice",
        "start_time": "2026-10-19T18:00:00",
        "end_time": "2026-10-19T20:00:00",
    }
    response = client.post(f"{API}/bookings/", json=payload, headers=headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"] == "not_found"


def test_missing_or_malformed_tenant_is_bad_request(client: TestClient, test_room: Room):
    payload = booking_payload(test_room, "2026-10-19T18:00:00", "2026-10-19T20:00:00")

    response = client.post(f"{API}/bookings/", json=payload)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "validation_error"

    response = client.post(f"{API}/bookings/", json=payload, headers={"X-Tenant-ID": "not-a-uuid"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_cancel_then_rebook(client: TestClient, test_room: Room, headers: dict):
    payload = booking_payload(test_room, "2026-10-19T18:00:00", "2026-10-19T20:00:00")
    booking = client.post(f"{API}/bookings/", json=payload, headers=headers).json()

    response = client.patch(f"{API}/bookings/{booking['id']}", json={"status": "cancelled"}, headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "cancelled"

    response = client.post(f"{API}/bookings/", json=payload, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED

    response = client.patch(f"{API}/bookings/{booking['id']}", json={"status": "completed"}, headers=headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_empty_update_rejected(client: TestClient, test_room: Room, headers: dict):
    payload = booking_payload(test_room, "2026-10-19T18:00:00", "2026-10-19T20:00:00")
    booking = client.post(f"{API}/bookings/", json=payload, headers=headers).json()

    response = client.patch(f"{API}/bookings/{booking['id']}", json={}, headers=headers)
    assert response.status_code == 422


def test_list_and_delete_bookings(client: TestClient, test_room: Room, headers: dict):
    first = client.post(
        f"{API}/bookings/",
        json=booking_payload(test_room, "2026-10-19T18:00:00", "2026-10-19T20:00:00"),
        headers=headers,
    ).json()
    second = client.post(
        f"{API}/bookings/",
        json=booking_payload(test_room, "2026-10-20T10:00:00", "2026-10-20T11:00:00"),
        headers=headers,
    ).json()

    response = client.get(f"{API}/bookings/", headers=headers)
    assert [b["id"] for b in response.json()] == [first["id"], second["id"]]

    response = client.get(f"{API}/bookings/", params={"date": "2026-10-20"}, headers=headers)
    assert [b["id"] for b in response.json()] == [second["id"]]

    response = client.get(f"{API}/bookings/", params={"status": "cancelled"}, headers=headers)
    assert response.json() == []

    response = client.delete(f"{API}/bookings/{first['id']}", headers=headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = client.get(f"{API}/bookings/{first['id']}", headers=headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert len(client.get(f"{API}/bookings/", headers=headers).json()) == 1


def test_reschedule_booking(client: TestClient, test_room: Room, headers: dict):
    first = client.post(
        f"{API}/bookings/",
        json=booking_payload(test_room, "2026-10-19T18:00:00", "2026-10-19T20:00:00"),
        headers=headers,
    ).json()
    second = client.post(
        f"{API}/bookings/",
        json=booking_payload(test_room, "2026-10-19T10:00:00", "2026-10-19T11:00:00"),
        headers=headers,
    ).json()

    response = client.patch(
        f"{API}/bookings/{second['id']}",
        json={"start_time": "2026-10-19T14:00:00", "end_time": "2026-10-19T17:00:00"},
        headers=headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["start_time"] == "2026-10-19T14:00:00"
    assert Decimal(response.json()["total_price"]) == Decimal("75.00")

    response = client.patch(
        f"{API}/bookings/{second['id']}",
        json={"start_time": "2026-10-19T19:00:00", "end_time": "2026-10-19T21:00:00"},
        headers=headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT

    response = client.patch(
        f"{API}/bookings/{first['id']}",
        json={"start_time": "2026-10-19T21:00:00", "end_time": "2026-10-19T23:00:00"},
        headers=headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert "business hours" in response.json()["detail"]


def test_reschedule_fields_cannot_be_cleared(client: TestClient, test_room: Room, headers: dict):
    payload = booking_payload(test_room, "2026-10-19T18:00:00", "2026-10-19T20:00:00")
    booking = client.post(f"{API}/bookings/", json=payload, headers=headers).json()

    response = client.patch(f"{API}/bookings/{booking['id']}", json={"start_time": None}, headers=headers)
    assert response.status_code == 422
