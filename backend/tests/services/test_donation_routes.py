"""Donation Routes: HTTP adapter over DonationLifecycle.

Invariants:
    - POST /donations returns 201 and credits the donor in the same transaction
    - Domain errors map to the structured error envelope (404 / 409 / 400)
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest


@pytest.fixture
async def saved_donor(donor, test_db):
    await test_db.commit()
    return donor


def donation_body(donor_id, **overrides) -> dict:
    body = {
        "donor_id": str(donor_id),
        "food_name": "Paneer curry",
        "quantity": 12,
        "expiry_date": (datetime.now(timezone.utc) + timedelta(hours=4)).isoformat(),
        "donation_type": "HUMAN",
        "address": "7 Lake View",
    }
    body.update(overrides)
    return body


async def test_create_donation(client, saved_donor):
    res = await client.post("/api/v1/donations", json=donation_body(saved_donor.id))
    assert res.status_code == 201
    data = res.json()
    assert data["status"] == "PENDING"
    assert data["food_name"] == "Paneer curry"
    assert data["donor_id"] == str(saved_donor.id)

    points = await client.get(f"/api/v1/gamification/points/{saved_donor.id}")
    assert points.json() == {
        "user_id": str(saved_donor.id), "total_points": 10, "level": 1,
    }


async def test_create_donation_unknown_donor(client):
    res = await client.post("/api/v1/donations", json=donation_body(uuid4()))
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_create_donation_invalid_body(client, saved_donor):
    res = await client.post(
        "/api/v1/donations", json=donation_body(saved_donor.id, quantity=0),
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any(d["field"].endswith("quantity") for d in error["details"])


async def test_create_donation_blank_name(client, saved_donor):
    res = await client.post(
        "/api/v1/donations", json=donation_body(saved_donor.id, food_name="   "),
    )
    assert res.status_code == 400


async def test_get_and_list_donations(client, saved_donor):
    created = (await client.post(
        "/api/v1/donations", json=donation_body(saved_donor.id),
    )).json()
    await client.post(
        "/api/v1/donations",
        json=donation_body(saved_donor.id, food_name="Scraps", donation_type="DOG"),
    )

    res = await client.get(f"/api/v1/donations/{created['id']}")
    assert res.status_code == 200
    assert res.json()["id"] == created["id"]

    assert len((await client.get("/api/v1/donations")).json()) == 2
    assert len((await client.get(f"/api/v1/donations/donor/{saved_donor.id}")).json()) == 2
    dogs = (await client.get("/api/v1/donations/type/DOG")).json()
    assert [d["food_name"] for d in dogs] == ["Scraps"]
    available = (await client.get("/api/v1/donations/available/HUMAN")).json()
    assert [d["id"] for d in available] == [created["id"]]


async def test_get_unknown_donation(client):
    res = await client.get(f"/api/v1/donations/{uuid4()}")
    assert res.status_code == 404


async def test_update_donation_status(client, saved_donor):
    created = (await client.post(
        "/api/v1/donations", json=donation_body(saved_donor.id),
    )).json()
    res = await client.put(
        f"/api/v1/donations/{created['id']}/status", json={"status": "PICKED_UP"},
    )
    assert res.status_code == 200
    assert res.json()["status"] == "PICKED_UP"


async def test_update_donation_status_rejects_unknown_value(client, saved_donor):
    created = (await client.post(
        "/api/v1/donations", json=donation_body(saved_donor.id),
    )).json()
    res = await client.put(
        f"/api/v1/donations/{created['id']}/status", json={"status": "LOST"},
    )
    assert res.status_code == 400


async def test_sweep_expired_route(client, saved_donor):
    past = (datetime.now(timezone.utc) - timedelta(hours=1)).isoformat()
    overdue = (await client.post(
        "/api/v1/donations", json=donation_body(saved_donor.id, expiry_date=past),
    )).json()

    res = await client.post("/api/v1/donations/sweep-expired")
    assert res.json() == {"expired_count": 1, "expired_ids": [overdue["id"]]}

    again = await client.post("/api/v1/donations/sweep-expired")
    assert again.json()["expired_count"] == 0
    status = (await client.get(f"/api/v1/donations/{overdue['id']}")).json()["status"]
    assert status == "EXPIRED"
