"""Request Routes: claim, assign, complete over HTTP.

Invariants:
    - The second claim on one donation returns 409 STATE_CONFLICT
    - Assigning a non-volunteer returns 400 VALIDATION_ERROR
    - DELIVERED credits the assigned volunteer, visible through gamification routes
"""

from uuid import uuid4

import pytest


@pytest.fixture
async def saved(pending_donation, needy, volunteer, test_db):
    await test_db.commit()
    return {"donation": pending_donation, "needy": needy, "volunteer": volunteer}


async def _claim(client, saved) -> dict:
    res = await client.post("/api/v1/requests", json={
        "donation_id": str(saved["donation"].id),
        "requester_id": str(saved["needy"].id),
        "requester_type": "NEEDY",
        "delivery_address": "Shelter 4",
    })
    assert res.status_code == 201
    return res.json()


async def test_create_request(client, saved):
    request = await _claim(client, saved)
    assert request["status"] == "PENDING"
    assert request["requester_id"] == str(saved["needy"].id)

    donation = (await client.get(f"/api/v1/donations/{saved['donation'].id}")).json()
    assert donation["status"] == "ACCEPTED"


async def test_second_request_conflicts(client, saved):
    await _claim(client, saved)
    res = await client.post("/api/v1/requests", json={
        "donation_id": str(saved["donation"].id),
        "requester_type": "NGO",
    })
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "STATE_CONFLICT"

    listed = (await client.get(f"/api/v1/requests/donation/{saved['donation'].id}")).json()
    assert len(listed) == 1


async def test_request_for_unknown_donation(client):
    res = await client.post("/api/v1/requests", json={
        "donation_id": str(uuid4()), "requester_type": "NGO",
    })
    assert res.status_code == 404


async def test_assign_non_volunteer(client, saved):
    request = await _claim(client, saved)
    res = await client.put(
        f"/api/v1/requests/{request['id']}/volunteer",
        json={"volunteer_id": str(saved["needy"].id)},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"

    unchanged = (await client.get(f"/api/v1/requests/{request['id']}")).json()
    assert unchanged["assigned_volunteer_id"] is None


async def test_full_delivery_flow(client, saved):
    request = await _claim(client, saved)
    volunteer_id = str(saved["volunteer"].id)

    assigned = await client.put(
        f"/api/v1/requests/{request['id']}/volunteer",
        json={"volunteer_id": volunteer_id},
    )
    assert assigned.json()["status"] == "ACCEPTED"
    assert assigned.json()["assigned_volunteer_id"] == volunteer_id

    for status in ("PICKED_UP", "DELIVERED", "DELIVERED"):
        res = await client.put(
            f"/api/v1/requests/{request['id']}/status", json={"status": status},
        )
        assert res.status_code == 200

    points = (await client.get(f"/api/v1/gamification/points/{volunteer_id}")).json()
    assert points["total_points"] == 15
    history = (await client.get(f"/api/v1/gamification/history/{volunteer_id}")).json()
    assert [h["related_entity_type"] for h in history] == ["DELIVERY"]

    by_volunteer = (await client.get(f"/api/v1/requests/volunteer/{volunteer_id}")).json()
    assert [r["id"] for r in by_volunteer] == [request["id"]]
    delivered = (await client.get("/api/v1/requests", params={"status": "DELIVERED"})).json()
    assert [r["id"] for r in delivered] == [request["id"]]


async def test_list_by_requester(client, saved):
    request = await _claim(client, saved)
    res = await client.get(f"/api/v1/requests/requester/{saved['needy'].id}")
    assert [r["id"] for r in res.json()] == [request["id"]]


async def test_update_unknown_request(client):
    res = await client.put(
        f"/api/v1/requests/{uuid4()}/status", json={"status": "DELIVERED"},
    )
    assert res.status_code == 404


async def test_distribution_proof_routes(client, saved):
    request = await _claim(client, saved)
    res = await client.post("/api/v1/distribution", json={
        "request_id": request["id"],
        "photo_url": "https://cdn.example.org/p/9.jpg",
        "description": "Evening hand-out",
        "distributed_to_count": 25,
    })
    assert res.status_code == 201
    assert res.json()["distributed_to_count"] == 25

    listed = (await client.get(f"/api/v1/distribution/request/{request['id']}")).json()
    assert [p["photo_url"] for p in listed] == ["https://cdn.example.org/p/9.jpg"]


async def test_distribution_proof_unknown_request(client):
    res = await client.post("/api/v1/distribution", json={
        "request_id": str(uuid4()), "photo_url": "https://x/1.jpg",
    })
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_distribution_proof_negative_count(client, saved):
    request = await _claim(client, saved)
    res = await client.post("/api/v1/distribution", json={
        "request_id": request["id"], "photo_url": "https://x/1.jpg",
        "distributed_to_count": -1,
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
