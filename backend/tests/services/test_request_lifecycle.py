"""Request Lifecycle: claiming donations, volunteer assignment, completion awards.

Invariants:
    - Creating a request flips its donation PENDING -> ACCEPTED; a second request fails
    - Only VOLUNTEER users can be assigned, and only once
    - DELIVERED credits the volunteer 15, COMPOSTED credits the requester 20, once each
"""

from uuid import uuid4

import pytest

from foodloop.core.domain_types import (
    DonationId, DonationStatus, RequestId, RequesterType, RequestStatus,
    UserId, UserType,
)
from foodloop.core.errors import ConflictError, NotFoundError, ValidationError
from foodloop.services.request_lifecycle import RequestLifecycle


@pytest.fixture
async def open_request(requests_, pending_donation, needy):
    return await requests_.create_request(
        pending_donation.id, needy.id, RequesterType.NEEDY,
        pickup_address="12 Market Road", delivery_address="Shelter 4",
    )


@pytest.fixture
async def assigned_request(requests_, open_request, volunteer):
    return await requests_.assign_volunteer(open_request.id, volunteer.id)


# ─── Creation ───────────────────────────────────────────────────

async def test_create_request_claims_donation(open_request, ledger, pending_donation):
    assert open_request.status == RequestStatus.PENDING.value
    assert open_request.donation_id == pending_donation.id
    assert open_request.delivery_address == "Shelter 4"
    donation = await ledger.get_donation(pending_donation.id)
    assert donation.status == "ACCEPTED"


async def test_second_request_conflicts(
    requests_, ledger, open_request, pending_donation, make_user,
):
    other = await make_user()
    with pytest.raises(ConflictError, match="not available"):
        await requests_.create_request(
            pending_donation.id, other.id, RequesterType.NGO,
        )
    assert len(await ledger.list_requests(donation_id=pending_donation.id)) == 1


async def test_compare_and_set_refuses_claimed_donation(ledger, open_request, pending_donation):
    claimed = await ledger.transition_donation_if(
        pending_donation.id, DonationStatus.PENDING, DonationStatus.ACCEPTED,
    )
    assert claimed is False


async def test_create_request_unknown_donation(requests_, needy):
    with pytest.raises(NotFoundError, match="Donation"):
        await requests_.create_request(
            DonationId(uuid4()), needy.id, RequesterType.NEEDY,
        )


async def test_create_request_unknown_requester_leaves_donation_pending(
    requests_, ledger, pending_donation,
):
    with pytest.raises(NotFoundError, match="Requester"):
        await requests_.create_request(
            pending_donation.id, UserId(uuid4()), RequesterType.NGO,
        )
    assert (await ledger.get_donation(pending_donation.id)).status == "PENDING"


async def test_anonymous_request(requests_, pending_donation):
    request = await requests_.create_request(
        pending_donation.id, None, RequesterType.NEEDY,
    )
    assert request.requester_id is None
    assert request.requester_type == "NEEDY"


# ─── Volunteer assignment ───────────────────────────────────────

async def test_assign_volunteer(assigned_request, volunteer):
    assert assigned_request.assigned_volunteer_id == volunteer.id
    assert assigned_request.status == RequestStatus.ACCEPTED.value


async def test_assign_non_volunteer_rejected(requests_, ledger, open_request, needy):
    with pytest.raises(ValidationError) as exc:
        await requests_.assign_volunteer(open_request.id, needy.id)
    assert exc.value.field == "volunteer_id"
    request = await ledger.get_request(open_request.id)
    assert request.assigned_volunteer_id is None
    assert request.status == RequestStatus.PENDING.value


async def test_assign_unknown_volunteer(requests_, open_request):
    with pytest.raises(NotFoundError, match="Volunteer"):
        await requests_.assign_volunteer(open_request.id, UserId(uuid4()))


async def test_assign_unknown_request(requests_, volunteer):
    with pytest.raises(NotFoundError):
        await requests_.assign_volunteer(RequestId(uuid4()), volunteer.id)


async def test_reassign_same_volunteer_is_idempotent(
    requests_, assigned_request, volunteer,
):
    again = await requests_.assign_volunteer(assigned_request.id, volunteer.id)
    assert again.assigned_volunteer_id == volunteer.id


async def test_reassign_other_volunteer_conflicts(
    requests_, assigned_request, make_user,
):
    second = await make_user(UserType.VOLUNTEER)
    with pytest.raises(ConflictError):
        await requests_.assign_volunteer(assigned_request.id, second.id)


async def test_assign_after_pickup_conflicts(requests_, open_request, volunteer):
    await requests_.update_status(open_request.id, RequestStatus.PICKED_UP)
    with pytest.raises(ConflictError):
        await requests_.assign_volunteer(open_request.id, volunteer.id)


# ─── Status updates and completion awards ───────────────────────

async def test_delivered_awards_volunteer_once(
    requests_, ledger, assigned_request, volunteer,
):
    await requests_.update_status(assigned_request.id, RequestStatus.PICKED_UP)
    await requests_.update_status(assigned_request.id, RequestStatus.DELIVERED)
    await requests_.update_status(assigned_request.id, RequestStatus.DELIVERED)

    points = await ledger.get_user_points(volunteer.id)
    assert points.total_points == 15
    (entry,) = await ledger.list_history(volunteer.id)
    assert entry.related_entity_type == "DELIVERY"
    assert entry.related_entity_id == assigned_request.id
    assert entry.reason == "Completed delivery for: Vegetable biryani"


async def test_delivered_without_volunteer_awards_nobody(
    requests_, ledger, open_request, needy,
):
    request = await requests_.update_status(open_request.id, RequestStatus.DELIVERED)
    assert request.status == RequestStatus.DELIVERED.value
    assert await ledger.get_user_points(needy.id) is None


async def test_composted_awards_requester(
    requests_, ledger, pending_donation, compost_agency,
):
    request = await requests_.create_request(
        pending_donation.id, compost_agency.id, RequesterType.COMPOST_AGENCY,
    )
    await requests_.update_status(request.id, RequestStatus.COMPOSTED)

    points = await ledger.get_user_points(compost_agency.id)
    assert points.total_points == 20
    (entry,) = await ledger.list_history(compost_agency.id)
    assert entry.related_entity_type == "COMPOST"
    assert entry.reason == "Composted: Vegetable biryani"


async def test_composted_anonymous_request_skips_award(requests_, pending_donation):
    request = await requests_.create_request(
        pending_donation.id, None, RequesterType.COMPOST_AGENCY,
    )
    updated = await requests_.update_status(request.id, RequestStatus.COMPOSTED)
    assert updated.status == RequestStatus.COMPOSTED.value


async def test_request_completion_leaves_donation_status(
    requests_, ledger, assigned_request, pending_donation,
):
    await requests_.update_status(assigned_request.id, RequestStatus.DELIVERED)
    assert (await ledger.get_donation(pending_donation.id)).status == "ACCEPTED"


async def test_strict_request_rejects_skip(ledger, scoring, open_request, volunteer):
    strict = RequestLifecycle(ledger, scoring, strict=True)
    with pytest.raises(ConflictError):
        await strict.update_status(open_request.id, RequestStatus.DELIVERED)
    assert await ledger.get_user_points(volunteer.id) is None


async def test_strict_request_happy_path(ledger, scoring, open_request, volunteer):
    strict = RequestLifecycle(ledger, scoring, strict=True)
    await strict.assign_volunteer(open_request.id, volunteer.id)
    await strict.update_status(open_request.id, RequestStatus.PICKED_UP)
    done = await strict.update_status(open_request.id, RequestStatus.DELIVERED)
    assert done.status == RequestStatus.DELIVERED.value
    assert (await ledger.get_user_points(volunteer.id)).total_points == 15


async def test_update_unknown_request(requests_):
    with pytest.raises(NotFoundError):
        await requests_.update_status(RequestId(uuid4()), RequestStatus.ACCEPTED)


# ─── Read projections ───────────────────────────────────────────

async def test_read_projections(
    requests_, assigned_request, pending_donation, needy, volunteer,
):
    assert (await requests_.get_request(assigned_request.id)).id == assigned_request.id
    assert [r.id for r in await requests_.list_by_requester(needy.id)] == [assigned_request.id]
    assert [r.id for r in await requests_.list_by_volunteer(volunteer.id)] == [assigned_request.id]
    assert [r.id for r in await requests_.list_by_donation(pending_donation.id)] == [assigned_request.id]
    assert [r.id for r in await requests_.list_by_status(RequestStatus.ACCEPTED)] == [assigned_request.id]
    assert await requests_.list_by_status(RequestStatus.DELIVERED) == []
    assert len(await requests_.list_requests()) == 1


async def test_get_request_unknown(requests_):
    with pytest.raises(NotFoundError):
        await requests_.get_request(RequestId(uuid4()))
