"""Distribution Proofs: evidence attached to requests, append-only.

Invariants:
    - Unknown request -> NotFoundError, nothing stored
    - Blank photo_url or negative headcount -> ValidationError
    - Proofs never change request status or points
"""

from uuid import uuid4

import pytest

from foodloop.core.domain_types import (
    RequestId, RequesterType, RequestStatus, UserType,
)
from foodloop.core.errors import NotFoundError, ValidationError
from foodloop.services.distribution_proofs import DistributionProofs


@pytest.fixture
def proofs(ledger):
    return DistributionProofs(ledger)


@pytest.fixture
async def ngo_request(requests_, pending_donation, make_user):
    ngo = await make_user(UserType.NGO, "Food Bank")
    return await requests_.create_request(
        pending_donation.id, ngo.id, RequesterType.NGO,
    )


async def test_add_distribution_proof(proofs, ngo_request):
    proof = await proofs.add_distribution_proof(
        ngo_request.id, " https://cdn.example.org/p/1.jpg ",
        description="Served at the shelter", distributed_to_count=40,
    )
    assert proof.request_id == ngo_request.id
    assert proof.photo_url == "https://cdn.example.org/p/1.jpg"
    assert proof.distributed_to_count == 40


async def test_optional_fields(proofs, ngo_request):
    proof = await proofs.add_distribution_proof(ngo_request.id, "https://x/2.jpg")
    assert proof.description is None
    assert proof.distributed_to_count is None


async def test_unknown_request(proofs, ledger):
    missing = RequestId(uuid4())
    with pytest.raises(NotFoundError, match="Request"):
        await proofs.add_distribution_proof(missing, "https://x/1.jpg")
    assert await ledger.list_distribution_proofs(missing) == []


@pytest.mark.parametrize("url", ["", "   "])
async def test_blank_photo_url(proofs, ngo_request, url):
    with pytest.raises(ValidationError) as exc:
        await proofs.add_distribution_proof(ngo_request.id, url)
    assert exc.value.field == "photo_url"


async def test_negative_headcount(proofs, ngo_request):
    with pytest.raises(ValidationError) as exc:
        await proofs.add_distribution_proof(
            ngo_request.id, "https://x/1.jpg", distributed_to_count=-3,
        )
    assert exc.value.field == "distributed_to_count"


async def test_zero_headcount_allowed(proofs, ngo_request):
    proof = await proofs.add_distribution_proof(
        ngo_request.id, "https://x/1.jpg", distributed_to_count=0,
    )
    assert proof.distributed_to_count == 0


async def test_list_proofs_per_request(
    proofs, requests_, ngo_request, donations, donor, make_draft,
):
    other_donation = await donations.create_donation(donor.id, make_draft("Khichdi"))
    other = await requests_.create_request(other_donation.id, None, RequesterType.NEEDY)
    await proofs.add_distribution_proof(ngo_request.id, "https://x/1.jpg")
    await proofs.add_distribution_proof(ngo_request.id, "https://x/2.jpg")
    await proofs.add_distribution_proof(other.id, "https://x/3.jpg")

    listed = await proofs.list_proofs(ngo_request.id)
    assert sorted(p.photo_url for p in listed) == ["https://x/1.jpg", "https://x/2.jpg"]


async def test_list_proofs_unknown_request(proofs):
    with pytest.raises(NotFoundError):
        await proofs.list_proofs(RequestId(uuid4()))


async def test_proof_leaves_request_and_points_alone(
    proofs, ledger, ngo_request,
):
    await proofs.add_distribution_proof(
        ngo_request.id, "https://x/1.jpg", distributed_to_count=12,
    )
    request = await ledger.get_request(ngo_request.id)
    assert request.status == RequestStatus.PENDING.value
    assert await ledger.get_user_points(ngo_request.requester_id) is None
