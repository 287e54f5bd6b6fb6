"""Donation Routes: thin HTTP adapter over DonationLifecycle.

Invariants:
    - Each call runs in one unit of work (see api/dependencies.py)
    - Domain errors surface through the global FoodLoopError handler
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from foodloop.core.domain_types import DonationId, DonationType, UserId
from foodloop.schemas.donation import (
    DonationCreate, DonationDraft, DonationResponse, DonationStatusUpdate,
    SweepResponse,
)
from foodloop.api.dependencies import get_donation_lifecycle
from foodloop.services.donation_lifecycle import DonationLifecycle

router = APIRouter(prefix="/api/v1/donations", tags=["donations"])


@router.post(
    "", response_model=DonationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_donation(
    body: DonationCreate,
    lifecycle: DonationLifecycle = Depends(get_donation_lifecycle),
):
    draft = DonationDraft(**body.model_dump(exclude={"donor_id"}))
    return await lifecycle.create_donation(UserId(body.donor_id), draft)


@router.get("", response_model=list[DonationResponse])
async def list_donations(
    lifecycle: DonationLifecycle = Depends(get_donation_lifecycle),
):
    return await lifecycle.list_donations()


@router.get("/donor/{donor_id}", response_model=list[DonationResponse])
async def list_donations_by_donor(
    donor_id: UUID,
    lifecycle: DonationLifecycle = Depends(get_donation_lifecycle),
):
    return await lifecycle.list_by_donor(UserId(donor_id))


@router.get("/type/{donation_type}", response_model=list[DonationResponse])
async def list_donations_by_type(
    donation_type: DonationType,
    lifecycle: DonationLifecycle = Depends(get_donation_lifecycle),
):
    return await lifecycle.list_by_type(donation_type)


@router.get("/available/{donation_type}", response_model=list[DonationResponse])
async def list_available_donations(
    donation_type: DonationType,
    lifecycle: DonationLifecycle = Depends(get_donation_lifecycle),
):
    return await lifecycle.list_available(donation_type)


@router.post("/sweep-expired", response_model=SweepResponse)
async def sweep_expired(
    lifecycle: DonationLifecycle = Depends(get_donation_lifecycle),
):
    """Run the expiry sweep now (the background sweeper does this on a timer)."""
    expired = await lifecycle.sweep_expired()
    return SweepResponse(expired_count=len(expired), expired_ids=expired)


@router.get("/{donation_id}", response_model=DonationResponse)
async def get_donation(
    donation_id: UUID,
    lifecycle: DonationLifecycle = Depends(get_donation_lifecycle),
):
    return await lifecycle.get_donation(DonationId(donation_id))


@router.put("/{donation_id}/status", response_model=DonationResponse)
async def update_donation_status(
    donation_id: UUID, body: DonationStatusUpdate,
    lifecycle: DonationLifecycle = Depends(get_donation_lifecycle),
):
    return await lifecycle.update_status(DonationId(donation_id), body.status)
