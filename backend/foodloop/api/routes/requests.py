"""Request Routes: thin HTTP adapter over RequestLifecycle.

Invariants:
    - POST /requests writes the request and flips the donation in one transaction
    - Completion awards happen inside PUT /{id}/status, same transaction
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from foodloop.core.domain_types import DonationId, RequestId, RequestStatus, UserId
from foodloop.schemas.request import (
    RequestCreate, RequestResponse, RequestStatusUpdate, VolunteerAssignment,
)
from foodloop.api.dependencies import get_request_lifecycle
from foodloop.services.request_lifecycle import RequestLifecycle

router = APIRouter(prefix="/api/v1/requests", tags=["requests"])


@router.post(
    "", response_model=RequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_request(
    body: RequestCreate,
    lifecycle: RequestLifecycle = Depends(get_request_lifecycle),
):
    return await lifecycle.create_request(
        DonationId(body.donation_id),
        UserId(body.requester_id) if body.requester_id else None,
        body.requester_type,
        pickup_address=body.pickup_address,
        delivery_address=body.delivery_address,
    )


@router.get("", response_model=list[RequestResponse])
async def list_requests(
    status_filter: RequestStatus | None = Query(None, alias="status"),
    lifecycle: RequestLifecycle = Depends(get_request_lifecycle),
):
    if status_filter:
        return await lifecycle.list_by_status(status_filter)
    return await lifecycle.list_requests()


@router.get("/requester/{requester_id}", response_model=list[RequestResponse])
async def list_requests_by_requester(
    requester_id: UUID,
    lifecycle: RequestLifecycle = Depends(get_request_lifecycle),
):
    return await lifecycle.list_by_requester(UserId(requester_id))


@router.get("/volunteer/{volunteer_id}", response_model=list[RequestResponse])
async def list_requests_by_volunteer(
    volunteer_id: UUID,
    lifecycle: RequestLifecycle = Depends(get_request_lifecycle),
):
    return await lifecycle.list_by_volunteer(UserId(volunteer_id))


@router.get("/donation/{donation_id}", response_model=list[RequestResponse])
async def list_requests_by_donation(
    donation_id: UUID,
    lifecycle: RequestLifecycle = Depends(get_request_lifecycle),
):
    return await lifecycle.list_by_donation(DonationId(donation_id))


@router.get("/{request_id}", response_model=RequestResponse)
async def get_request(
    request_id: UUID,
    lifecycle: RequestLifecycle = Depends(get_request_lifecycle),
):
    return await lifecycle.get_request(RequestId(request_id))


@router.put("/{request_id}/volunteer", response_model=RequestResponse)
async def assign_volunteer(
    request_id: UUID, body: VolunteerAssignment,
    lifecycle: RequestLifecycle = Depends(get_request_lifecycle),
):
    return await lifecycle.assign_volunteer(
        RequestId(request_id), UserId(body.volunteer_id),
    )


@router.put("/{request_id}/status", response_model=RequestResponse)
async def update_request_status(
    request_id: UUID, body: RequestStatusUpdate,
    lifecycle: RequestLifecycle = Depends(get_request_lifecycle),
):
    return await lifecycle.update_status(RequestId(request_id), body.status)
