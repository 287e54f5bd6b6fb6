"""Distribution Routes: attach and list hand-out evidence for a request."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from foodloop.core.domain_types import RequestId
from foodloop.schemas.distribution import (
    DistributionProofCreate, DistributionProofResponse,
)
from foodloop.api.dependencies import get_distribution_proofs
from foodloop.services.distribution_proofs import DistributionProofs

router = APIRouter(prefix="/api/v1/distribution", tags=["distribution"])


@router.post(
    "", response_model=DistributionProofResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_distribution_proof(
    body: DistributionProofCreate,
    proofs: DistributionProofs = Depends(get_distribution_proofs),
):
    return await proofs.add_distribution_proof(
        RequestId(body.request_id), body.photo_url,
        description=body.description,
        distributed_to_count=body.distributed_to_count,
    )


@router.get("/request/{request_id}", response_model=list[DistributionProofResponse])
async def list_distribution_proofs(
    request_id: UUID,
    proofs: DistributionProofs = Depends(get_distribution_proofs),
):
    return await proofs.list_proofs(RequestId(request_id))
