"""Distribution Proofs: photo and headcount evidence attached to a request.

Invariants:
    - The request must exist; unknown request -> NotFoundError
    - photo_url must be non-blank; distributed_to_count, when given, is >= 0
    - Proofs are append-only and never change request status or points

Design Decisions:
    - Any request status accepted; proofs may arrive before DELIVERED
"""

import logging
from typing import Sequence

from foodloop.core.domain_types import RequestId
from foodloop.core.errors import NotFoundError, ValidationError, ErrorContext
from foodloop.core.repository_protocols import LedgerStore

logger = logging.getLogger(__name__)


class DistributionProofs:
    """Hand-out evidence for requests."""

    def __init__(self, ledger: LedgerStore):
        self.ledger = ledger

    async def add_distribution_proof(
        self, request_id: RequestId, photo_url: str,
        description: str | None = None,
        distributed_to_count: int | None = None,
    ):
        ctx = ErrorContext(request_id=str(request_id))
        photo_url = (photo_url or "").strip()
        if not photo_url:
            raise ValidationError("photo_url cannot be empty", "photo_url", ctx)
        if distributed_to_count is not None and distributed_to_count < 0:
            raise ValidationError(
                "distributed_to_count cannot be negative", "distributed_to_count", ctx,
            )
        await self._require_request(request_id)

        proof = await self.ledger.add_distribution_proof({
            "request_id": request_id,
            "photo_url": photo_url,
            "description": description,
            "distributed_to_count": distributed_to_count,
        })
        logger.info(
            "Distribution proof added",
            extra={"request_id": request_id, "count": distributed_to_count},
        )
        return proof

    async def list_proofs(self, request_id: RequestId) -> Sequence:
        """Newest first."""
        await self._require_request(request_id)
        return await self.ledger.list_distribution_proofs(request_id)

    async def _require_request(self, request_id: RequestId) -> None:
        if await self.ledger.get_request(request_id) is None:
            raise NotFoundError(
                "Request", request_id, ErrorContext(request_id=str(request_id)),
            )
