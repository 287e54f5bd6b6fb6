"""Request Lifecycle Manager: claims on donations, volunteer assignment, completion awards.

Invariants:
    - create_request writes the request AND flips its donation PENDING -> ACCEPTED
      in one unit of work; the flip is a compare-and-set, so two concurrent
      requests for one donation cannot both succeed
    - donation_id is never changed after creation
    - assigned_volunteer_id is set at most once, only while PENDING or ACCEPTED,
      and only to a VOLUNTEER-category user
    - update_status reads the previous status under a row lock; completion points
      are awarded only when the status actually changes to DELIVERED / COMPOSTED,
      so repeating the same terminal status never re-awards

Design Decisions:
    - Anonymous requests (no requester) skip the compost award; logged so the
      skipped award stays visible
"""

import logging
from typing import Sequence

from foodloop.core.domain_types import (
    UserId, DonationId, RequestId,
    DonationStatus, RequesterType, RequestStatus, RelatedEntityType, UserType,
)
from foodloop.core.errors import (
    NotFoundError, ConflictError, ValidationError, ErrorContext,
)
from foodloop.core.repository_protocols import LedgerStore, RequestLike
from foodloop.core.scoring import delivery_reason, compost_reason
from foodloop.core.status_transitions import (
    check_request_transition, VOLUNTEER_ASSIGNABLE,
)
from foodloop.services.scoring_engine import ScoringEngine

logger = logging.getLogger(__name__)


class RequestLifecycle:
    """Entry point for request writes and request read projections."""

    def __init__(
        self, ledger: LedgerStore, scoring: ScoringEngine, strict: bool = False,
    ):
        self.ledger = ledger
        self.scoring = scoring
        self.strict = strict

    async def create_request(
        self,
        donation_id: DonationId,
        requester_id: UserId | None,
        requester_type: RequesterType,
        pickup_address: str | None = None,
        delivery_address: str | None = None,
    ) -> RequestLike:
        ctx = ErrorContext(donation_id=str(donation_id))
        donation = await self.ledger.get_donation(donation_id)
        if donation is None:
            raise NotFoundError("Donation", donation_id, ctx)
        if donation.status != DonationStatus.PENDING.value:
            raise ConflictError("Donation is not available", ctx)

        if requester_id is not None:
            if await self.ledger.get_user(requester_id) is None:
                raise NotFoundError("Requester", requester_id, ctx)

        claimed = await self.ledger.transition_donation_if(
            donation_id, DonationStatus.PENDING, DonationStatus.ACCEPTED,
        )
        if not claimed:
            raise ConflictError("Donation is not available", ctx)

        request = await self.ledger.add_request({
            "donation_id": donation_id,
            "requester_id": requester_id,
            "requester_type": requester_type.value,
            "pickup_address": pickup_address,
            "delivery_address": delivery_address,
        })
        logger.info(
            "Request created",
            extra={"request_id": request.id, "donation_id": donation_id},
        )
        return request

    async def assign_volunteer(
        self, request_id: RequestId, volunteer_id: UserId,
    ) -> RequestLike:
        request = await self._get_locked(request_id)
        ctx = ErrorContext(request_id=str(request_id), user_id=str(volunteer_id))

        volunteer = await self.ledger.get_user(volunteer_id)
        if volunteer is None:
            raise NotFoundError("Volunteer", volunteer_id, ctx)
        if volunteer.user_type != UserType.VOLUNTEER.value:
            raise ValidationError("User is not a volunteer", "volunteer_id", ctx)

        if request.assigned_volunteer_id not in (None, volunteer_id):
            raise ConflictError("Request already has an assigned volunteer", ctx)
        if request.status not in {s.value for s in VOLUNTEER_ASSIGNABLE}:
            raise ConflictError(
                f"Cannot assign a volunteer to a {request.status} request", ctx,
            )

        request.assigned_volunteer_id = volunteer_id
        request.status = RequestStatus.ACCEPTED.value
        request = await self.ledger.save_request(request)
        logger.info(
            "Volunteer assigned",
            extra={"request_id": request_id, "user_id": volunteer_id},
        )
        return request

    async def update_status(
        self, request_id: RequestId, new_status: RequestStatus,
    ) -> RequestLike:
        request = await self._get_locked(request_id)
        previous = RequestStatus(request.status)
        check_request_transition(previous, new_status, self.strict)

        request.status = new_status.value
        request = await self.ledger.save_request(request)
        logger.info(
            f"Request status {previous.value} -> {new_status.value}",
            extra={"request_id": request_id, "status": new_status.value},
        )

        if new_status == previous:
            return request
        if new_status == RequestStatus.DELIVERED:
            await self._award_delivery(request)
        elif new_status == RequestStatus.COMPOSTED:
            await self._award_compost(request)
        return request

    async def _award_delivery(self, request: RequestLike) -> None:
        if request.assigned_volunteer_id is None:
            logger.info(
                "Delivered without assigned volunteer; no delivery points",
                extra={"request_id": request.id},
            )
            return
        donation = await self.ledger.get_donation(DonationId(request.donation_id))
        await self.scoring.add_points(
            UserId(request.assigned_volunteer_id),
            self.scoring.rules.delivery_completed_points,
            delivery_reason(donation.food_name),
            RelatedEntityType.DELIVERY,
            request.id,
        )

    async def _award_compost(self, request: RequestLike) -> None:
        if request.requester_id is None:
            logger.info(
                "Composted anonymous request; no compost points",
                extra={"request_id": request.id},
            )
            return
        donation = await self.ledger.get_donation(DonationId(request.donation_id))
        await self.scoring.add_points(
            UserId(request.requester_id),
            self.scoring.rules.compost_completed_points,
            compost_reason(donation.food_name),
            RelatedEntityType.COMPOST,
            request.id,
        )

    async def _get_locked(self, request_id: RequestId) -> RequestLike:
        request = await self.ledger.get_request(request_id, for_update=True)
        if request is None:
            raise NotFoundError(
                "Request", request_id, ErrorContext(request_id=str(request_id)),
            )
        return request

    # ─── Read projections ────────────────────────────────────────

    async def get_request(self, request_id: RequestId) -> RequestLike:
        request = await self.ledger.get_request(request_id)
        if request is None:
            raise NotFoundError(
                "Request", request_id, ErrorContext(request_id=str(request_id)),
            )
        return request

    async def list_requests(self) -> Sequence[RequestLike]:
        return await self.ledger.list_requests()

    async def list_by_requester(self, requester_id: UserId) -> Sequence[RequestLike]:
        return await self.ledger.list_requests(requester_id=requester_id)

    async def list_by_volunteer(self, volunteer_id: UserId) -> Sequence[RequestLike]:
        return await self.ledger.list_requests(volunteer_id=volunteer_id)

    async def list_by_donation(self, donation_id: DonationId) -> Sequence[RequestLike]:
        return await self.ledger.list_requests(donation_id=donation_id)

    async def list_by_status(self, status: RequestStatus) -> Sequence[RequestLike]:
        return await self.ledger.list_requests(status=status)
