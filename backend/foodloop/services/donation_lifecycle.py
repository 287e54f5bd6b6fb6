"""Donation Lifecycle Manager: creation, explicit status updates, expiry sweep.

Invariants:
    - New donations start PENDING and credit the donor donation_created_points
      (DONATION entry, related id = donation id) in the same unit of work
    - update_status is permissive unless strict mode is on (then forward-only)
    - sweep_expired compares against a UTC cutoff (naive `now` is taken as UTC)
    - sweep_expired only ever moves PENDING -> EXPIRED, in one conditional UPDATE,
      so re-running with the same `now` changes nothing and it is safe next to
      ordinary status updates

Design Decisions:
    - Scoring engine injected, not constructed: one engine (one rules object)
      per unit of work is shared by both lifecycle managers
"""

import logging
from datetime import datetime
from typing import Sequence

from foodloop.core.clock import as_utc, utcnow
from foodloop.core.domain_types import (
    UserId, DonationId, DonationStatus, DonationType, RelatedEntityType,
)
from foodloop.core.errors import NotFoundError, ErrorContext
from foodloop.core.repository_protocols import LedgerStore, DonationLike
from foodloop.core.scoring import donation_reason
from foodloop.core.status_transitions import check_donation_transition
from foodloop.schemas.donation import DonationDraft
from foodloop.services.scoring_engine import ScoringEngine

logger = logging.getLogger(__name__)


class DonationLifecycle:
    """Entry point for donation writes and donation read projections."""

    def __init__(
        self, ledger: LedgerStore, scoring: ScoringEngine, strict: bool = False,
    ):
        self.ledger = ledger
        self.scoring = scoring
        self.strict = strict

    async def create_donation(
        self, donor_id: UserId, draft: DonationDraft,
    ) -> DonationLike:
        donor = await self.ledger.get_user(donor_id)
        if donor is None:
            raise NotFoundError("Donor", donor_id, ErrorContext(user_id=str(donor_id)))

        donation = await self.ledger.add_donation(donor_id, draft.to_fields())
        logger.info(
            f"Donation created: {donation.food_name}",
            extra={"donation_id": donation.id, "user_id": donor_id},
        )
        await self.scoring.add_points(
            donor_id,
            self.scoring.rules.donation_created_points,
            donation_reason(donation.food_name),
            RelatedEntityType.DONATION,
            donation.id,
        )
        return donation

    async def update_status(
        self, donation_id: DonationId, new_status: DonationStatus,
    ) -> DonationLike:
        donation = await self.get_donation(donation_id)
        check_donation_transition(
            DonationStatus(donation.status), new_status, self.strict,
        )
        donation = await self.ledger.set_donation_status(donation_id, new_status)
        logger.info(
            "Donation status updated",
            extra={"donation_id": donation_id, "status": new_status.value},
        )
        return donation

    async def sweep_expired(self, now: datetime | None = None) -> list[DonationId]:
        """Expire every PENDING donation whose expiry_date is before `now`."""
        cutoff = as_utc(now) if now is not None else utcnow()
        expired = await self.ledger.expire_pending_before(cutoff)
        if expired:
            logger.info("Expired donations swept", extra={"count": len(expired)})
        return expired

    # ─── Read projections ────────────────────────────────────────

    async def get_donation(self, donation_id: DonationId) -> DonationLike:
        donation = await self.ledger.get_donation(donation_id)
        if donation is None:
            raise NotFoundError(
                "Donation", donation_id, ErrorContext(donation_id=str(donation_id)),
            )
        return donation

    async def list_donations(self) -> Sequence[DonationLike]:
        return await self.ledger.list_donations()

    async def list_by_donor(self, donor_id: UserId) -> Sequence[DonationLike]:
        return await self.ledger.list_donations(donor_id=donor_id)

    async def list_by_type(self, donation_type: DonationType) -> Sequence[DonationLike]:
        return await self.ledger.list_donations(donation_type=donation_type)

    async def list_available(self, donation_type: DonationType) -> Sequence[DonationLike]:
        """PENDING donations of one category."""
        return await self.ledger.list_donations(
            donation_type=donation_type, status=DonationStatus.PENDING,
        )
