"""Freshness Ratings: recipients score how fresh a donation arrived (1-5).

Invariants:
    - rating outside MIN_RATING..MAX_RATING -> ValidationError, checked before any IO
    - one rating per (donation, user): unique constraint + insert-if-absent,
      a second attempt -> ConflictError
    - average rounded to one decimal; 0.0 when there are no ratings
"""

import logging

from foodloop.core.domain_types import DonationId, UserId
from foodloop.core.errors import (
    NotFoundError, ConflictError, ValidationError, ErrorContext,
)
from foodloop.core.repository_protocols import LedgerStore

logger = logging.getLogger(__name__)

MIN_RATING: int = 1
MAX_RATING: int = 5


class FreshnessRatings:
    """Freshness feedback on delivered donations."""

    def __init__(self, ledger: LedgerStore):
        self.ledger = ledger

    async def rate_freshness(
        self, donation_id: DonationId, user_id: UserId,
        rating: int, comment: str | None = None,
    ):
        ctx = ErrorContext(donation_id=str(donation_id), user_id=str(user_id))
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}", "rating", ctx,
            )
        if await self.ledger.get_donation(donation_id) is None:
            raise NotFoundError("Donation", donation_id, ctx)
        if await self.ledger.get_user(user_id) is None:
            raise NotFoundError("User", user_id, ctx)

        inserted = await self.ledger.insert_rating_if_absent({
            "donation_id": donation_id,
            "rated_by": user_id,
            "rating": rating,
            "comment": comment,
        })
        if not inserted:
            raise ConflictError("You have already rated this donation", ctx)
        logger.info(
            f"Freshness rated {rating}",
            extra={"donation_id": donation_id, "user_id": user_id},
        )
        ratings = await self.ledger.list_ratings(donation_id)
        return next(r for r in ratings if r.rated_by == user_id)

    async def get_freshness_summary(self, donation_id: DonationId) -> dict:
        if await self.ledger.get_donation(donation_id) is None:
            raise NotFoundError("Donation", donation_id)
        ratings = list(await self.ledger.list_ratings(donation_id))
        average = (
            round(sum(r.rating for r in ratings) / len(ratings), 1)
            if ratings else 0.0
        )
        return {
            "ratings": ratings,
            "average_rating": average,
            "total_ratings": len(ratings),
        }
