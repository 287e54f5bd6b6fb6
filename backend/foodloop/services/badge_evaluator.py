"""Badge Evaluator: grants every badge a user newly qualifies for, exactly once.

Invariants:
    - A (user, badge) pair is awarded at most once, guarded by the database unique
      constraint plus insert-if-absent; no separate exists() check races with it
    - check_and_award returns only badges inserted by THIS call; concurrent passes
      that lose the insert race see nothing new and award no bonus
    - Unknown user -> NotFoundError

Design Decisions:
    - No bonus points here: returning the new badges lets the scoring engine queue
      the bonuses iteratively instead of recursing back into add_points
"""

import logging
from typing import Sequence

from foodloop.core.domain_types import UserId, BadgeId
from foodloop.core.errors import NotFoundError, ErrorContext
from foodloop.core.repository_protocols import LedgerStore, BadgeLike

logger = logging.getLogger(__name__)


class BadgeEvaluator:
    """Threshold badges over a user's running total."""

    def __init__(self, ledger: LedgerStore):
        self.ledger = ledger

    async def check_and_award(
        self, user_id: UserId, total_points: int,
    ) -> list[BadgeLike]:
        qualifying: Sequence[BadgeLike] = await self.ledger.badges_up_to(total_points)
        user = await self.ledger.get_user(user_id)
        if user is None:
            raise NotFoundError(
                "User", user_id, ErrorContext(user_id=str(user_id)),
            )

        newly_awarded: list[BadgeLike] = []
        for badge in qualifying:
            inserted = await self.ledger.insert_badge_award_if_absent(
                user_id, BadgeId(badge.id),
            )
            if inserted:
                logger.info(
                    f"Badge '{badge.name}' awarded",
                    extra={"user_id": user_id, "badge_id": badge.id},
                )
                newly_awarded.append(badge)
        return newly_awarded
