"""Scoring Engine: the only writer of balances and points history.

Invariants:
    - add_points applies the delta with an in-database increment (no lost updates)
    - Every applied award appends exactly one PointsHistoryEntry
    - level = floor(total / points_per_level) + 1 after every award
    - Badge evaluation runs after every award; each newly granted badge enqueues
      one bonus award, which is itself applied and evaluated
    - The award queue drains in at most 1 + |badge catalog| iterations per call
    - Read projections (get_*) have no side effects

Design Decisions:
    - FIFO work queue over mutual recursion with the badge evaluator: depth is
      explicit and bounded, and a single call is easy to trace in logs
    - Delta not clamped: callers only pass non-negative awards; corrections are
      the caller's concern
"""

import logging
from collections import deque
from typing import Sequence
from uuid import UUID

from foodloop.core.domain_types import UserId, RelatedEntityType
from foodloop.core.errors import NotFoundError, ErrorContext
from foodloop.core.gamification_rules import GamificationRules, DEFAULT_RULES
from foodloop.core.repository_protocols import LedgerStore, UserPointsLike
from foodloop.core.scoring import PendingAward, compute_level, badge_reason
from foodloop.models.user_points import UserPoints
from foodloop.services.badge_evaluator import BadgeEvaluator

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Points balance, level, history and badge cascade."""

    def __init__(
        self, ledger: LedgerStore,
        rules: GamificationRules = DEFAULT_RULES,
        badges: BadgeEvaluator | None = None,
    ):
        self.ledger = ledger
        self.rules = rules
        self.badges = badges or BadgeEvaluator(ledger)

    async def add_points(
        self, user_id: UserId, points: int, reason: str,
        entity_type: RelatedEntityType, entity_id: UUID | None,
    ) -> UserPointsLike:
        """Apply one award and every badge bonus it unlocks."""
        queue: deque[PendingAward] = deque([
            PendingAward(user_id, points, reason, entity_type, entity_id),
        ])
        while queue:
            award = queue.popleft()
            total = await self._apply(award)
            for badge in await self.badges.check_and_award(award.user_id, total):
                queue.append(PendingAward(
                    award.user_id,
                    self.rules.badge_bonus_points,
                    badge_reason(badge.name),
                    RelatedEntityType.BADGE,
                    badge.id,
                ))
        return await self.ledger.get_user_points(user_id)

    async def _apply(self, award: PendingAward) -> int:
        user = await self.ledger.get_user(award.user_id)
        if user is None:
            raise NotFoundError(
                "User", award.user_id, ErrorContext(user_id=str(award.user_id)),
            )
        await self.ledger.ensure_user_points(award.user_id)
        total = await self.ledger.increment_points(award.user_id, award.points)
        await self.ledger.set_level(
            award.user_id, compute_level(total, self.rules.points_per_level),
        )
        await self.ledger.append_history(
            award.user_id, award.points, award.reason,
            award.entity_type, award.entity_id,
        )
        logger.info(
            f"Awarded {award.points} points: {award.reason}",
            extra={"user_id": award.user_id, "points": total},
        )
        return total

    # ─── Read projections ────────────────────────────────────────

    async def get_user_points(self, user_id: UserId) -> UserPointsLike:
        """Balance for a user; zero-balance projection if nothing was awarded yet."""
        row = await self.ledger.get_user_points(user_id)
        if row is not None:
            return row
        if await self.ledger.get_user(user_id) is None:
            raise NotFoundError("User", user_id)
        # Transient, never added to the session
        return UserPoints(user_id=user_id, total_points=0, level=1)

    async def get_leaderboard(self) -> Sequence[UserPointsLike]:
        return await self.ledger.leaderboard()

    async def get_user_badges(self, user_id: UserId) -> Sequence:
        return await self.ledger.list_badge_awards(user_id)

    async def get_points_history(self, user_id: UserId) -> Sequence:
        """Newest first."""
        return await self.ledger.list_history(user_id)
