"""SQL Ledger Store: SQLAlchemy implementation of the LedgerStore protocol.

Invariants:
    - Never commits; flushes only. The surrounding unit of work owns the transaction
    - Conditional writes happen in the database, not in Python:
        * donation compare-and-set:  UPDATE ... WHERE id = ? AND status = ?
        * expiry sweep:              UPDATE ... WHERE status = 'PENDING' AND expiry_date < ?
        * points increment:          UPDATE ... SET total_points = total_points + ?
        * badge award / rating:      INSERT ... ON CONFLICT DO NOTHING
    - get_request(for_update=True) takes a row lock (SELECT ... FOR UPDATE) on PostgreSQL

Design Decisions:
    - Dialect-specific insert for ON CONFLICT (postgresql, sqlite); other dialects
      fall back to a SAVEPOINT that absorbs the unique-constraint violation
    - populate_existing on reads that follow bulk updates: the identity map never
      serves a stale status or balance
"""

import uuid
from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import case, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.dialects import postgresql, sqlite

from foodloop.core.clock import utcnow
from foodloop.core.domain_types import (
    UserId, DonationId, RequestId, BadgeId,
    DonationStatus, DonationType, RequestStatus, RelatedEntityType,
)
from foodloop.models.user import User
from foodloop.models.donation import Donation
from foodloop.models.request import Request
from foodloop.models.user_points import UserPoints
from foodloop.models.points_history import PointsHistoryEntry
from foodloop.models.badge import Badge
from foodloop.models.badge_award import BadgeAward
from foodloop.models.freshness_rating import FreshnessRating
from foodloop.models.distribution_proof import DistributionProof


class SqlLedgerStore:
    """LedgerStore bound to one AsyncSession (one unit of work)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Helpers ─────────────────────────────────────────────────

    async def _insert_if_absent(
        self, model, values: dict, conflict_columns: list[str],
    ) -> bool:
        """Insert one row unless it collides with a unique constraint. True if inserted."""
        values = {"id": uuid.uuid4(), **values}
        dialect = self.db.get_bind().dialect.name
        if dialect in ("postgresql", "sqlite"):
            insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
            stmt = (
                insert(model)
                .values(**values)
                .on_conflict_do_nothing(index_elements=conflict_columns)
                .returning(model.id)
            )
            result = await self.db.execute(stmt)
            return result.scalar_one_or_none() is not None

        try:
            async with self.db.begin_nested():
                self.db.add(model(**values))
            return True
        except IntegrityError:
            return False

    # ─── Users ───────────────────────────────────────────────────

    async def get_user(self, user_id: UserId) -> User | None:
        return await self.db.get(User, user_id)

    async def add_user(self, fields: dict) -> User:
        user = User(**fields)
        self.db.add(user)
        await self.db.flush()
        return user

    # ─── Donations ───────────────────────────────────────────────

    async def get_donation(self, donation_id: DonationId) -> Donation | None:
        result = await self.db.execute(
            select(Donation)
            .where(Donation.id == donation_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def add_donation(self, donor_id: UserId, fields: dict) -> Donation:
        now = utcnow()
        donation = Donation(
            donor_id=donor_id,
            status=DonationStatus.PENDING.value,
            created_at=now,
            updated_at=now,
            **fields,
        )
        self.db.add(donation)
        await self.db.flush()
        return donation

    async def set_donation_status(
        self, donation_id: DonationId, status: DonationStatus,
    ) -> Donation:
        donation = await self.get_donation(donation_id)
        donation.status = status.value
        donation.updated_at = utcnow()
        await self.db.flush()
        return donation

    async def transition_donation_if(
        self, donation_id: DonationId,
        expected: DonationStatus, target: DonationStatus,
    ) -> bool:
        """Compare-and-set on status. False when the row was not in `expected`."""
        result = await self.db.execute(
            update(Donation)
            .where(Donation.id == donation_id)
            .where(Donation.status == expected.value)
            .values(status=target.value, updated_at=utcnow())
            .returning(Donation.id)
            .execution_options(synchronize_session="fetch"),
        )
        return result.scalar_one_or_none() is not None

    async def expire_pending_before(self, now: datetime) -> list[DonationId]:
        result = await self.db.execute(
            update(Donation)
            .where(Donation.status == DonationStatus.PENDING.value)
            .where(Donation.expiry_date < now)
            .values(status=DonationStatus.EXPIRED.value, updated_at=now)
            .returning(Donation.id)
            .execution_options(synchronize_session="fetch"),
        )
        return [DonationId(donation_id) for donation_id in result.scalars().all()]

    async def list_donations(
        self, *, donor_id: UserId | None = None,
        donation_type: DonationType | None = None,
        status: DonationStatus | None = None,
    ) -> Sequence[Donation]:
        query = select(Donation).order_by(Donation.created_at.desc())
        if donor_id is not None:
            query = query.where(Donation.donor_id == donor_id)
        if donation_type is not None:
            query = query.where(Donation.donation_type == donation_type.value)
        if status is not None:
            query = query.where(Donation.status == status.value)
        result = await self.db.execute(
            query.execution_options(populate_existing=True),
        )
        return result.scalars().all()

    # ─── Requests ────────────────────────────────────────────────

    async def get_request(
        self, request_id: RequestId, *, for_update: bool = False,
    ) -> Request | None:
        query = (
            select(Request)
            .where(Request.id == request_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def add_request(self, fields: dict) -> Request:
        now = utcnow()
        request = Request(
            status=RequestStatus.PENDING.value,
            created_at=now,
            updated_at=now,
            **fields,
        )
        self.db.add(request)
        await self.db.flush()
        return request

    async def save_request(self, request: Request) -> Request:
        request.updated_at = utcnow()
        await self.db.flush()
        return request

    async def list_requests(
        self, *, donation_id: DonationId | None = None,
        requester_id: UserId | None = None,
        volunteer_id: UserId | None = None,
        status: RequestStatus | None = None,
    ) -> Sequence[Request]:
        query = select(Request).order_by(Request.created_at.desc())
        if donation_id is not None:
            query = query.where(Request.donation_id == donation_id)
        if requester_id is not None:
            query = query.where(Request.requester_id == requester_id)
        if volunteer_id is not None:
            query = query.where(Request.assigned_volunteer_id == volunteer_id)
        if status is not None:
            query = query.where(Request.status == status.value)
        result = await self.db.execute(
            query.execution_options(populate_existing=True),
        )
        return result.scalars().all()

    # ─── Points ledger ───────────────────────────────────────────

    async def ensure_user_points(self, user_id: UserId) -> None:
        await self._insert_if_absent(
            UserPoints,
            {"user_id": user_id, "total_points": 0, "level": 1},
            ["user_id"],
        )

    async def increment_points(self, user_id: UserId, delta: int) -> int:
        """Atomic in-database increment. Returns the new total."""
        result = await self.db.execute(
            update(UserPoints)
            .where(UserPoints.user_id == user_id)
            .values(
                total_points=UserPoints.total_points + delta,
                updated_at=utcnow(),
            )
            .returning(UserPoints.total_points)
            .execution_options(synchronize_session=False),
        )
        return result.scalar_one()

    async def set_level(self, user_id: UserId, level: int) -> UserPoints:
        await self.db.execute(
            update(UserPoints)
            .where(UserPoints.user_id == user_id)
            .values(level=level)
            .execution_options(synchronize_session=False),
        )
        return await self.get_user_points(user_id)

    async def get_user_points(self, user_id: UserId) -> UserPoints | None:
        result = await self.db.execute(
            select(UserPoints)
            .where(UserPoints.user_id == user_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def append_history(
        self, user_id: UserId, points: int, reason: str,
        entity_type: RelatedEntityType, entity_id: UUID | None,
    ) -> None:
        self.db.add(PointsHistoryEntry(
            user_id=user_id,
            points=points,
            reason=reason,
            related_entity_type=entity_type.value,
            related_entity_id=entity_id,
            created_at=utcnow(),
        ))
        await self.db.flush()

    async def list_history(self, user_id: UserId) -> Sequence[PointsHistoryEntry]:
        result = await self.db.execute(
            select(PointsHistoryEntry)
            .where(PointsHistoryEntry.user_id == user_id)
            .order_by(
                PointsHistoryEntry.created_at.desc(),
                # Same instant: a badge bonus is written after the award that unlocked it
                case(
                    (PointsHistoryEntry.related_entity_type
                     == RelatedEntityType.BADGE.value, 0),
                    else_=1,
                ),
                PointsHistoryEntry.id.desc(),
            ),
        )
        return result.scalars().all()

    async def leaderboard(self) -> Sequence[UserPoints]:
        result = await self.db.execute(
            select(UserPoints)
            .order_by(UserPoints.total_points.desc())
            .execution_options(populate_existing=True),
        )
        return result.scalars().all()

    # ─── Badges ──────────────────────────────────────────────────

    async def badges_up_to(self, total_points: int) -> Sequence[Badge]:
        result = await self.db.execute(
            select(Badge)
            .where(Badge.points_required <= total_points)
            .order_by(Badge.points_required, Badge.name),
        )
        return result.scalars().all()

    async def insert_badge_award_if_absent(
        self, user_id: UserId, badge_id: BadgeId,
    ) -> bool:
        return await self._insert_if_absent(
            BadgeAward,
            {"user_id": user_id, "badge_id": badge_id, "earned_at": utcnow()},
            ["user_id", "badge_id"],
        )

    async def list_badge_awards(self, user_id: UserId) -> Sequence[BadgeAward]:
        result = await self.db.execute(
            select(BadgeAward)
            .where(BadgeAward.user_id == user_id)
            .order_by(BadgeAward.earned_at),
        )
        return result.scalars().all()

    async def get_badge_by_name(self, name: str) -> Badge | None:
        result = await self.db.execute(select(Badge).where(Badge.name == name))
        return result.scalar_one_or_none()

    async def add_badge(self, fields: dict) -> Badge:
        badge = Badge(**fields)
        self.db.add(badge)
        await self.db.flush()
        return badge

    # ─── Freshness ratings ───────────────────────────────────────

    async def insert_rating_if_absent(self, fields: dict) -> bool:
        return await self._insert_if_absent(
            FreshnessRating,
            {**fields, "created_at": utcnow()},
            ["donation_id", "rated_by"],
        )

    async def list_ratings(self, donation_id: DonationId) -> Sequence[FreshnessRating]:
        result = await self.db.execute(
            select(FreshnessRating)
            .where(FreshnessRating.donation_id == donation_id)
            .order_by(FreshnessRating.created_at.desc()),
        )
        return result.scalars().all()

    # ─── Distribution proofs ─────────────────────────────────────

    async def add_distribution_proof(self, fields: dict) -> DistributionProof:
        proof = DistributionProof(created_at=utcnow(), **fields)
        self.db.add(proof)
        await self.db.flush()
        return proof

    async def list_distribution_proofs(
        self, request_id: RequestId,
    ) -> Sequence[DistributionProof]:
        result = await self.db.execute(
            select(DistributionProof)
            .where(DistributionProof.request_id == request_id)
            .order_by(DistributionProof.created_at.desc(), DistributionProof.id.desc()),
        )
        return result.scalars().all()
