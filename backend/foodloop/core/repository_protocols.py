"""Boundary Protocols: contracts between the lifecycle core and the ledger store.

Invariants:
    - Core NEVER imports from the shell; dependency arrows point inward only
    - All IO goes through LedgerStore; implementations injected by the shell
    - Every mutating method participates in the caller's unit of work (no commits inside)
    - Conditional writes (compare-and-set, insert-if-absent) report whether they applied

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - *Like protocols describe the entity shapes the core reads, so services
      never couple to the ORM classes
"""

from datetime import datetime
from typing import Protocol, Sequence
from uuid import UUID

from foodloop.core.domain_types import (
    UserId, DonationId, RequestId, BadgeId,
    DonationStatus, DonationType, RequestStatus, RelatedEntityType,
)


class UserLike(Protocol):
    id: UUID
    name: str
    user_type: str


class DonationLike(Protocol):
    id: UUID
    donor_id: UUID
    food_name: str
    status: str
    expiry_date: datetime


class RequestLike(Protocol):
    id: UUID
    donation_id: UUID
    requester_id: UUID | None
    assigned_volunteer_id: UUID | None
    requester_type: str
    status: str


class UserPointsLike(Protocol):
    user_id: UUID
    total_points: int
    level: int


class BadgeLike(Protocol):
    id: UUID
    name: str
    points_required: int


class LedgerStore(Protocol):
    """Contract for ledger persistence, implemented by infrastructure/ledger_store.py."""

    # Users
    async def get_user(self, user_id: UserId) -> UserLike | None: ...

    # Donations
    async def get_donation(self, donation_id: DonationId) -> DonationLike | None: ...
    async def add_donation(self, donor_id: UserId, fields: dict) -> DonationLike: ...
    async def set_donation_status(
        self, donation_id: DonationId, status: DonationStatus,
    ) -> DonationLike: ...
    async def transition_donation_if(
        self, donation_id: DonationId,
        expected: DonationStatus, target: DonationStatus,
    ) -> bool: ...
    async def expire_pending_before(self, now: datetime) -> list[DonationId]: ...
    async def list_donations(
        self, *, donor_id: UserId | None = None,
        donation_type: DonationType | None = None,
        status: DonationStatus | None = None,
    ) -> Sequence[DonationLike]: ...

    # Requests
    async def get_request(
        self, request_id: RequestId, *, for_update: bool = False,
    ) -> RequestLike | None: ...
    async def add_request(self, fields: dict) -> RequestLike: ...
    async def save_request(self, request: RequestLike) -> RequestLike: ...
    async def list_requests(
        self, *, donation_id: DonationId | None = None,
        requester_id: UserId | None = None,
        volunteer_id: UserId | None = None,
        status: RequestStatus | None = None,
    ) -> Sequence[RequestLike]: ...

    # Points ledger
    async def ensure_user_points(self, user_id: UserId) -> None: ...
    async def increment_points(
        self, user_id: UserId, delta: int,
    ) -> int: ...
    async def set_level(self, user_id: UserId, level: int) -> UserPointsLike: ...
    async def get_user_points(self, user_id: UserId) -> UserPointsLike | None: ...
    async def append_history(
        self, user_id: UserId, points: int, reason: str,
        entity_type: RelatedEntityType, entity_id: UUID | None,
    ) -> None: ...
    async def list_history(self, user_id: UserId) -> Sequence: ...
    async def leaderboard(self) -> Sequence[UserPointsLike]: ...

    # Badges
    async def badges_up_to(self, total_points: int) -> Sequence[BadgeLike]: ...
    async def insert_badge_award_if_absent(
        self, user_id: UserId, badge_id: BadgeId,
    ) -> bool: ...
    async def list_badge_awards(self, user_id: UserId) -> Sequence: ...
    async def get_badge_by_name(self, name: str) -> BadgeLike | None: ...
    async def add_badge(self, fields: dict) -> BadgeLike: ...

    # Freshness ratings
    async def insert_rating_if_absent(self, fields: dict) -> bool: ...
    async def list_ratings(self, donation_id: DonationId) -> Sequence: ...

    # Distribution proofs
    async def add_distribution_proof(self, fields: dict): ...
    async def list_distribution_proofs(self, request_id: RequestId) -> Sequence: ...
