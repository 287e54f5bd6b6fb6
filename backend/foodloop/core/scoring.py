"""Scoring Rules: pure level formula and award descriptors.

Invariants:
    - compute_level is PURE: level = floor(total / points_per_level) + 1
    - PendingAward is immutable; the scoring engine consumes them from a FIFO queue
    - Reason strings are built here only, so history entries stay uniform

Design Decisions:
    - Award descriptors over direct recursion: badge bonuses are queued as data,
      which makes the evaluation depth explicit (bounded by catalog size)
"""

from dataclasses import dataclass
from uuid import UUID

from foodloop.core.domain_types import RelatedEntityType, UserId


def compute_level(total_points: int, points_per_level: int) -> int:
    """Level derived from cumulative points. Floor division, so 250 pts @100 -> 3."""
    return total_points // points_per_level + 1


@dataclass(frozen=True)
class PendingAward:
    """A point award waiting to be applied to the ledger."""
    user_id: UserId
    points: int
    reason: str
    entity_type: RelatedEntityType
    entity_id: UUID | None


def donation_reason(food_name: str) -> str:
    return f"Created food donation: {food_name}"


def delivery_reason(food_name: str) -> str:
    return f"Completed delivery for: {food_name}"


def compost_reason(food_name: str) -> str:
    return f"Composted: {food_name}"


def badge_reason(badge_name: str) -> str:
    return f"Earned badge: {badge_name}"
