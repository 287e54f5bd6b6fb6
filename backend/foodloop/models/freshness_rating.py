"""FreshnessRating ORM: a user's 1-5 freshness score for a donation.

Invariants:
    - UNIQUE (donation_id, rated_by): one rating per user per donation
    - rating in 1..5 (checked by the service before insert)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from foodloop.db.base import Base


class FreshnessRating(Base):
    """Freshness feedback left by a recipient."""
    __tablename__ = "freshness_ratings"
    __table_args__ = (
        UniqueConstraint("donation_id", "rated_by", name="uq_freshness_donation_user"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    donation_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("donations.id"), nullable=False, index=True,
    )
    rated_by: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
