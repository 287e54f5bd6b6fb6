"""Donation ORM: an offer of surplus food awaiting pickup.

Invariants:
    - Always belongs to a donor (donor_id FK)
    - quantity > 0 (checked at the schema boundary)
    - status transitions: PENDING -> ACCEPTED -> PICKED_UP -> DELIVERED | COMPOSTED,
      or PENDING -> EXPIRED via the sweep
    - updated_at refreshed on every status write

Design Decisions:
    - Index on (status, expiry_date): the expiry sweep filters on both
    - Location stored flat (address, latitude, longitude): no geo queries in the core
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from foodloop.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Donation(Base):
    """Donation entity, the parent of zero or more requests."""
    __tablename__ = "donations"
    __table_args__ = (
        Index("ix_donations_status_expiry", "status", "expiry_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    donor_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True,
    )
    food_name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    expiry_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    donation_type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="PENDING",
    )
    photo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
