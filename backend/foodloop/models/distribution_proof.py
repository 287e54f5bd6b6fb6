"""DistributionProof ORM: evidence that a request's food reached people.

Invariants:
    - Belongs to exactly one request; a request may carry several proofs
    - photo_url is a stored reference (upload handling lives outside this service)
    - distributed_to_count, when present, is non-negative (checked by the service)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from foodloop.db.base import Base


class DistributionProof(Base):
    """Photo and headcount attached to a completed hand-out."""
    __tablename__ = "distribution_proofs"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    request_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("requests.id"), nullable=False, index=True,
    )
    photo_url: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    distributed_to_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
