"""Freshness Schemas: rating submission and per-donation summary.

Invariants:
    - rating range (1-5) is checked by the service, so in-process callers get
      the same ValidationError as HTTP callers
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class FreshnessRatingCreate(BaseModel):
    donation_id: UUID
    user_id: UUID
    rating: int
    comment: str | None = Field(None, max_length=500)


class FreshnessRatingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    donation_id: UUID
    rated_by: UUID
    rating: int
    comment: str | None
    created_at: datetime


class FreshnessSummary(BaseModel):
    ratings: list[FreshnessRatingResponse]
    average_rating: float
    total_ratings: int
