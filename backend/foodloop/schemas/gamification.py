"""Gamification Schemas: read-only projections of the points ledger."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from foodloop.core.domain_types import RelatedEntityType


class UserPointsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    total_points: int
    level: int


class PointsHistoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    points: int
    reason: str
    related_entity_type: RelatedEntityType
    related_entity_id: UUID | None
    created_at: datetime


class BadgeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    icon_url: str | None
    points_required: int


class BadgeAwardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    badge: BadgeResponse
    earned_at: datetime
