"""Distribution Proof Schemas: evidence submission and read model."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class DistributionProofCreate(BaseModel):
    request_id: UUID
    photo_url: str = Field(max_length=500)
    description: str | None = Field(None, max_length=5_000)
    distributed_to_count: int | None = None


class DistributionProofResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    request_id: UUID
    photo_url: str
    description: str | None
    distributed_to_count: int | None
    created_at: datetime
