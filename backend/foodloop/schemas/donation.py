"""Donation Schemas: Pydantic models with field-level validation for donation intake.

Invariants:
    - DonationDraft.food_name: 1-200 chars, stripped, non-empty
    - quantity >= 1
    - expiry_date normalized to UTC (naive values are taken as UTC)
    - latitude/longitude, when present, are valid coordinates

Design Decisions:
    - DonationDraft doubles as the in-process input of create_donation, so the
      transport and the core validate with the same rules
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from foodloop.core.clock import as_utc
from foodloop.core.domain_types import DonationType, DonationStatus


class DonationDraft(BaseModel):
    """Donation creation payload."""
    food_name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5_000)
    quantity: int = Field(ge=1)
    expiry_date: datetime
    donation_type: DonationType
    photo_url: str | None = Field(None, max_length=500)
    address: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)

    @field_validator("food_name")
    @classmethod
    def strip_food_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("food_name cannot be empty or whitespace")
        return v

    @field_validator("expiry_date")
    @classmethod
    def normalize_expiry(cls, v: datetime) -> datetime:
        return as_utc(v)

    def to_fields(self) -> dict:
        """Column values for the ledger store."""
        fields = self.model_dump()
        fields["donation_type"] = self.donation_type.value
        return fields


class DonationCreate(DonationDraft):
    """HTTP body for POST /donations."""
    donor_id: UUID


class DonationStatusUpdate(BaseModel):
    status: DonationStatus


class DonationResponse(BaseModel):
    """Donation response: public-facing donation data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    donor_id: UUID
    food_name: str
    description: str | None
    quantity: int
    expiry_date: datetime
    donation_type: DonationType
    status: DonationStatus
    photo_url: str | None
    address: str | None
    latitude: float | None
    longitude: float | None
    created_at: datetime
    updated_at: datetime


class SweepResponse(BaseModel):
    expired_count: int
    expired_ids: list[UUID]
