"""Request Schemas: request creation, volunteer assignment and status updates.

Invariants:
    - requester_id optional: absent for SMS / missed-call intake
    - requester_type always required
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from foodloop.core.domain_types import RequesterType, RequestStatus


class RequestCreate(BaseModel):
    donation_id: UUID
    requester_id: UUID | None = None
    requester_type: RequesterType
    pickup_address: str | None = Field(None, max_length=2_000)
    delivery_address: str | None = Field(None, max_length=2_000)


class VolunteerAssignment(BaseModel):
    volunteer_id: UUID


class RequestStatusUpdate(BaseModel):
    status: RequestStatus


class RequestResponse(BaseModel):
    """Request response: public-facing request data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    donation_id: UUID
    requester_id: UUID | None
    requester_type: RequesterType
    status: RequestStatus
    assigned_volunteer_id: UUID | None
    pickup_address: str | None
    delivery_address: str | None
    created_at: datetime
    updated_at: datetime
