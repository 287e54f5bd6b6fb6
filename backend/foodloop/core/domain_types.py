"""Domain Types: identity types and the enums that encode every valid state.

Invariants:
    - UserId, DonationId, RequestId, BadgeId wrap UUIDs; never pass bare UUIDs in domain logic
    - All valid states encoded as Enums; no raw string matching
    - Enum values are the stored column values (upper-case, matching the public API)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
DonationId = NewType("DonationId", UUID)
RequestId = NewType("RequestId", UUID)
BadgeId = NewType("BadgeId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class UserType(str, Enum):
    """User directory categories. HOTEL is the donor category."""
    ADMIN = "ADMIN"
    HOTEL = "HOTEL"
    NGO = "NGO"
    VOLUNTEER = "VOLUNTEER"
    NEEDY = "NEEDY"
    COMPOST_AGENCY = "COMPOST_AGENCY"


class DonationType(str, Enum):
    """Who the food is fit for."""
    HUMAN = "HUMAN"
    DOG = "DOG"
    COMPOST = "COMPOST"


class DonationStatus(str, Enum):
    """Donation lifecycle states. EXPIRED only ever reached from PENDING."""
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    PICKED_UP = "PICKED_UP"
    DELIVERED = "DELIVERED"
    COMPOSTED = "COMPOSTED"
    EXPIRED = "EXPIRED"


class RequesterType(str, Enum):
    """Category of the party claiming a donation."""
    NGO = "NGO"
    VOLUNTEER = "VOLUNTEER"
    NEEDY = "NEEDY"
    COMPOST_AGENCY = "COMPOST_AGENCY"


class RequestStatus(str, Enum):
    """Request lifecycle states."""
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    PICKED_UP = "PICKED_UP"
    DELIVERED = "DELIVERED"
    COMPOSTED = "COMPOSTED"


class RelatedEntityType(str, Enum):
    """What a points-history entry was earned for."""
    DONATION = "DONATION"
    DELIVERY = "DELIVERY"
    COMPOST = "COMPOST"
    BADGE = "BADGE"
