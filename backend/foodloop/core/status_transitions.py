"""Status Transitions: forward-only lifecycle tables and the optional strict check.

Invariants:
    - check_*_transition is PURE: returns None or raises ConflictError, no mutation
    - Permissive mode (strict=False) accepts every target status
    - Re-setting the current status is always allowed (no-op transition)
    - Terminal states have no outgoing transitions

Design Decisions:
    - Permissive by default: status updates double as an admin override channel;
      strict mode is opt-in via STRICT_STATUS_TRANSITIONS
    - Tables as frozensets keyed by enum: every legal edge visible in one place
"""

from foodloop.core.domain_types import DonationStatus, RequestStatus
from foodloop.core.errors import ConflictError


DONATION_TRANSITIONS: dict[DonationStatus, frozenset[DonationStatus]] = {
    DonationStatus.PENDING: frozenset({
        DonationStatus.ACCEPTED, DonationStatus.EXPIRED,
    }),
    DonationStatus.ACCEPTED: frozenset({DonationStatus.PICKED_UP}),
    DonationStatus.PICKED_UP: frozenset({
        DonationStatus.DELIVERED, DonationStatus.COMPOSTED,
    }),
    DonationStatus.DELIVERED: frozenset(),
    DonationStatus.COMPOSTED: frozenset(),
    DonationStatus.EXPIRED: frozenset(),
}

REQUEST_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING: frozenset({
        RequestStatus.ACCEPTED, RequestStatus.REJECTED,
    }),
    RequestStatus.ACCEPTED: frozenset({RequestStatus.PICKED_UP}),
    RequestStatus.REJECTED: frozenset(),
    RequestStatus.PICKED_UP: frozenset({
        RequestStatus.DELIVERED, RequestStatus.COMPOSTED,
    }),
    RequestStatus.DELIVERED: frozenset(),
    RequestStatus.COMPOSTED: frozenset(),
}

# Statuses from which a volunteer may still be assigned
VOLUNTEER_ASSIGNABLE = frozenset({RequestStatus.PENDING, RequestStatus.ACCEPTED})


def check_donation_transition(
    current: DonationStatus, target: DonationStatus, strict: bool,
) -> None:
    if not strict or current == target:
        return
    if target not in DONATION_TRANSITIONS[current]:
        raise ConflictError(
            f"Donation cannot move from {current.value} to {target.value}",
        )


def check_request_transition(
    current: RequestStatus, target: RequestStatus, strict: bool,
) -> None:
    if not strict or current == target:
        return
    if target not in REQUEST_TRANSITIONS[current]:
        raise ConflictError(
            f"Request cannot move from {current.value} to {target.value}",
        )
