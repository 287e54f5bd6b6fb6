"""Badge Catalog: default achievement thresholds and idempotent seeding.

Invariants:
    - Seeding inserts only names not already present; existing rows are never changed
    - Thresholds line up with the award schedule: the first donation (10 pts)
      and the first delivery (15 pts) each unlock a badge on their own
"""

import logging
from dataclasses import dataclass

from foodloop.core.repository_protocols import LedgerStore, BadgeLike

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BadgeSpec:
    name: str
    description: str
    points_required: int


DEFAULT_BADGES: tuple[BadgeSpec, ...] = (
    BadgeSpec("First Donation", "Made your first food donation", 10),
    BadgeSpec("First Delivery", "Completed your first delivery", 15),
    BadgeSpec("Hero Donor", "Donated 10 times", 100),
    BadgeSpec("Compost Champion", "Helped compost 10 items", 150),
    BadgeSpec("Delivery Master", "Completed 20 deliveries", 300),
    BadgeSpec("Super Hero", "Donated 50 times", 500),
    BadgeSpec("Community Leader", "Earned 1000 points", 1000),
)


async def seed_badge_catalog(
    ledger: LedgerStore, catalog: tuple[BadgeSpec, ...] = DEFAULT_BADGES,
) -> list[BadgeLike]:
    """Insert missing catalog badges. Returns the badges created by this call."""
    created = []
    for spec in catalog:
        if await ledger.get_badge_by_name(spec.name) is not None:
            continue
        created.append(await ledger.add_badge({
            "name": spec.name,
            "description": spec.description,
            "points_required": spec.points_required,
        }))
    if created:
        logger.info("Badge catalog seeded", extra={"count": len(created)})
    return created
