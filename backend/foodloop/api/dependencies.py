"""API Dependencies: one unit of work per HTTP request, services wired on top of it.

Invariants:
    - get_ledger opens a transaction on the request's session; it commits when the
      route returns and rolls back if the route raises
    - Every service in one request shares the same ledger (same transaction) and
      the same ScoringEngine (same rules)

Design Decisions:
    - Built on get_db so tests override a single dependency, exactly like route tests
      elsewhere in the app
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foodloop.config import get_settings
from foodloop.infrastructure.database import get_db
from foodloop.infrastructure.ledger_store import SqlLedgerStore
from foodloop.services.distribution_proofs import DistributionProofs
from foodloop.services.donation_lifecycle import DonationLifecycle
from foodloop.services.freshness_ratings import FreshnessRatings
from foodloop.services.request_lifecycle import RequestLifecycle
from foodloop.services.scoring_engine import ScoringEngine


async def get_ledger(
    db: AsyncSession = Depends(get_db),
) -> AsyncGenerator[SqlLedgerStore, None]:
    async with db.begin():
        yield SqlLedgerStore(db)


def get_scoring_engine(
    ledger: SqlLedgerStore = Depends(get_ledger),
) -> ScoringEngine:
    return ScoringEngine(ledger, get_settings().gamification_rules())


def get_donation_lifecycle(
    ledger: SqlLedgerStore = Depends(get_ledger),
    scoring: ScoringEngine = Depends(get_scoring_engine),
) -> DonationLifecycle:
    return DonationLifecycle(
        ledger, scoring, strict=get_settings().strict_status_transitions,
    )


def get_request_lifecycle(
    ledger: SqlLedgerStore = Depends(get_ledger),
    scoring: ScoringEngine = Depends(get_scoring_engine),
) -> RequestLifecycle:
    return RequestLifecycle(
        ledger, scoring, strict=get_settings().strict_status_transitions,
    )


def get_freshness_ratings(
    ledger: SqlLedgerStore = Depends(get_ledger),
) -> FreshnessRatings:
    return FreshnessRatings(ledger)


def get_distribution_proofs(
    ledger: SqlLedgerStore = Depends(get_ledger),
) -> DistributionProofs:
    return DistributionProofs(ledger)
