"""Service test fixtures: async DB, ledger-bound services, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Service fixtures share ONE session (one open transaction), like one unit of work
    - get_db dependency overridden to use the test engine for route tests
    - No badges exist unless a test seeds them, so point totals stay predictable

Design Decisions:
    - SQLite in-memory: fast, no external dependency; ON CONFLICT and RETURNING
      behave like PostgreSQL for the statements the ledger issues
    - Route tests commit seeded rows first: the client runs its own transaction
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import foodloop.models  # noqa: F401
from foodloop.core.domain_types import DonationType, UserType
from foodloop.db.base import Base
from foodloop.infrastructure.database import get_db
from foodloop.infrastructure.ledger_store import SqlLedgerStore
from foodloop.main import app
from foodloop.schemas.donation import DonationDraft
from foodloop.services.badge_catalog import BadgeSpec, seed_badge_catalog
from foodloop.services.donation_lifecycle import DonationLifecycle
from foodloop.services.request_lifecycle import RequestLifecycle
from foodloop.services.scoring_engine import ScoringEngine


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def ledger(test_db):
    return SqlLedgerStore(test_db)


@pytest.fixture
def scoring(ledger):
    return ScoringEngine(ledger)


@pytest.fixture
def donations(ledger, scoring):
    return DonationLifecycle(ledger, scoring)


@pytest.fixture
def requests_(ledger, scoring):
    return RequestLifecycle(ledger, scoring)


@pytest.fixture
def make_user(ledger):
    """Factory: insert a user of the given category."""
    async def _make(user_type: UserType = UserType.HOTEL, name: str | None = None):
        return await ledger.add_user({
            "name": name or f"{user_type.value.title()} {uuid4().hex[:6]}",
            "email": f"{uuid4().hex}@example.org",
            "user_type": user_type.value,
        })
    return _make


@pytest.fixture
async def donor(make_user):
    return await make_user(UserType.HOTEL, "Green Bistro")


@pytest.fixture
async def volunteer(make_user):
    return await make_user(UserType.VOLUNTEER, "Asha")


@pytest.fixture
async def needy(make_user):
    return await make_user(UserType.NEEDY, "Ravi")


@pytest.fixture
async def compost_agency(make_user):
    return await make_user(UserType.COMPOST_AGENCY, "SoilWorks")


@pytest.fixture
def make_draft():
    """Factory: a valid DonationDraft expiring `expires_in` from now."""
    def _make(
        food_name: str = "Vegetable biryani",
        expires_in: timedelta = timedelta(hours=6),
        donation_type: DonationType = DonationType.HUMAN,
    ) -> DonationDraft:
        return DonationDraft(
            food_name=food_name,
            quantity=20,
            expiry_date=datetime.now(timezone.utc) + expires_in,
            donation_type=donation_type,
            address="12 Market Road",
        )
    return _make


@pytest.fixture
async def pending_donation(donations, donor, make_draft):
    return await donations.create_donation(donor.id, make_draft())


@pytest.fixture
def seed_badges(ledger):
    """Factory: seed badges from (name, points_required) pairs."""
    async def _seed(*pairs: tuple[str, int]):
        return await seed_badge_catalog(
            ledger,
            tuple(BadgeSpec(name, f"{name} badge", points) for name, points in pairs),
        )
    return _seed


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
