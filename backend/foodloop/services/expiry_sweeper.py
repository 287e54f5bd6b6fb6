"""Expiry Sweeper: recurring background task that expires overdue PENDING donations.

Invariants:
    - Each tick is its own unit of work (one transaction per sweep)
    - A failed tick is logged and the loop keeps running; the next tick retries
    - stop() cancels the task and waits for it to finish

Design Decisions:
    - Plain asyncio task started from the FastAPI lifespan: single-process
      deployment, the sweep itself is idempotent so an overlapping run in a
      second worker is harmless
    - Session provider injected: tests drive run_once() against their own engine
"""

import asyncio
import logging
from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from foodloop.core.domain_types import DonationId
from foodloop.core.errors import FoodLoopError
from foodloop.infrastructure.ledger_store import SqlLedgerStore
from foodloop.services.donation_lifecycle import DonationLifecycle
from foodloop.services.scoring_engine import ScoringEngine

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """Runs DonationLifecycle.sweep_expired every `interval_seconds`."""

    def __init__(
        self,
        unit_of_work: Callable[[], AbstractAsyncContextManager[AsyncSession]],
        interval_seconds: float,
    ):
        self._unit_of_work = unit_of_work
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None

    async def run_once(self, now: datetime | None = None) -> list[DonationId]:
        async with self._unit_of_work() as session:
            ledger = SqlLedgerStore(session)
            lifecycle = DonationLifecycle(ledger, ScoringEngine(ledger))
            return await lifecycle.sweep_expired(now)

    async def _loop(self) -> None:
        while True:
            try:
                await self.run_once()
            except FoodLoopError as e:
                logger.error(
                    f"Expiry sweep failed: {e.message}",
                    extra={"error_code": e.code},
                )
            except Exception:
                # Driver-level failures (refused connection, DNS) arrive unmapped
                logger.exception("Expiry sweep failed unexpectedly")
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._loop(), name="expiry-sweeper")
            logger.info(f"Expiry sweeper started (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Expiry sweeper stopped")
