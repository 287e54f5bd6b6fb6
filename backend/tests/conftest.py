"""Root conftest: shared test configuration."""

import os

# Never start the background sweeper or seed badges from tests
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("EXPIRY_SWEEP_INTERVAL_SECONDS", "0")
os.environ.setdefault("SEED_BADGES_ON_STARTUP", "false")
os.environ.setdefault("LOG_FORMAT", "text")
