"""Clock Helpers: every datetime that reaches the ledger is UTC.

Invariants:
    - as_utc is PURE: naive values are taken as UTC, aware values are converted
    - Stored expiry dates and sweep cutoffs pass through the same function, so
      backends that compare wall-clock text (SQLite) see consistent values
"""

from datetime import datetime, timezone


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
