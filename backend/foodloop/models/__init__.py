"""ORM Models: SQLAlchemy declarative models for every ledger entity.

Invariants:
    - All models inherit from Base (db/base.py)
    - Users, donations and requests are the lifecycle side; points, history,
      badges and awards are the ledger side

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or Alembic autogenerate runs
"""

from foodloop.models.user import User  # noqa: F401
from foodloop.models.donation import Donation  # noqa: F401
from foodloop.models.request import Request  # noqa: F401
from foodloop.models.user_points import UserPoints  # noqa: F401
from foodloop.models.points_history import PointsHistoryEntry  # noqa: F401
from foodloop.models.badge import Badge  # noqa: F401
from foodloop.models.badge_award import BadgeAward  # noqa: F401
from foodloop.models.freshness_rating import FreshnessRating  # noqa: F401
from foodloop.models.distribution_proof import DistributionProof  # noqa: F401
