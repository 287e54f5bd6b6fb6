"""Gamification Rules: the points schedule as an explicit, injectable value.

Invariants:
    - Frozen: a rules object never changes after construction
    - points_per_level > 0 (level formula divides by it)
    - All award amounts are non-negative

Design Decisions:
    - Passed into services instead of module constants: tests inject alternate schedules
    - Built from Settings in the shell (config.py); core never reads the environment
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GamificationRules:
    """Points formula and fixed award amounts."""
    points_per_level: int = 100
    donation_created_points: int = 10
    delivery_completed_points: int = 15
    compost_completed_points: int = 20
    badge_bonus_points: int = 50

    def __post_init__(self):
        if self.points_per_level <= 0:
            raise ValueError("points_per_level must be positive")
        for name in (
            "donation_created_points", "delivery_completed_points",
            "compost_completed_points", "badge_bonus_points",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")


DEFAULT_RULES = GamificationRules()
