"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - gamification_rules() is the only bridge from env vars to the core rules object

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from foodloop.core.gamification_rules import GamificationRules


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://foodloop:foodloop@db:5432/foodloop"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Lifecycle
    strict_status_transitions: bool = False
    expiry_sweep_interval_seconds: int = Field(300, ge=0)  # 0 disables the sweeper
    seed_badges_on_startup: bool = True

    # Gamification
    points_per_level: int = Field(100, gt=0)
    donation_created_points: int = Field(10, ge=0)
    delivery_completed_points: int = Field(15, ge=0)
    compost_completed_points: int = Field(20, ge=0)
    badge_bonus_points: int = Field(50, ge=0)

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def gamification_rules(self) -> GamificationRules:
        return GamificationRules(
            points_per_level=self.points_per_level,
            donation_created_points=self.donation_created_points,
            delivery_completed_points=self.delivery_completed_points,
            compost_completed_points=self.compost_completed_points,
            badge_bonus_points=self.badge_bonus_points,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
