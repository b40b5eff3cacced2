"""Application configuration via pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from rift_sim.models.options import SeriesFormat
from rift_sim.utils.game_rules import HARD_MINUTE_CAP


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Knowledge directory (champions/players/mastery/synergies JSON).
    # Empty means the repo's knowledge/ folder.
    knowledge_dir: str = ""

    # Simulation
    max_game_minutes: int = Field(default=HARD_MINUTE_CAP, ge=20, le=HARD_MINUTE_CAP)
    mvp_role_bonus_variant: Literal["uniform", "split"] = "uniform"
    default_series_format: SeriesFormat = SeriesFormat.BO3

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
