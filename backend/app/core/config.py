"""
Application configuration.
All values loaded from environment variables (or a local .env file).
"""
from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    # Activity snapshot used to seed the in-memory store
    ACTIVITY_SNAPSHOT_PATH: Optional[str] = None

    # Recurring weekly timed event (e.g. a Saturday community 5k)
    EVENT_SOURCE_ENABLED: bool = True
    EVENT_WEEKDAY: int = 5  # Monday=0 ... Sunday=6
    EVENT_DISTANCE_KM: float = 5.0

    # Analytics defaults
    DEFAULT_CONSISTENCY_DAYS: int = 30
    DEFAULT_WEEKLY_DISTANCE_WEEKS: int = 12

    class Config:
        env_file = ".env"
        case_sensitive = True
        frozen = True


@lru_cache
def get_settings() -> Settings:
    """Return the process settings, built once on first use."""
    return Settings()
