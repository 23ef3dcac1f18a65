"""Runtime settings, read from ``STOCKRES_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOCKRES_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///data/stockres.db"
    debug: bool = False

    # Reservations
    cart_reservation_timeout: int = Field(
        default=1440,  # 24 hours
        ge=1,
        le=10080,  # 7 days
        description="Minutes a cart reservation is held before the sweep releases it",
    )

    # ERP stock sync
    stock_sync_batch_size: int = Field(default=500, ge=1)

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
