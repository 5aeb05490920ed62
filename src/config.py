"""Application configuration using pydantic-settings."""

import random
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ==========================================================================
    # Evaluation
    # ==========================================================================
    # Largest number of outcomes any intermediate distribution may have.
    # None = unbounded. Nested combine operators (e.g. d20xd20xd20) grow fast.
    max_domain_size: int | None = Field(default=None, ge=1)

    # ==========================================================================
    # Sampling
    # ==========================================================================
    random_seed: int | None = None  # Fixed seed for reproducible CLI rolls
    default_roll_count: int = Field(default=1, ge=0)

    # ==========================================================================
    # Display
    # ==========================================================================
    display_precision: int = Field(default=6, ge=0)  # Float digits in tables
    histogram_width: int = Field(default=40, ge=1)  # Widest histogram bar

    # Debug
    debug: bool = False

    def random_source(self) -> random.Random:
        """Random source honoring ``random_seed``."""
        return random.Random(self.random_seed)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
