"""Typed settings configuration - single source of truth."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str | None = None

    # Time-of-day handling: permissive passes unknown formats through,
    # strict raises (composer) or degrades to the placeholder (display)
    time_policy: Literal["permissive", "strict"] = "permissive"

    # Basis used to read persisted epoch-millisecond day anchors. The
    # migrations always write UTC-midnight anchors, so "local" only suits
    # databases whose anchors were written at local midnight.
    calendar_basis: Literal["utc", "local"] = "utc"

    # Day color selection for events before the trip start
    day_color_modulo: Literal["floor", "truncate"] = "floor"

    # Logging
    log_level: str = "INFO"

    @property
    def strict_times(self) -> bool:
        """True when malformed or unrecognized times must fail loudly."""
        return self.time_policy == "strict"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
