"""Core — runtime settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StepSettings(BaseSettings):
    """Defaults applied when a step is evaluated, overridable via ``UISTEP_*``."""

    default_timeout: float = Field(
        default=5.0,
        gt=0.0,
        description="Seconds a wait polls before failing when no timeout is given",
    )
    poll_interval: float = Field(
        default=0.1,
        gt=0.0,
        description="Seconds between polls of a driver condition",
    )
    log_level: str = Field(
        default="WARNING",
        description="Level used by configure_logging() when none is passed",
    )

    model_config = SettingsConfigDict(
        env_prefix="UISTEP_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> StepSettings:
    return StepSettings()


def reset_settings() -> None:
    """Drop the cached settings so the next read picks up the environment again."""
    get_settings.cache_clear()
