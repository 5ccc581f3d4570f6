"""Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All settings read from NETBRIDGE_* environment variables or a .env file
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env support
    - Defaults reproduce the plain registry behavior (weak handles, rooms kept on detach)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from netbridge.core.domain_types import LogFormat


class Settings(BaseSettings):
    """netbridge settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NETBRIDGE_", env_file=".env", case_sensitive=False,
    )

    # Registry
    weak_handles: bool = True
    purge_rooms_on_detach: bool = False

    # Inspection API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = LogFormat.JSON.value

    @field_validator("log_format", mode="before")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = str(v).strip().lower()
        if v not in {f.value for f in LogFormat}:
            raise ValueError(f"log_format must be one of: {', '.join(f.value for f in LogFormat)}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return str(v).strip().upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
