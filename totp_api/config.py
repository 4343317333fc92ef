"""Process settings for the TOTP API server.

Values come from ``TOTP_API_*`` environment variables or a ``.env`` file.
The TOTP period and code length are fixed in ``engine`` and are not settings.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "get_settings"]


class Settings(BaseSettings):
    """Settings for the TOTP API server."""

    host: str = "0.0.0.0"
    port: int = Field(default=7842, ge=1, le=65535)
    log_level: str = "INFO"
    cors_allow_origin: str = "*"
    keep_alive_timeout: int = Field(default=120, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="TOTP_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings loaded from the environment."""
    return Settings()
