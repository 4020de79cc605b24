"""Application configuration loaded via Pydantic settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    SKILL_LOG_LEVEL: str = Field(default="info")
    SKILL_LOG_DIR: Path | None = Field(default=None)
    DATA_DIR: Path = Field(default=Path("/data"))

    # When set, requests addressed to any other skill are rejected
    ALEXA_SKILL_ID: str | None = Field(default=None)

    # Request verification
    REQUEST_TIMESTAMP_TOLERANCE_SECONDS: int = Field(default=150)
    CERT_FETCH_TIMEOUT_SECONDS: float = Field(default=3.0)
    CERT_CACHE_TTL_SECONDS: int = Field(default=3600)
    CERT_CACHE_MAX_ENTRIES: int = Field(default=32)
    TRUSTED_ROOTS_PATH: Path | None = Field(default=None)

    SATELLITE_IMAGE_BASE_URL: str = Field(default="https://api.sat24.com/mostrecent")

    HEALTHCHECK_API_TOKEN: str | None = Field(default=None)
    ENABLE_HEALTHCHECK_AUTH: bool = Field(default=False)


settings = Settings()
config = settings


__all__ = ["Settings", "settings", "config"]
