"""Runtime settings for the TripGo MCP server.

Values come from environment variables (prefix ``TRIPGO_``) or a local
``.env`` file. Nothing is read at import time; call ``get_settings()``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

TRIPGO_API_BASE_URL = "https://api.tripgo.com/v1"


class Settings(BaseSettings):
    """TripGo toolkit settings."""

    model_config = SettingsConfigDict(
        env_prefix="TRIPGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: SecretStr = Field(default=SecretStr(""), description="TripGo API key (X-TripGo-Key header)")
    base_url: str = Field(default=TRIPGO_API_BASE_URL, description="TripGo API base URL")
    timeout_s: int = Field(default=30, ge=1, le=300, description="Upstream request timeout in seconds")

    # Region list cache (disabled unless a directory is configured)
    cache_dir: Optional[str] = Field(default=None, description="Directory for the regions file cache")
    regions_ttl_seconds: int = Field(default=24 * 3600, ge=0)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.get_secret_value())


@lru_cache
def get_settings() -> Settings:
    return Settings()
