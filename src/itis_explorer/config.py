"""
Application settings.

Read from ``ITIS_*`` environment variables (or a ``.env`` file) by the CLI and
server.  The query layer itself never reads settings; the values are passed
into ``SearchGateway`` explicitly.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from itis_explorer.datasources.itis.client import API_BASE
from itis_explorer.services.http import DEFAULT_TIMEOUT


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ITIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "itis-explorer"
    app_env: str = Field(default="development", description="development, staging, production")
    debug: bool = False
    log_level: str = Field(default="INFO", description="Root log level (DEBUG forced by debug)")

    base_url: str = Field(default=API_BASE, description="ITIS SOLR endpoint")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout, seconds")

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance; call ``get_settings.cache_clear()`` in tests."""
    return Settings()
