# chargingcloud/api/core/config.py
"""
Central configuration for the charging cloud API.

Environment variables (or a ``.env`` file) override the defaults below.
"""
from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"

    server_name: str = "Open Charging Cloud API"
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Seed files (glob patterns)
    networks_config_paths: list[str] = Field(
        default_factory=lambda: ["config/networks.yaml"]
    )

    isolate_hostnames: bool = Field(
        default=False,
        description="Partition roaming networks by the request Host header",
    )
    status_history_limit: int = Field(
        default=50,
        ge=1,
        description="Maximum number of retained status history entries per entity",
    )
    default_history_size: int = Field(
        default=1,
        ge=0,
        description="Status history entries returned when 'historysize' is omitted",
    )


settings = Settings()
