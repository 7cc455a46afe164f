"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from LNDCONNECT_* environment variables
  - Fall back to a .env file in the working directory
  - Validate types and constraints at startup
  - Keep the connect string (which embeds a bearer macaroon) out of logs

Only AppSettings is a BaseSettings instance. Sub-settings are plain BaseModel
classes populated via env_nested_delimiter="__", so LNDCONNECT_TLS__CHECK_HOSTNAME
maps to tls.check_hostname.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TlsSettings(BaseModel):
    """TLS context construction for the pinned node certificate."""

    check_hostname: bool = Field(
        default=True,
        description="Require the node certificate to match the connect-string host",
    )


class AppSettings(BaseSettings):
    """
    Root application settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="LNDCONNECT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    connect_string: SecretStr | None = Field(
        default=None,
        description="Connect string used when none is given on the command line",
    )
    tls: TlsSettings = Field(default_factory=lambda: TlsSettings())
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Reject names the logging module does not know."""
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level
