"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file

Settings are read once at import time. The allow-list and bot patterns
derived from them are process-wide and never change afterwards.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (the function runtime injects env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ first
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=False)


def parse_csv(value: str | None) -> list[str]:
    """Split a comma-separated setting into trimmed, non-empty items.

    Order is preserved and duplicates are dropped.

    Examples:
        >>> parse_csv("https://a.com, https://b.com")
        ['https://a.com', 'https://b.com']
        >>> parse_csv(None)
        []
    """
    if not value:
        return []

    items: list[str] = []
    for raw in value.split(","):
        item = raw.strip()
        if item and item not in items:
            items.append(item)
    return items


def _build_app_settings() -> "AppSettings":
    """Build app settings from environment.

    BaseSettings fields are populated from the environment, so the missing
    constructor arguments are expected.
    """

    return AppSettings()  # type: ignore[call-arg]


def _build_storage_settings() -> "StorageSettings":
    return StorageSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


class AppSettings(BaseSettings):
    """Request validation and routing configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    allowed_origins: str | None = Field(
        None,
        validation_alias=AliasChoices("APP_ALLOWED_ORIGINS", "ALLOWED_ORIGINS"),
        description="Comma-separated list of origins allowed to record visits (exact match)",
    )
    extra_bot_patterns: str | None = Field(
        None,
        description="Comma-separated regular expressions appended to the built-in bot patterns",
    )
    min_user_agent_length: int = Field(
        10,
        ge=0,
        description="User agents shorter than this are rejected",
    )
    health_path: str = Field(
        "/health",
        description="Path answered by the health check",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
        populate_by_name=True,
    )

    @property
    def allowed_origin_list(self) -> list[str]:
        return parse_csv(self.allowed_origins)

    @property
    def extra_bot_pattern_list(self) -> list[str]:
        return parse_csv(self.extra_bot_patterns)


class StorageSettings(BaseSettings):
    """Backing object store configuration.

    The default backend is S3; ``memory`` and ``filesystem`` exist for local
    runs and tests.
    """

    backend: str = Field(
        "s3",
        description="Blob store backend: s3, filesystem or memory",
    )
    bucket: str | None = Field(
        None,
        validation_alias=AliasChoices("STORAGE_BUCKET", "VISITS_BUCKET"),
        description="S3 bucket holding visit records",
    )
    region: str = Field(
        "us-east-1",
        validation_alias=AliasChoices("STORAGE_REGION", "AWS_REGION"),
        description="AWS region of the bucket",
    )
    endpoint_url: str | None = Field(
        None,
        description="Custom S3 endpoint (e.g. MinIO or LocalStack)",
    )
    key_prefix: str = Field(
        "visits",
        description="Key prefix under which visit records are stored",
    )
    encode_origin: bool = Field(
        False,
        description="Percent-encode the origin before using it as a key segment",
    )
    base_dir: str = Field(
        "data",
        description="Root directory for the filesystem backend",
    )

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        case_sensitive=False,
        populate_by_name=True,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log destination: stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(0, ge=0, description="Rotate log file at this size (0 disables rotation)")
    backup_count: int = Field(5, ge=0, description="Rotated log files to keep")
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to propagate the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if a setting is malformed.
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=_build_app_settings)
    storage: StorageSettings = Field(default_factory=_build_storage_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
