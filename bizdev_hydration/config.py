"""Hydration service configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetryConfig(BaseSettings):
    """Retry / backoff for transient database errors during lookups."""

    model_config = SettingsConfigDict(env_prefix="BIZDEV_HYDRATION_RETRY_")

    max_attempts: int = Field(default=3, description="Attempts per lookup")
    initial_wait_seconds: float = Field(
        default=0.05,
        description="Initial backoff wait in seconds",
    )
    max_wait_seconds: float = Field(
        default=1.0,
        description="Maximum backoff wait in seconds",
    )
    multiplier: float = Field(default=2.0, description="Exponential backoff multiplier")


class Settings(BaseSettings):
    """Top-level settings for the hydration service.

    All env vars are prefixed with ``BIZDEV_HYDRATION_``.
    Example: ``BIZDEV_HYDRATION_DATABASE_URL=postgresql+asyncpg://...``
    """

    model_config = SettingsConfigDict(env_prefix="BIZDEV_HYDRATION_")

    # --- Database -----------------------------------------------------------
    database_url: str = Field(
        description="Async SQLAlchemy URL for the CRM database (read-only use)",
    )
    db_pool_size: int = Field(default=5, description="Connection pool size")
    db_max_overflow: int = Field(
        default=10,
        description="Connections allowed beyond the pool size",
    )
    retry: RetryConfig = Field(default_factory=RetryConfig)

    # --- Server -------------------------------------------------------------
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool = Field(
        default=True,
        description="Use JSON log output (True for prod, False for dev)",
    )
