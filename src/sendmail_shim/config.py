"""Configuration management for sendmail-shim.

This module handles application configuration using Pydantic settings.
Configuration can be loaded from environment variables or .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with
    the SENDMAIL_SHIM_ prefix (e.g., SENDMAIL_SHIM_SMTP_SERVER).
    """

    model_config = SettingsConfigDict(
        env_prefix="SENDMAIL_SHIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # SMTP Configuration
    smtp_server: str = Field(
        default="localhost:25",
        description="SMTP submission server as host:port (the port is mandatory)",
    )
    smtp_user: str = Field(
        default="",
        description="Username for SMTP AUTH. Empty disables authentication",
    )
    smtp_password: SecretStr = Field(
        default=SecretStr(""),
        description="Password for SMTP AUTH",
    )
    smtp_starttls: bool = Field(
        default=True,
        description="Upgrade the connection with STARTTLS when the server offers it",
    )
    smtp_timeout: float = Field(
        default=30.0,
        description="Timeout for SMTP socket operations in seconds",
    )

    # Send log configuration
    log_file: Path | None = Field(
        default=Path("sendmail_shim.log"),
        description="JSON-lines file receiving one record per submitted message",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    debug: bool = Field(
        default=False,
        description="Force DEBUG logging regardless of log_level",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
