"""
Configuration management for the Teambition SDK.

Uses Pydantic Settings for type-safe environment variable loading.
Variables are prefixed with TEAMBITION_ and may also come from a .env file.
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    SDK settings loaded from environment variables.

    All settings can be configured via .env file or environment variables,
    e.g. TEAMBITION_API_HOST or TEAMBITION_TOKEN.
    """

    python_env: Literal["development", "production"] = Field(
        default="development",
        description="SDK environment"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )

    # API
    api_host: str = Field(
        default="https://www.teambition.com/api",
        description="Base URL of the REST API"
    )
    token: str = Field(
        default="",
        description="OAuth2 access token sent with every request"
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds"
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        description="Attempts for retryable requests"
    )

    model_config = SettingsConfigDict(
        env_prefix="TEAMBITION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("api_host")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.python_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.python_env == "production"

    @property
    def has_token(self) -> bool:
        """Check if an access token is configured."""
        return bool(self.token)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    This function is cached to ensure we only load settings once.

    Returns:
        Settings instance loaded from environment

    Example:
        >>> from teambition_sdk.config import get_settings
        >>> settings = get_settings()
        >>> print(settings.api_host)
    """
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the SDK's loggers."""
    settings = settings or get_settings()
    logging.getLogger("teambition_sdk").setLevel(settings.log_level)
