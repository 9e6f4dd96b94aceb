"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Directory / store configuration (required, startup fails without them)
    database_url: str = Field(..., min_length=1)
    database_service_key: str = Field(..., min_length=1)
    pool_min_size: int = 1  # Minimum connections in pool
    pool_max_size: int = 10  # Maximum connections in pool
    directory_function: str = "check_user_exists_by_email"

    # Mail transport
    email_service_host: str | None = None  # None selects the console sender
    email_service_port: int = 587
    email_service_user: str | None = None
    email_service_pass: str | None = None
    email_from_address: str = "no-reply@localhost"

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    gpt_api_key: str | None = None  # Bearer token; None means insecure mode
    public_base_url: str = "http://localhost:8000"
    code_ttl_seconds: int = 600  # Verification code validity window
    log_level: str = "INFO"

    @field_validator(
        "email_service_host",
        "email_service_user",
        "email_service_pass",
        "gpt_api_key",
        mode="before",
    )
    @classmethod
    def _blank_as_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def smtp_implicit_tls(self) -> bool:
        """Port 465 speaks TLS from the first byte; other ports upgrade or stay plain."""
        return self.email_service_port == 465

    @property
    def insecure_mode(self) -> bool:
        return self.gpt_api_key is None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
