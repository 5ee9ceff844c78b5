"""Base configuration with pydantic-settings.

Services inherit ``BaseSettings`` and add the fields they require.

Usage in service:
    from shared.config import BaseSettings, database_url_field

    class Settings(BaseSettings):
        database_url: str = database_url_field(required=True)

    settings = Settings()
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

DEFAULT_GITHUB_HOSTS = ("github.com", "www.github.com")


class BaseSettings(PydanticBaseSettings):
    """Base application settings.

    All fields here are optional with sensible defaults.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging configuration
    service_name: str = Field(
        default="unknown",
        description="Service name for structured logging",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v


# === Field definitions for reuse in service configs ===


def database_url_field(required: bool = True):
    """Database URL field definition."""
    if required:
        return Field(
            ...,
            description="SQLAlchemy async connection URL",
            examples=[
                "postgresql+asyncpg://user:pass@db:5432/dbname",
                "sqlite+aiosqlite:///./claims.db",
            ],
        )
    return Field(
        default=None,
        description="SQLAlchemy async connection URL (optional)",
    )


def github_hosts_field():
    """Hosts accepted as GitHub when parsing repository URLs."""
    return Field(
        default=list(DEFAULT_GITHUB_HOSTS),
        description="Hostnames treated as GitHub for ownership checks",
        examples=[["github.com", "www.github.com"]],
    )
