"""API service configuration.

Requires: DATABASE_URL
Optional: GITHUB_HOSTS, SERVICE_NAME, LOG_FORMAT, LOG_LEVEL
"""

from functools import lru_cache

from shared.config import BaseSettings, database_url_field, github_hosts_field


class Settings(BaseSettings):
    """API service settings."""

    # Required
    database_url: str = database_url_field(required=True)

    # Optional
    github_hosts: list[str] = github_hosts_field()

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Validates required env vars on first call.
    Raises ValidationError if DATABASE_URL is missing.
    """
    return Settings()
