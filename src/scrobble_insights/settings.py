"""Application settings loaded from environment variables."""

import functools

from pydantic_settings import BaseSettings

from scrobble_insights.constants import DEFAULT_TIMEZONE


class AppSettings(BaseSettings):
    """Scrobble insights service configuration.

    The database URL lives in ``DatabaseSettings``, which reads the same
    ``DATABASE_URL`` environment variable.
    """

    # Logging
    LOG_LEVEL: str = "INFO"

    # Reports
    DEFAULT_TIMEZONE: str = DEFAULT_TIMEZONE

    # CORS
    CORS_ALLOWED_ORIGINS: str = "http://localhost:3000"  # comma-separated origins

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    model_config = {"env_prefix": ""}


@functools.lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return cached application settings singleton."""
    return AppSettings()
