"""Database configuration settings."""

from pydantic_settings import BaseSettings

from scrobble_insights.config.constants import DEFAULT_DATABASE_URL


class DatabaseSettings(BaseSettings):
    """Event store connection settings loaded from environment variables.

    Field names are matched case-insensitively, so ``DATABASE_URL`` in the
    environment feeds ``database_url``.
    """

    database_url: str = DEFAULT_DATABASE_URL
    echo: bool = False
    use_null_pool: bool = True
    pool_pre_ping: bool = True

    model_config = {"env_prefix": ""}
