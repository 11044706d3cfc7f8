"""Shared configuration."""

from scrobble_insights.config.constants import DEFAULT_DATABASE_URL
from scrobble_insights.config.database import DatabaseSettings

__all__ = [
    "DEFAULT_DATABASE_URL",
    "DatabaseSettings",
]
