"""Configuration defaults."""

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./scrobbles.db"
