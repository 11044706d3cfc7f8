"""Tests for AppSettings and DatabaseSettings."""

import pytest

from scrobble_insights.config import DEFAULT_DATABASE_URL, DatabaseSettings
from scrobble_insights.settings import AppSettings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings have sensible defaults."""
    for name in ("DATABASE_URL", "LOG_LEVEL", "DEFAULT_TIMEZONE", "PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = AppSettings()
    assert settings.LOG_LEVEL == "INFO"
    assert settings.DEFAULT_TIMEZONE == "UTC"
    assert settings.PORT == 8000


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings can be overridden via environment variables."""
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("DEFAULT_TIMEZONE", "Asia/Tokyo")
    monkeypatch.setenv("PORT", "9001")

    settings = AppSettings()
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.DEFAULT_TIMEZONE == "Asia/Tokyo"
    assert settings.PORT == 9001


def test_database_url_is_not_an_app_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    assert "DATABASE_URL" not in AppSettings.model_fields
    assert DatabaseSettings().database_url == DEFAULT_DATABASE_URL


def test_database_settings_read_database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db/scrobbles")
    assert DatabaseSettings().database_url == "postgresql+asyncpg://u:p@db/scrobbles"
