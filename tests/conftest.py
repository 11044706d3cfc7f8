"""Shared test configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from scrobble_insights.db import Base
from scrobble_insights.events import PlayEvent

PlayFactory = Callable[..., PlayEvent]


def _play(
    artist: str,
    track: str,
    timestamp: datetime,
    album: str | None = None,
    source: str = "lastfm",
) -> PlayEvent:
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return PlayEvent(artist=artist, album=album, track=track, timestamp=timestamp, source=source)


@pytest.fixture
def make_play() -> PlayFactory:
    """Build a PlayEvent; naive timestamps are UTC."""
    return _play


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    engine = create_async_engine("sqlite+aiosqlite://", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def async_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    factory = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
