"""Tests for ScrobbleQueries and timestamp conversion."""

import logging
import warnings
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.exc import SAWarning
from sqlalchemy.ext.asyncio import AsyncSession

from scrobble_insights.db import ScrobbleQueries, ScrobbleRepository
from scrobble_insights.db.queries import from_epoch, to_epoch
from scrobble_insights.events import PlayEvent

PlayFactory = Callable[..., PlayEvent]

JAN = datetime(2023, 1, 10, 8, 0, tzinfo=UTC)
JUN = datetime(2023, 6, 10, 8, 0, tzinfo=UTC)
MAR = datetime(2024, 3, 10, 8, 0, tzinfo=UTC)


@pytest.fixture
async def seeded_session(async_session: AsyncSession, make_play: PlayFactory) -> AsyncSession:
    await ScrobbleRepository().add_events(
        [
            make_play("C", "t3", MAR),
            make_play("A", "t1", JAN, album="X"),
            make_play("B", "t2", JUN),
        ],
        async_session,
    )
    return async_session


async def test_get_events_full_history_ascending(seeded_session: AsyncSession) -> None:
    events = await ScrobbleQueries.get_events(seeded_session)
    assert [e.artist for e in events] == ["A", "B", "C"]
    assert events[0].timestamp == JAN
    assert events[0].album == "X"


async def test_get_events_bounds_are_inclusive(seeded_session: AsyncSession) -> None:
    events = await ScrobbleQueries.get_events(seeded_session, JAN, JUN)
    assert [e.artist for e in events] == ["A", "B"]

    events = await ScrobbleQueries.get_events(seeded_session, start=JUN)
    assert [e.artist for e in events] == ["B", "C"]


async def test_get_events_before_is_exclusive(seeded_session: AsyncSession) -> None:
    events = await ScrobbleQueries.get_events_before(seeded_session, JUN)
    assert [e.artist for e in events] == ["A"]


async def test_recent_paginates_newest_first(seeded_session: AsyncSession) -> None:
    events, total = await ScrobbleQueries.recent(seeded_session, limit=2, offset=0)
    assert total == 3
    assert [e.artist for e in events] == ["C", "B"]

    events, _ = await ScrobbleQueries.recent(seeded_session, limit=2, offset=2)
    assert [e.artist for e in events] == ["A"]


async def test_available_years(seeded_session: AsyncSession) -> None:
    assert await ScrobbleQueries.available_years(seeded_session) == [2024, 2023]


async def test_available_years_emits_no_warnings(seeded_session: AsyncSession) -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", SAWarning)
        years = await ScrobbleQueries.available_years(seeded_session)
    assert years == [2024, 2023]


async def test_available_years_empty(async_session: AsyncSession) -> None:
    assert await ScrobbleQueries.available_years(async_session) == []


def test_epoch_conversion() -> None:
    assert from_epoch(to_epoch(JAN)) == JAN
    assert to_epoch(datetime(1970, 1, 1, 0, 1)) == 60


def test_unreadable_timestamp_falls_back_to_now(caplog: pytest.LogCaptureFixture) -> None:
    before = datetime.now(UTC)
    with caplog.at_level(logging.WARNING, logger="scrobble_insights.db.queries"):
        result = from_epoch(10**20)
    assert before <= result <= datetime.now(UTC) + timedelta(seconds=1)
    assert "Unreadable stored timestamp" in caplog.text
