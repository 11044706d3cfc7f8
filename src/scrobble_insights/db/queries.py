"""SQLAlchemy read queries for the event store."""

import logging
from datetime import UTC, datetime

from sqlalchemy import Integer, cast, extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from scrobble_insights.db.models import Scrobble
from scrobble_insights.events import PlayEvent

logger = logging.getLogger(__name__)


def to_epoch(value: datetime) -> int:
    """Unix seconds for an instant; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return int(value.timestamp())


def from_epoch(seconds: int) -> datetime:
    """Aware UTC datetime for stored unix seconds.

    Values that cannot be represented fall back to the current time so the
    analytics engine always receives a valid instant.
    """
    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError, TypeError):
        logger.warning("Unreadable stored timestamp %r, substituting current time", seconds)
        return datetime.now(UTC)


def to_event(row: Scrobble) -> PlayEvent:
    """Convert a stored row into an immutable PlayEvent."""
    return PlayEvent(
        artist=row.artist,
        album=row.album,
        track=row.track,
        timestamp=from_epoch(row.timestamp),
        source=row.source,
        source_id=row.source_id,
    )


class ScrobbleQueries:
    """Stateless read queries over the scrobble store."""

    @staticmethod
    async def get_events(
        session: AsyncSession,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[PlayEvent]:
        """Events in ``[start, end]`` ascending by time; full history when bounds are omitted."""
        stmt = select(Scrobble)
        if start is not None:
            stmt = stmt.where(Scrobble.timestamp >= to_epoch(start))
        if end is not None:
            stmt = stmt.where(Scrobble.timestamp <= to_epoch(end))
        stmt = stmt.order_by(Scrobble.timestamp.asc(), Scrobble.id.asc())
        result = await session.execute(stmt)
        return [to_event(row) for row in result.scalars().all()]

    @staticmethod
    async def get_events_before(session: AsyncSession, instant: datetime) -> list[PlayEvent]:
        """All events strictly before ``instant``, ascending by time."""
        stmt = (
            select(Scrobble)
            .where(Scrobble.timestamp < to_epoch(instant))
            .order_by(Scrobble.timestamp.asc(), Scrobble.id.asc())
        )
        result = await session.execute(stmt)
        return [to_event(row) for row in result.scalars().all()]

    @staticmethod
    async def recent(
        session: AsyncSession,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[PlayEvent], int]:
        """Paginated scrobbles, newest first.

        Returns (events, total_count) for pagination.
        """
        total = (await session.execute(select(func.count(Scrobble.id)))).scalar() or 0
        stmt = (
            select(Scrobble)
            .order_by(Scrobble.timestamp.desc(), Scrobble.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await session.execute(stmt)
        return [to_event(row) for row in result.scalars().all()], total

    @staticmethod
    async def available_years(session: AsyncSession) -> list[int]:
        """Distinct calendar years (UTC) that have scrobbles, newest first."""
        dialect = session.bind.dialect.name if session.bind else "sqlite"

        if dialect == "sqlite":
            year_expr = cast(func.strftime("%Y", Scrobble.timestamp, "unixepoch"), Integer)
        else:
            year_expr = cast(extract("year", func.to_timestamp(Scrobble.timestamp)), Integer)

        stmt = select(year_expr.label("year")).distinct().order_by(year_expr.desc())
        result = await session.execute(stmt)
        return [int(year) for year in result.scalars().all() if year is not None]
