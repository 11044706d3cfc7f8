"""Write operations for the scrobble store."""

import logging
from collections.abc import Iterable

from sqlalchemy import select, tuple_
from sqlalchemy.ext.asyncio import AsyncSession

from scrobble_insights.db.models import Scrobble
from scrobble_insights.db.queries import to_epoch
from scrobble_insights.events import PlayEvent

logger = logging.getLogger(__name__)

# Keeps the IN (...) tuple list under SQLite's bound-parameter limit.
_LOOKUP_BATCH_SIZE = 200


class ScrobbleRepository:
    """Inserts play events, deduplicating on (artist, track, timestamp, source)."""

    async def add_events(self, events: Iterable[PlayEvent], session: AsyncSession) -> int:
        """Insert events that are not stored yet.

        Duplicates of stored rows and repeats within ``events`` are skipped.
        Returns the number of rows inserted.
        """
        pending: dict[tuple[str, str, int, str], PlayEvent] = {}
        for event in events:
            pending.setdefault(event.unique_key, event)

        if not pending:
            return 0

        existing = await self._existing_keys(list(pending), session)
        inserted = 0
        for key, event in pending.items():
            if key in existing:
                continue
            session.add(
                Scrobble(
                    artist=event.artist,
                    album=event.album,
                    track=event.track,
                    timestamp=to_epoch(event.timestamp),
                    source=event.source,
                    source_id=event.source_id,
                )
            )
            inserted += 1

        await session.flush()
        logger.info("Stored %d scrobbles (%d duplicates skipped)", inserted, len(pending) - inserted)
        return inserted

    @staticmethod
    async def _existing_keys(
        keys: list[tuple[str, str, int, str]],
        session: AsyncSession,
    ) -> set[tuple[str, str, int, str]]:
        found: set[tuple[str, str, int, str]] = set()
        columns = tuple_(Scrobble.artist, Scrobble.track, Scrobble.timestamp, Scrobble.source)
        for i in range(0, len(keys), _LOOKUP_BATCH_SIZE):
            batch = keys[i : i + _LOOKUP_BATCH_SIZE]
            stmt = select(Scrobble.artist, Scrobble.track, Scrobble.timestamp, Scrobble.source).where(
                columns.in_(batch)
            )
            result = await session.execute(stmt)
            found.update((r.artist, r.track, r.timestamp, r.source) for r in result.all())
        return found
