"""Play event model shared by the event store and the analytics engine."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, field_validator


class PlayEvent(BaseModel):
    """A single scrobble: one recorded listen of a track at an instant.

    Immutable once read from the store. Timestamps are always aware UTC;
    naive inputs are interpreted as UTC.
    """

    model_config = ConfigDict(frozen=True)

    artist: str
    album: str | None = None
    track: str
    timestamp: datetime
    source: str
    source_id: str | None = None

    @field_validator("timestamp")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @property
    def track_key(self) -> tuple[str, str]:
        """Identity of a track across the history: (artist, track)."""
        return (self.artist, self.track)

    @property
    def unique_key(self) -> tuple[str, str, int, str]:
        """Dedup key used by the store: (artist, track, unix seconds, source)."""
        return (self.artist, self.track, int(self.timestamp.timestamp()), self.source)
