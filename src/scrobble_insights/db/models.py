"""Scrobble storage model."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from scrobble_insights.db.base import Base, utc_now

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
_PrimaryKey = BigInteger().with_variant(Integer(), "sqlite")


class Scrobble(Base):
    """Individual play events (unique on artist, track, timestamp, source).

    ``timestamp`` holds unix seconds (UTC) so range filters stay dialect-agnostic.
    """

    __tablename__ = "scrobbles"

    id: Mapped[int] = mapped_column(_PrimaryKey, primary_key=True, autoincrement=True)
    artist: Mapped[str] = mapped_column(String(500), nullable=False)
    album: Mapped[str | None] = mapped_column(String(500))
    track: Mapped[str] = mapped_column(String(500), nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    source: Mapped[str] = mapped_column(String(50), nullable=False)
    source_id: Mapped[str | None] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)

    __table_args__ = (
        UniqueConstraint("artist", "track", "timestamp", "source", name="uq_scrobbles_artist_track_ts_source"),
        Index("ix_scrobbles_timestamp", "timestamp"),
        Index("ix_scrobbles_artist", "artist"),
        Index("ix_scrobbles_source_id", "source_id"),
    )
