"""Top artists, tracks and albums for a calendar period."""

from collections import Counter
from collections.abc import Iterable
from datetime import datetime

from scrobble_insights.analytics.schemas import AlbumCount, ArtistCount, PeriodReport, TrackCount
from scrobble_insights.analytics.sessions import sort_chronologically
from scrobble_insights.constants import TOP_CONTENT_LIMIT
from scrobble_insights.events import PlayEvent


class PeriodSummary:
    @staticmethod
    def build(
        events: Iterable[PlayEvent],
        period: str,
        start: datetime,
        end: datetime,
        limit: int = TOP_CONTENT_LIMIT,
    ) -> PeriodReport:
        """Rank plays already restricted to ``[start, end]``; ties keep first-play order."""
        ordered = sort_chronologically(events)
        artists = Counter(e.artist for e in ordered)
        tracks = Counter(e.track_key for e in ordered)
        albums = Counter((e.artist, e.album) for e in ordered if e.album is not None)

        return PeriodReport(
            period=period,
            start_date=start,
            end_date=end,
            total_scrobbles=len(ordered),
            top_artists=[ArtistCount(artist=a, play_count=c) for a, c in artists.most_common(limit)],
            top_tracks=[TrackCount(artist=a, track=t, play_count=c) for (a, t), c in tracks.most_common(limit)],
            top_albums=[AlbumCount(artist=a, album=al, play_count=c) for (a, al), c in albums.most_common(limit)],
        )
