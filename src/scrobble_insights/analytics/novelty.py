"""Novelty and discovery tracking.

Plays are folded chronologically through a ``NoveltyAccumulator`` that
remembers every track and artist heard so far. A play is "new" the first
time its ``(artist, track)`` pair is ever seen, relative to the whole history
handed to the tracker, not just the current period.
"""

from collections import Counter
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from itertools import groupby

from scrobble_insights.analytics.periods import Granularity, format_period
from scrobble_insights.analytics.schemas import (
    ArtistDiscovery,
    ComfortTrack,
    NoveltyPoint,
    NoveltyReport,
    NoveltySummary,
)
from scrobble_insights.analytics.sessions import sort_chronologically
from scrobble_insights.constants import COMFORT_TRACKS_LIMIT
from scrobble_insights.events import PlayEvent


@dataclass
class NoveltyAccumulator:
    """Cumulative "ever seen" state for one analysis call."""

    seen_tracks: set[tuple[str, str]] = field(default_factory=set)
    seen_artists: set[str] = field(default_factory=set)
    discoveries: list[ArtistDiscovery] = field(default_factory=list)

    def seed(self, history: Iterable[PlayEvent]) -> None:
        """Mark earlier plays as already heard without recording discoveries."""
        for event in history:
            self.seen_tracks.add(event.track_key)
            self.seen_artists.add(event.artist)

    def observe_period(self, period: str, plays: Sequence[PlayEvent]) -> NoveltyPoint:
        """Fold one period's plays into the state and return its statistics."""
        new_tracks = 0
        new_artists = 0

        for play in plays:
            if play.track_key not in self.seen_tracks:
                self.seen_tracks.add(play.track_key)
                new_tracks += 1

            if play.artist not in self.seen_artists:
                self.seen_artists.add(play.artist)
                new_artists += 1
                self.discoveries.append(
                    ArtistDiscovery(
                        artist=play.artist,
                        first_heard=play.timestamp,
                        period=period,
                        total_plays=0,  # filled in once the whole window is known
                    )
                )

        total = len(plays)
        period_artists = len({p.artist for p in plays})
        return NoveltyPoint(
            period=period,
            total_scrobbles=total,
            new_tracks=new_tracks,
            repeat_tracks=total - new_tracks,
            new_artists=new_artists,
            repeat_artists=period_artists - new_artists,
            novelty_ratio=new_tracks / total if total else 0.0,
        )


def iter_periods(
    ordered: Sequence[PlayEvent],
    granularity: Granularity,
) -> Iterator[tuple[str, list[PlayEvent]]]:
    """Contiguous runs of chronologically ordered plays sharing a period label."""
    for period, group in groupby(ordered, key=lambda e: format_period(e.timestamp, granularity)):
        yield period, list(group)


class NoveltyTracker:
    """Stateless novelty report builder."""

    @staticmethod
    def analyze(
        events: Iterable[PlayEvent],
        granularity: Granularity = Granularity.WEEK,
        history: Iterable[PlayEvent] = (),
        comfort_limit: int = COMFORT_TRACKS_LIMIT,
    ) -> NoveltyReport:
        """Build the novelty timeline, artist discoveries and comfort tracks.

        ``history`` holds plays that precede ``events``; they only count as
        already heard and never appear in the timeline.
        """
        ordered = sort_chronologically(events)

        state = NoveltyAccumulator()
        state.seed(history)

        timeline = [state.observe_period(period, plays) for period, plays in iter_periods(ordered, granularity)]

        artist_plays = Counter(e.artist for e in ordered)
        discoveries = [d.model_copy(update={"total_plays": artist_plays[d.artist]}) for d in state.discoveries]

        return NoveltyReport(
            timeline=timeline,
            summary=NoveltyTracker._summarize(timeline, ordered),
            new_artists_discovered=discoveries,
            top_comfort_tracks=NoveltyTracker.comfort_tracks(ordered, comfort_limit),
        )

    @staticmethod
    def comfort_tracks(events: Iterable[PlayEvent], limit: int = COMFORT_TRACKS_LIMIT) -> list[ComfortTrack]:
        """Most replayed (artist, track) pairs; ties keep first-appearance order."""
        counts: dict[tuple[str, str], int] = {}
        first_heard: dict[tuple[str, str], datetime] = {}
        for event in events:
            key = event.track_key
            counts[key] = counts.get(key, 0) + 1
            if key not in first_heard or event.timestamp < first_heard[key]:
                first_heard[key] = event.timestamp

        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [
            ComfortTrack(artist=artist, track=track, play_count=count, first_heard=first_heard[(artist, track)])
            for (artist, track), count in ranked[:limit]
        ]

    @staticmethod
    def _summarize(timeline: Sequence[NoveltyPoint], events: Sequence[PlayEvent]) -> NoveltySummary:
        most = least = None
        for point in timeline:
            if most is None or point.novelty_ratio > most.novelty_ratio:
                most = point
            if least is None or point.novelty_ratio < least.novelty_ratio:
                least = point

        return NoveltySummary(
            total_scrobbles=len(events),
            total_unique_tracks=len({e.track_key for e in events}),
            total_unique_artists=len({e.artist for e in events}),
            avg_novelty_ratio=sum(p.novelty_ratio for p in timeline) / len(timeline) if timeline else 0.0,
            most_exploratory_period=most.period if most else "",
            least_exploratory_period=least.period if least else "",
        )
