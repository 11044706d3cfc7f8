"""Year-in-review aggregation and year-over-year comparison.

All calendar fields (months, days, hours, weekdays) are read in UTC.
"""

from collections import Counter
from collections.abc import Hashable, Iterable, Sequence
from datetime import UTC

from scrobble_insights.analytics.periods import days_in_year, validate_year
from scrobble_insights.analytics.schemas import (
    Discoveries,
    DiversityStats,
    FirstPlay,
    ListeningPatterns,
    Milestone,
    TopAlbum,
    TopArtist,
    TopContent,
    TopDiscovery,
    TopTrack,
    YearComparison,
    YearlyReport,
    YearOverview,
)
from scrobble_insights.analytics.sessions import SessionDetector, sort_chronologically
from scrobble_insights.constants import (
    AVERAGE_TRACK_MINUTES,
    COMPARISON_TOP_ARTISTS,
    TOP_CONTENT_LIMIT,
    YEARLY_SESSION_GAP_MINUTES,
)
from scrobble_insights.events import PlayEvent

NIGHT_HOURS = frozenset([20, 21, 22, 23, 0, 1, 2, 3, 4, 5])
MORNING_HOURS = frozenset(range(6, 12))
WEEKEND_DAYS = frozenset([5, 6])

PERSONALITY_THRESHOLD = 60.0
MARATHON_SESSION_MINUTES = 180


def _earliest_max(counts: Counter) -> Hashable | None:
    """Key with the highest count; ties go to the key counted first."""
    best = None
    for key, count in counts.items():
        if best is None or count > counts[best]:
            best = key
    return best


def _share(part: int, total: int) -> float:
    return part / total * 100 if total else 0.0


def _change_percent(change: int, previous: int) -> float:
    return change / previous * 100 if previous else 0.0


class YearlyAggregator:
    """Builds a ``YearlyReport`` from one year of plays plus all earlier plays."""

    @staticmethod
    def analyze(
        year: int,
        events_for_year: Iterable[PlayEvent],
        history_before_year: Iterable[PlayEvent] = (),
        session_gap_minutes: int = YEARLY_SESSION_GAP_MINUTES,
    ) -> YearlyReport:
        validate_year(year)
        ordered = sort_chronologically(events_for_year)

        overview = YearlyAggregator._overview(year, ordered)
        top_content = YearlyAggregator._top_content(ordered)
        patterns = YearlyAggregator._patterns(ordered, session_gap_minutes)
        discoveries = YearlyAggregator._discoveries(ordered, history_before_year)
        diversity = YearlyAggregator._diversity(ordered)

        return YearlyReport(
            year=year,
            overview=overview,
            top_content=top_content,
            listening_patterns=patterns,
            discoveries=discoveries,
            diversity=diversity,
            milestones=YearlyAggregator._milestones(overview, top_content, patterns, discoveries) if ordered else [],
        )

    @staticmethod
    def compare(current: YearlyReport, previous: YearlyReport) -> YearComparison:
        """Differences between two yearly reports, ``current`` minus ``previous``."""
        scrobbles_change = current.overview.total_scrobbles - previous.overview.total_scrobbles
        artists_change = current.overview.total_artists - previous.overview.total_artists

        current_top = [a.artist for a in current.top_content.top_artists[:COMPARISON_TOP_ARTISTS]]
        previous_top = {a.artist for a in previous.top_content.top_artists[:COMPARISON_TOP_ARTISTS]}

        return YearComparison(
            current_year=current.year,
            previous_year=previous.year,
            scrobbles_change=scrobbles_change,
            scrobbles_change_percent=_change_percent(scrobbles_change, previous.overview.total_scrobbles),
            artists_change=artists_change,
            artists_change_percent=_change_percent(artists_change, previous.overview.total_artists),
            diversity_change=current.diversity.diversity_score - previous.diversity.diversity_score,
            top_artists_overlap=[a for a in current_top if a in previous_top],
            new_favorites=[a for a in current_top if a not in previous_top],
        )

    @staticmethod
    def _overview(year: int, events: Sequence[PlayEvent]) -> YearOverview:
        total = len(events)
        months = Counter(e.timestamp.astimezone(UTC).strftime("%Y-%m") for e in events)
        days = Counter(e.timestamp.astimezone(UTC).strftime("%Y-%m-%d") for e in events)

        return YearOverview(
            total_scrobbles=total,
            total_artists=len({e.artist for e in events}),
            total_tracks=len({e.track_key for e in events}),
            total_albums=len({e.album for e in events if e.album is not None}),
            total_minutes=int(total * AVERAGE_TRACK_MINUTES),
            average_per_day=total / days_in_year(year),
            most_active_month=_earliest_max(months) or "",
            most_active_day=_earliest_max(days) or "",
        )

    @staticmethod
    def _top_content(events: Sequence[PlayEvent]) -> TopContent:
        total = len(events)
        artists = Counter(e.artist for e in events)
        tracks = Counter(e.track_key for e in events)
        albums = Counter((e.artist, e.album) for e in events if e.album is not None)

        # most_common keeps insertion order on ties, i.e. first chronological play.
        return TopContent(
            top_artists=[
                TopArtist(artist=artist, play_count=count, percentage=_share(count, total), rank=rank)
                for rank, (artist, count) in enumerate(artists.most_common(TOP_CONTENT_LIMIT), start=1)
            ],
            top_tracks=[
                TopTrack(artist=artist, track=track, play_count=count, rank=rank)
                for rank, ((artist, track), count) in enumerate(tracks.most_common(TOP_CONTENT_LIMIT), start=1)
            ],
            top_albums=[
                TopAlbum(artist=artist, album=album, play_count=count, rank=rank)
                for rank, ((artist, album), count) in enumerate(albums.most_common(TOP_CONTENT_LIMIT), start=1)
            ],
        )

    @staticmethod
    def _patterns(events: Sequence[PlayEvent], session_gap_minutes: int) -> ListeningPatterns:
        hours = [0] * 24
        weekdays = [0] * 7
        for event in events:
            ts = event.timestamp.astimezone(UTC)
            hours[ts.hour] += 1
            weekdays[ts.weekday()] += 1

        total = len(events)
        durations = [s.duration_minutes for s in SessionDetector.detect(events, session_gap_minutes)]

        return ListeningPatterns(
            peak_hour=hours.index(max(hours)),
            peak_day=weekdays.index(max(weekdays)),
            longest_session_minutes=max(durations, default=0),
            avg_session_minutes=sum(durations) / len(durations) if durations else 0.0,
            night_owl_score=_share(sum(hours[h] for h in NIGHT_HOURS), total),
            early_bird_score=_share(sum(hours[h] for h in MORNING_HOURS), total),
            weekend_warrior_score=_share(sum(weekdays[d] for d in WEEKEND_DAYS), total),
        )

    @staticmethod
    def _discoveries(events: Sequence[PlayEvent], history: Iterable[PlayEvent]) -> Discoveries:
        seen_artists: set[str] = set()
        seen_tracks: set[tuple[str, str]] = set()
        for event in history:
            seen_artists.add(event.artist)
            seen_tracks.add(event.track_key)

        new_tracks = 0
        first_artist: FirstPlay | None = None
        discovered: dict[str, PlayEvent] = {}
        discovered_plays: Counter[str] = Counter()

        for event in events:
            if event.artist not in seen_artists:
                seen_artists.add(event.artist)
                discovered[event.artist] = event
                if first_artist is None:
                    first_artist = FirstPlay(artist=event.artist, track=event.track, timestamp=event.timestamp)

            if event.track_key not in seen_tracks:
                seen_tracks.add(event.track_key)
                new_tracks += 1

            if event.artist in discovered:
                discovered_plays[event.artist] += 1

        top_discovery = None
        top_artist = _earliest_max(Counter({artist: discovered_plays[artist] for artist in discovered}))
        if top_artist is not None:
            top_discovery = TopDiscovery(
                artist=top_artist,
                first_heard=discovered[top_artist].timestamp,
                plays_this_year=discovered_plays[top_artist],
            )

        return Discoveries(
            new_artists=len(discovered),
            new_tracks=new_tracks,
            first_artist=first_artist,
            top_discovery=top_discovery,
        )

    @staticmethod
    def _diversity(events: Sequence[PlayEvent]) -> DiversityStats:
        total = len(events)
        if total == 0:
            return DiversityStats(diversity_score=0.0, genre_count=0, artist_loyalty=0.0, exploration_score=0.0)

        artists = Counter(e.artist for e in events)
        loyalty = _share(max(artists.values()), total)
        return DiversityStats(
            diversity_score=min(len(artists) / total * 100, 100.0),
            genre_count=0,
            artist_loyalty=loyalty,
            exploration_score=100.0 - loyalty,
        )

    @staticmethod
    def _milestones(
        overview: YearOverview,
        top_content: TopContent,
        patterns: ListeningPatterns,
        discoveries: Discoveries,
    ) -> list[Milestone]:
        hours = overview.total_minutes // 60
        milestones = [
            Milestone(
                title="Music Marathon",
                description=f"You listened to {hours} hours of music",
                value=f"{hours} hours",
                icon="⏱️",
            )
        ]

        if top_content.top_artists:
            top = top_content.top_artists[0]
            milestones.append(
                Milestone(
                    title="Your #1 Artist",
                    description=f"You played {top.play_count} songs",
                    value=top.artist,
                    icon="🎤",
                )
            )

        milestones.append(
            Milestone(
                title="Explorer",
                description=f"You discovered {discoveries.new_artists} new artists",
                value=f"{discoveries.new_artists} artists",
                icon="🗺️",
            )
        )

        if patterns.night_owl_score > PERSONALITY_THRESHOLD:
            milestones.append(
                Milestone(
                    title="Night Owl",
                    description="Most of your listening happens after 8 PM",
                    value=f"{int(patterns.night_owl_score)}% night listening",
                    icon="🦉",
                )
            )
        elif patterns.early_bird_score > PERSONALITY_THRESHOLD:
            milestones.append(
                Milestone(
                    title="Early Bird",
                    description="You love morning music sessions",
                    value=f"{int(patterns.early_bird_score)}% morning listening",
                    icon="🐦",
                )
            )

        if patterns.longest_session_minutes > MARATHON_SESSION_MINUTES:
            milestones.append(
                Milestone(
                    title="Marathon Listener",
                    description="Your longest listening session",
                    value=f"{patterns.longest_session_minutes} minutes",
                    icon="🏃",
                )
            )

        return milestones
