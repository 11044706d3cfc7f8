"""Listening session detection.

A new session starts when the gap between consecutive plays exceeds the
threshold. Gaps are compared exactly; a gap exactly equal to the
threshold keeps both plays in the same session.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import timedelta

from scrobble_insights.analytics.periods import whole_minutes
from scrobble_insights.analytics.schemas import (
    DayCount,
    Session,
    SessionDistribution,
    SessionsReport,
    SessionsSummary,
    SessionTrack,
)
from scrobble_insights.events import PlayEvent

# (label, inclusive upper bound); the last bucket is open-ended.
_DURATION_BUCKETS: tuple[tuple[str, int | None], ...] = (
    ("0-30", 29),
    ("30-60", 59),
    ("60-120", 119),
    ("120-180", 179),
    ("180+", None),
)
_TRACK_COUNT_BUCKETS: tuple[tuple[str, int | None], ...] = (
    ("2-10", 10),
    ("10-20", 20),
    ("20-30", 30),
    ("30-50", 50),
    ("50+", None),
)


def sort_chronologically(events: Iterable[PlayEvent]) -> list[PlayEvent]:
    """Stable ascending sort by timestamp; ties keep input order."""
    return sorted(events, key=lambda e: e.timestamp)


class SessionDetector:
    """Stateless gap-based session clustering."""

    @staticmethod
    def detect(events: Iterable[PlayEvent], gap_threshold_minutes: int) -> list[Session]:
        """Cluster plays into sessions, oldest first."""
        ordered = sort_chronologically(events)
        if not ordered:
            return []

        sessions: list[Session] = []
        current: list[PlayEvent] = [ordered[0]]
        threshold = timedelta(minutes=gap_threshold_minutes)
        for event in ordered[1:]:
            if event.timestamp - current[-1].timestamp > threshold:
                sessions.append(SessionDetector._build_session(current))
                current = [event]
            else:
                current.append(event)

        sessions.append(SessionDetector._build_session(current))
        return sessions

    @staticmethod
    def report(
        events: Iterable[PlayEvent],
        gap_minutes: int,
        min_tracks: int = 1,
        source: str | None = None,
    ) -> SessionsReport:
        """Sessions plus summary, bucket distribution and sessions per day."""
        if source is not None:
            events = [e for e in events if e.source == source]

        sessions = [s for s in SessionDetector.detect(events, gap_minutes) if s.track_count >= min_tracks]

        return SessionsReport(
            sessions=sessions,
            summary=SessionDetector._summarize(sessions),
            distribution=SessionDetector._distribution(sessions),
            sessions_per_day=SessionDetector._sessions_per_day(sessions),
        )

    @staticmethod
    def _build_session(plays: Sequence[PlayEvent]) -> Session:
        start_time = plays[0].timestamp
        end_time = plays[-1].timestamp

        tracks: list[SessionTrack] = []
        for i, play in enumerate(plays):
            gap_after = whole_minutes(plays[i + 1].timestamp - play.timestamp) if i < len(plays) - 1 else None
            tracks.append(
                SessionTrack(
                    artist=play.artist,
                    album=play.album,
                    track=play.track,
                    timestamp=play.timestamp,
                    gap_after_minutes=gap_after,
                )
            )

        return Session(
            id=f"session_{int(start_time.timestamp())}",
            start_time=start_time,
            end_time=end_time,
            duration_minutes=max(whole_minutes(end_time - start_time), 0),
            track_count=len(plays),
            unique_artists=len({p.artist for p in plays}),
            tracks=tracks,
        )

    @staticmethod
    def _summarize(sessions: Sequence[Session]) -> SessionsSummary:
        total = len(sessions)
        total_minutes = sum(s.duration_minutes for s in sessions)
        total_tracks = sum(s.track_count for s in sessions)
        return SessionsSummary(
            total_sessions=total,
            avg_duration_minutes=total_minutes / total if total else 0.0,
            avg_tracks_per_session=total_tracks / total if total else 0.0,
            longest_session_minutes=max((s.duration_minutes for s in sessions), default=0),
            total_listening_hours=total_minutes / 60,
        )

    @staticmethod
    def _distribution(sessions: Sequence[Session]) -> SessionDistribution:
        by_duration = {label: 0 for label, _ in _DURATION_BUCKETS}
        by_track_count = {label: 0 for label, _ in _TRACK_COUNT_BUCKETS}
        for session in sessions:
            by_duration[_bucket_for(session.duration_minutes, _DURATION_BUCKETS)] += 1
            by_track_count[_bucket_for(session.track_count, _TRACK_COUNT_BUCKETS)] += 1
        return SessionDistribution(by_duration=by_duration, by_track_count=by_track_count)

    @staticmethod
    def _sessions_per_day(sessions: Sequence[Session]) -> list[DayCount]:
        counts = Counter(s.start_time.strftime("%Y-%m-%d") for s in sessions)
        return [DayCount(date=day, count=counts[day]) for day in sorted(counts)]


def _bucket_for(value: int, buckets: tuple[tuple[str, int | None], ...]) -> str:
    for label, upper in buckets:
        if upper is None or value <= upper:
            return label
    return buckets[-1][0]

