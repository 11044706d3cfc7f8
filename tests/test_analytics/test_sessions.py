"""Tests for SessionDetector."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from scrobble_insights.analytics.sessions import SessionDetector
from scrobble_insights.events import PlayEvent

PlayFactory = Callable[..., PlayEvent]

T0 = datetime(2024, 3, 1, 10, 0, tzinfo=UTC)


def test_detect_empty() -> None:
    assert SessionDetector.detect([], 30) == []


def test_detect_splits_on_gap(make_play: PlayFactory) -> None:
    plays = [
        make_play("A", "t1", T0),
        make_play("A", "t2", T0 + timedelta(minutes=5)),
        make_play("B", "t3", T0 + timedelta(minutes=46)),
    ]
    sessions = SessionDetector.detect(plays, 30)
    assert [s.track_count for s in sessions] == [2, 1]


def test_gap_equal_to_threshold_stays_in_session(make_play: PlayFactory) -> None:
    plays = [make_play("A", "t1", T0), make_play("A", "t2", T0 + timedelta(minutes=45))]
    assert len(SessionDetector.detect(plays, 45)) == 1


def test_gap_above_threshold_splits(make_play: PlayFactory) -> None:
    plays = [make_play("A", "t1", T0), make_play("A", "t2", T0 + timedelta(minutes=46))]
    assert len(SessionDetector.detect(plays, 45)) == 2


def test_partial_minute_over_threshold_splits(make_play: PlayFactory) -> None:
    plays = [make_play("A", "t1", T0), make_play("B", "t2", T0 + timedelta(minutes=45, seconds=30))]
    sessions = SessionDetector.detect(plays, 45)
    assert len(sessions) == 2
    assert [s.duration_minutes for s in sessions] == [0, 0]


def test_exact_threshold_with_seconds_stays_in_session(make_play: PlayFactory) -> None:
    plays = [make_play("A", "t1", T0), make_play("B", "t2", T0 + timedelta(minutes=45, seconds=0))]
    (session,) = SessionDetector.detect(plays, 45)
    assert session.tracks[0].gap_after_minutes == 45


def test_gap_after_minutes_is_truncated(make_play: PlayFactory) -> None:
    plays = [make_play("A", "t1", T0), make_play("A", "t2", T0 + timedelta(minutes=20, seconds=59))]
    (session,) = SessionDetector.detect(plays, 45)
    assert session.tracks[0].gap_after_minutes == 20
    assert session.duration_minutes == 20


def test_detect_sorts_input(make_play: PlayFactory) -> None:
    plays = [
        make_play("C", "t3", T0 + timedelta(minutes=10)),
        make_play("A", "t1", T0),
        make_play("B", "t2", T0 + timedelta(minutes=5)),
    ]
    (session,) = SessionDetector.detect(plays, 30)
    assert [t.artist for t in session.tracks] == ["A", "B", "C"]


def test_session_fields(make_play: PlayFactory) -> None:
    plays = [
        make_play("A", "t1", T0, album="X"),
        make_play("B", "t2", T0 + timedelta(minutes=4)),
        make_play("A", "t3", T0 + timedelta(minutes=12)),
    ]
    (session,) = SessionDetector.detect(plays, 30)

    assert session.id == f"session_{int(T0.timestamp())}"
    assert session.start_time == T0
    assert session.end_time == T0 + timedelta(minutes=12)
    assert session.duration_minutes == 12
    assert session.unique_artists == 2
    assert [t.gap_after_minutes for t in session.tracks] == [4, 8, None]
    assert session.tracks[0].album == "X"


def test_sessions_partition_all_plays(make_play: PlayFactory) -> None:
    offsets = [0, 3, 50, 52, 200, 201, 202, 400]
    plays = [make_play("A", f"t{i}", T0 + timedelta(minutes=m)) for i, m in enumerate(offsets)]
    sessions = SessionDetector.detect(plays, 30)
    assert sum(s.track_count for s in sessions) == len(plays)
    assert [s.track_count for s in sessions] == [2, 2, 3, 1]
    for earlier, later in zip(sessions, sessions[1:]):
        assert earlier.end_time < later.start_time


def test_report_filters_min_tracks_and_source(make_play: PlayFactory) -> None:
    plays = [
        make_play("A", "t1", T0),
        make_play("A", "t2", T0 + timedelta(minutes=5)),
        make_play("B", "t3", T0 + timedelta(hours=3)),
        make_play("C", "t4", T0 + timedelta(minutes=2), source="listenbrainz"),
    ]

    report = SessionDetector.report(plays, 30, min_tracks=2)
    assert report.summary.total_sessions == 1
    assert report.sessions[0].track_count == 3

    lastfm_only = SessionDetector.report(plays, 30, min_tracks=2, source="lastfm")
    assert lastfm_only.sessions[0].track_count == 2


def test_report_summary_and_distribution(make_play: PlayFactory) -> None:
    first = [make_play("A", f"a{i}", T0 + timedelta(minutes=10 * i)) for i in range(4)]  # 30 minutes
    second_start = T0 + timedelta(days=1)
    second = [make_play("B", f"b{i}", second_start + timedelta(minutes=20 * i)) for i in range(11)]  # 200 minutes

    report = SessionDetector.report(first + second, 45)

    assert report.summary.total_sessions == 2
    assert report.summary.longest_session_minutes == 200
    assert report.summary.avg_duration_minutes == 115.0
    assert report.summary.avg_tracks_per_session == 7.5
    assert report.summary.total_listening_hours == 230 / 60

    assert list(report.distribution.by_duration) == ["0-30", "30-60", "60-120", "120-180", "180+"]
    assert report.distribution.by_duration["30-60"] == 1
    assert report.distribution.by_duration["180+"] == 1
    assert report.distribution.by_track_count["2-10"] == 1
    assert report.distribution.by_track_count["10-20"] == 1

    assert [(d.date, d.count) for d in report.sessions_per_day] == [("2024-03-01", 1), ("2024-03-02", 1)]


def test_report_empty() -> None:
    report = SessionDetector.report([], 45)
    assert report.sessions == []
    assert report.summary.total_sessions == 0
    assert report.summary.avg_duration_minutes == 0.0
    assert sum(report.distribution.by_duration.values()) == 0


def test_46_minute_gap_with_45_minute_threshold(make_play: PlayFactory) -> None:
    plays = [
        make_play("A", "t1", T0),
        make_play("A", "t2", T0 + timedelta(minutes=5)),
        make_play("A", "t3", T0 + timedelta(minutes=51)),
    ]
    assert [s.track_count for s in SessionDetector.detect(plays, 45)] == [2, 1]


def test_report_is_idempotent(make_play: PlayFactory) -> None:
    plays = [make_play("A", f"t{i}", T0 + timedelta(minutes=17 * i)) for i in range(12)]
    first = SessionDetector.report(plays, 30).model_dump_json()
    assert SessionDetector.report(plays, 30).model_dump_json() == first
