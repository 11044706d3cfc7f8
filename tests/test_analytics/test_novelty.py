"""Tests for NoveltyTracker."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from scrobble_insights.analytics.novelty import NoveltyAccumulator, NoveltyTracker
from scrobble_insights.analytics.periods import Granularity
from scrobble_insights.events import PlayEvent

PlayFactory = Callable[..., PlayEvent]

DAY1 = datetime(2024, 3, 4, 9, 0, tzinfo=UTC)
DAY2 = DAY1 + timedelta(days=1)
DAY3 = DAY1 + timedelta(days=2)


@pytest.fixture
def three_days(make_play: PlayFactory) -> list[PlayEvent]:
    return [
        make_play("A", "t1", DAY1),
        make_play("B", "t2", DAY1 + timedelta(minutes=4)),
        make_play("A", "t1", DAY2),
        make_play("A", "t1", DAY2 + timedelta(minutes=4)),
        make_play("C", "t3", DAY2 + timedelta(minutes=8)),
        make_play("A", "t1", DAY3),
    ]


def test_novelty_ratios_per_period(three_days: list[PlayEvent]) -> None:
    report = NoveltyTracker.analyze(three_days, Granularity.DAY)

    assert [p.period for p in report.timeline] == ["2024-03-04", "2024-03-05", "2024-03-06"]
    assert [p.novelty_ratio for p in report.timeline] == [1.0, pytest.approx(1 / 3), 0.0]

    day2 = report.timeline[1]
    assert day2.new_tracks == 1
    assert day2.repeat_tracks == 2
    assert day2.new_artists == 1
    assert day2.repeat_artists == 1


def test_new_plus_repeat_equals_total(three_days: list[PlayEvent]) -> None:
    report = NoveltyTracker.analyze(three_days, Granularity.DAY)
    for point in report.timeline:
        assert point.new_tracks + point.repeat_tracks == point.total_scrobbles
        assert 0.0 <= point.novelty_ratio <= 1.0


def test_discoveries_and_comfort_tracks(three_days: list[PlayEvent]) -> None:
    report = NoveltyTracker.analyze(three_days, Granularity.DAY)

    discovered = {d.artist: d for d in report.new_artists_discovered}
    assert [d.artist for d in report.new_artists_discovered] == ["A", "B", "C"]
    assert discovered["A"].total_plays == 4
    assert discovered["A"].first_heard == DAY1
    assert discovered["C"].period == "2024-03-05"

    top = report.top_comfort_tracks[0]
    assert (top.artist, top.track, top.play_count) == ("A", "t1", 4)
    assert top.first_heard == DAY1


def test_summary(three_days: list[PlayEvent]) -> None:
    summary = NoveltyTracker.analyze(three_days, Granularity.DAY).summary
    assert summary.total_scrobbles == 6
    assert summary.total_unique_tracks == 3
    assert summary.total_unique_artists == 3
    assert summary.avg_novelty_ratio == pytest.approx((1 + 1 / 3 + 0) / 3)
    assert summary.most_exploratory_period == "2024-03-04"
    assert summary.least_exploratory_period == "2024-03-06"


def test_history_counts_as_already_heard(make_play: PlayFactory) -> None:
    history = [make_play("A", "t1", DAY1 - timedelta(days=30))]
    report = NoveltyTracker.analyze([make_play("A", "t1", DAY1)], Granularity.DAY, history=history)

    assert report.timeline[0].novelty_ratio == 0.0
    assert report.new_artists_discovered == []


def test_novelty_is_cumulative_across_periods(make_play: PlayFactory) -> None:
    plays = [make_play("A", "t1", DAY1), make_play("A", "t1", DAY1 + timedelta(weeks=3))]
    report = NoveltyTracker.analyze(plays, Granularity.WEEK)
    assert [p.new_tracks for p in report.timeline] == [1, 0]


def test_empty_input() -> None:
    report = NoveltyTracker.analyze([])
    assert report.timeline == []
    assert report.summary.avg_novelty_ratio == 0.0
    assert report.summary.most_exploratory_period == ""


def test_accumulator_seed_does_not_record_discoveries(make_play: PlayFactory) -> None:
    state = NoveltyAccumulator()
    state.seed([make_play("A", "t1", DAY1)])
    assert state.seen_artists == {"A"}
    assert state.discoveries == []


def test_monthly_ratios(make_play: PlayFactory) -> None:
    jan, feb, mar = (datetime(2024, m, 10, tzinfo=UTC) for m in (1, 2, 3))
    plays = [
        make_play("A", "t1", jan),
        make_play("B", "t2", jan + timedelta(hours=1)),
        make_play("C", "t3", jan + timedelta(hours=2)),
        make_play("A", "t1", feb),
        make_play("B", "t2", feb + timedelta(hours=1)),
        make_play("D", "t4", feb + timedelta(hours=2)),
        make_play("A", "t1", mar),
        make_play("B", "t2", mar + timedelta(hours=1)),
        make_play("C", "t3", mar + timedelta(hours=2)),
    ]
    report = NoveltyTracker.analyze(plays, Granularity.MONTH)

    assert [p.period for p in report.timeline] == ["2024-01", "2024-02", "2024-03"]
    assert report.timeline[0].novelty_ratio == 1.0
    assert report.timeline[1].novelty_ratio == 1 / 3
    assert report.timeline[2].novelty_ratio == 0.0


def test_report_is_idempotent(three_days: list[PlayEvent]) -> None:
    first = NoveltyTracker.analyze(three_days, Granularity.DAY).model_dump_json()
    assert NoveltyTracker.analyze(three_days, Granularity.DAY).model_dump_json() == first
