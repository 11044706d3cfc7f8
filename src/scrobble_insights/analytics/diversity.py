"""Listening diversity: entropy and concentration of plays across artists.

Each period is scored on its own; there is no state carried between periods,
so the result does not depend on the order of the input.
"""

import math
from collections import Counter
from collections.abc import Iterable, Sequence

from scrobble_insights.analytics.periods import Granularity, format_period
from scrobble_insights.analytics.schemas import DiversityPoint, DiversityReport, DiversitySummary
from scrobble_insights.constants import ENTROPY_NORMALIZATION
from scrobble_insights.events import PlayEvent


def shannon_entropy(counts: Iterable[int]) -> float:
    """H = -sum(p_i * log2(p_i)) over a play-count distribution; 0 when empty."""
    values = sorted(c for c in counts if c > 0)
    total = sum(values)
    if total == 0:
        return 0.0
    return sum(-(c / total) * math.log2(c / total) for c in values)


def gini_coefficient(counts: Iterable[int]) -> float:
    """Inequality of a play-count distribution: 0 = equal, 1 = fully concentrated."""
    ordered = sorted(counts)
    n = len(ordered)
    total = sum(ordered)
    if n == 0 or total == 0:
        return 0.0

    weighted = sum(i * c for i, c in enumerate(ordered, start=1))
    gini = (2 * weighted) / (n * total) - (n + 1) / n
    return min(max(gini, 0.0), 1.0)


def diversity_score(unique_artists: int, total_scrobbles: int, entropy: float) -> float:
    """0-100 blend: 60% normalized entropy, 40% artists-per-play ratio."""
    if total_scrobbles == 0:
        return 0.0
    normalized_entropy = min(entropy / ENTROPY_NORMALIZATION, 1.0)
    uniqueness = unique_artists / total_scrobbles
    score = (normalized_entropy * 0.6 + uniqueness * 0.4) * 100
    return min(max(score, 0.0), 100.0)


class DiversityCalculator:
    """Stateless per-period diversity scoring."""

    @staticmethod
    def analyze(events: Iterable[PlayEvent], granularity: Granularity = Granularity.WEEK) -> DiversityReport:
        events = list(events)

        by_period: dict[str, list[PlayEvent]] = {}
        for event in events:
            by_period.setdefault(format_period(event.timestamp, granularity), []).append(event)

        timeline = [DiversityCalculator.point(period, by_period[period]) for period in sorted(by_period)]
        return DiversityReport(timeline=timeline, summary=DiversityCalculator._summarize(timeline, events))

    @staticmethod
    def point(period: str, plays: Sequence[PlayEvent]) -> DiversityPoint:
        """Diversity statistics for the plays of a single period."""
        artist_counts = Counter(p.artist for p in plays)
        total = len(plays)
        entropy = shannon_entropy(artist_counts.values())
        return DiversityPoint(
            period=period,
            total_scrobbles=total,
            unique_artists=len(artist_counts),
            unique_tracks=len({p.track_key for p in plays}),
            shannon_entropy=entropy,
            gini_coefficient=gini_coefficient(artist_counts.values()),
            diversity_score=diversity_score(len(artist_counts), total, entropy),
        )

    @staticmethod
    def _summarize(timeline: Sequence[DiversityPoint], events: Sequence[PlayEvent]) -> DiversitySummary:
        def mean(values: list[float]) -> float:
            return sum(values) / len(values) if values else 0.0

        most = least = None
        for point in timeline:
            if most is None or point.diversity_score > most.diversity_score:
                most = point
            if least is None or point.diversity_score < least.diversity_score:
                least = point

        return DiversitySummary(
            total_scrobbles=len(events),
            total_unique_artists=len({e.artist for e in events}),
            total_unique_tracks=len({e.track_key for e in events}),
            avg_diversity_score=mean([p.diversity_score for p in timeline]),
            avg_shannon_entropy=mean([p.shannon_entropy for p in timeline]),
            avg_gini_coefficient=mean([p.gini_coefficient for p in timeline]),
            most_diverse_period=most.period if most else "",
            least_diverse_period=least.period if least else "",
        )
