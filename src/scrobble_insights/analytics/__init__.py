"""Pure, synchronous listening analytics over in-memory play events."""

from scrobble_insights.analytics.diversity import DiversityCalculator
from scrobble_insights.analytics.heatmap import HeatmapBuilder, resolve_timezone
from scrobble_insights.analytics.novelty import NoveltyTracker
from scrobble_insights.analytics.periods import Granularity, format_period, parse_granularity
from scrobble_insights.analytics.sessions import SessionDetector
from scrobble_insights.analytics.summary import PeriodSummary
from scrobble_insights.analytics.transitions import TransitionGraph
from scrobble_insights.analytics.yearly import YearlyAggregator

__all__ = [
    "DiversityCalculator",
    "Granularity",
    "HeatmapBuilder",
    "NoveltyTracker",
    "PeriodSummary",
    "SessionDetector",
    "TransitionGraph",
    "YearlyAggregator",
    "format_period",
    "parse_granularity",
    "resolve_timezone",
]
