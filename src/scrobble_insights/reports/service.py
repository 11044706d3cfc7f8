"""Report service: loads events from the store and runs the analytics engine."""

import logging
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from scrobble_insights.analytics import (
    DiversityCalculator,
    HeatmapBuilder,
    NoveltyTracker,
    PeriodSummary,
    SessionDetector,
    TransitionGraph,
    YearlyAggregator,
    parse_granularity,
    resolve_timezone,
)
from scrobble_insights.analytics.periods import (
    Granularity,
    month_bounds,
    previous_month,
    validate_range,
    year_bounds,
)
from scrobble_insights.analytics.schemas import (
    DiversityReport,
    HeatmapReport,
    NoveltyReport,
    PeriodReport,
    SessionsReport,
    TransitionsReport,
    YearComparison,
    YearlyReport,
)
from scrobble_insights.constants import (
    ALL_TIME_START_YEAR,
    DEFAULT_SESSION_GAP_MINUTES,
    DEFAULT_TIMEZONE,
    DEFAULT_TRANSITION_MIN_COUNT,
)
from scrobble_insights.db import ScrobbleQueries
from scrobble_insights.exceptions import InvalidReportParameterError

logger = logging.getLogger(__name__)


class ReportService:
    """Stateless service that fetches plays and builds report models."""

    async def sessions(
        self,
        session: AsyncSession,
        start: datetime | None = None,
        end: datetime | None = None,
        gap_minutes: int = DEFAULT_SESSION_GAP_MINUTES,
        min_tracks: int = 1,
        source: str | None = None,
    ) -> SessionsReport:
        validate_range(start, end)
        events = await ScrobbleQueries.get_events(session, start, end)
        report = SessionDetector.report(events, gap_minutes, min_tracks=min_tracks, source=source)
        logger.info("Sessions report: %d events, %d sessions", len(events), report.summary.total_sessions)
        return report

    async def novelty(
        self,
        session: AsyncSession,
        start: datetime | None = None,
        end: datetime | None = None,
        granularity: Granularity | str = Granularity.WEEK,
    ) -> NoveltyReport:
        """Novelty over ``[start, end]``; plays before ``start`` count as already heard."""
        validate_range(start, end)
        granularity = parse_granularity(granularity)
        events = await ScrobbleQueries.get_events(session, start, end)
        history = await ScrobbleQueries.get_events_before(session, start) if start is not None else []
        report = NoveltyTracker.analyze(events, granularity, history=history)
        logger.info(
            "Novelty report: %d events, %d history, %d periods",
            len(events),
            len(history),
            len(report.timeline),
        )
        return report

    async def diversity(
        self,
        session: AsyncSession,
        start: datetime | None = None,
        end: datetime | None = None,
        granularity: Granularity | str = Granularity.WEEK,
    ) -> DiversityReport:
        validate_range(start, end)
        granularity = parse_granularity(granularity)
        events = await ScrobbleQueries.get_events(session, start, end)
        report = DiversityCalculator.analyze(events, granularity)
        logger.info("Diversity report: %d events, %d periods", len(events), len(report.timeline))
        return report

    async def transitions(
        self,
        session: AsyncSession,
        start: datetime | None = None,
        end: datetime | None = None,
        gap_minutes: int = DEFAULT_SESSION_GAP_MINUTES,
        min_count: int = DEFAULT_TRANSITION_MIN_COUNT,
        include_self_transitions: bool = False,
    ) -> TransitionsReport:
        validate_range(start, end)
        events = await ScrobbleQueries.get_events(session, start, end)
        report = TransitionGraph.analyze(events, gap_minutes, min_count, include_self_transitions)
        logger.info(
            "Transitions report: %d events, %d transitions",
            len(events),
            report.summary.total_transitions,
        )
        return report

    async def heatmap(
        self,
        session: AsyncSession,
        start: datetime | None = None,
        end: datetime | None = None,
        timezone: str = DEFAULT_TIMEZONE,
        normalize: bool = False,
    ) -> HeatmapReport:
        validate_range(start, end)
        tz = resolve_timezone(timezone)
        events = await ScrobbleQueries.get_events(session, start, end)
        report = HeatmapBuilder.analyze(events, tz, normalize=normalize, start=start, end=end)
        logger.info("Heatmap report: %d events in %s", report.total_scrobbles, report.timezone)
        return report

    async def yearly(self, session: AsyncSession, year: int) -> YearlyReport:
        """Year-in-review; everything before Jan 1 of ``year`` is prior history."""
        start, end = year_bounds(year)
        events = await ScrobbleQueries.get_events(session, start, end)
        history = await ScrobbleQueries.get_events_before(session, start)
        report = YearlyAggregator.analyze(year, events, history)
        logger.info("Yearly report %d: %d events, %d history", year, len(events), len(history))
        return report

    async def compare(self, session: AsyncSession, year: int, previous_year: int) -> YearComparison:
        current = await self.yearly(session, year)
        previous = await self.yearly(session, previous_year)
        return YearlyAggregator.compare(current, previous)

    async def period(self, session: AsyncSession, kind: str, now: datetime | None = None) -> PeriodReport:
        """Top content for ``alltime``, ``lastmonth`` or a four-digit year."""
        now = now or datetime.now(UTC)
        kind = kind.strip().lower()

        if kind == "alltime":
            start, end = datetime(ALL_TIME_START_YEAR, 1, 1, tzinfo=UTC), now
            label = "All Time"
        elif kind == "lastmonth":
            return await self.monthly(session, *previous_month(now))
        elif kind.isdigit() and len(kind) == 4:
            year = int(kind)
            start, end = year_bounds(year)
            label = f"Year {year}"
        else:
            raise InvalidReportParameterError("period", f"{kind!r} is not alltime, lastmonth or a year")

        return await self._summarize(session, label, start, end)

    async def monthly(self, session: AsyncSession, year: int, month: int) -> PeriodReport:
        start, end = month_bounds(year, month)
        return await self._summarize(session, f"{year:04d}-{month:02d}", start, end)

    @staticmethod
    async def _summarize(session: AsyncSession, label: str, start: datetime, end: datetime) -> PeriodReport:
        events = await ScrobbleQueries.get_events(session, start, end)
        report = PeriodSummary.build(events, label, start, end)
        logger.info("Period report %s: %d events", label, report.total_scrobbles)
        return report
