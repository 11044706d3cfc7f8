"""Listening report REST endpoints, class-based router."""

from collections.abc import Awaitable
from datetime import datetime
from typing import Annotated, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query

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
    DEFAULT_GRANULARITY,
    DEFAULT_SESSION_GAP_MINUTES,
    DEFAULT_TRANSITION_MIN_COUNT,
)
from scrobble_insights.dependencies import DBSession
from scrobble_insights.exceptions import InvalidReportParameterError
from scrobble_insights.reports.service import ReportService
from scrobble_insights.settings import AppSettings, get_settings

T = TypeVar("T")

Settings = Annotated[AppSettings, Depends(get_settings)]


async def _bad_request_on_invalid(pending: Awaitable[T]) -> T:
    try:
        return await pending
    except InvalidReportParameterError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


class ReportsRouter:
    """Class-based router for the analytics report endpoints."""

    def __init__(self) -> None:
        self._service = ReportService()
        self.router = APIRouter()
        self._register_routes()

    def _register_routes(self) -> None:
        r = self.router
        r.add_api_route("/sessions", self.sessions, methods=["GET"], response_model=SessionsReport)
        r.add_api_route("/novelty", self.novelty, methods=["GET"], response_model=NoveltyReport)
        r.add_api_route("/diversity", self.diversity, methods=["GET"], response_model=DiversityReport)
        r.add_api_route("/transitions", self.transitions, methods=["GET"], response_model=TransitionsReport)
        r.add_api_route("/heatmap", self.heatmap, methods=["GET"], response_model=HeatmapReport)
        r.add_api_route("/yearly/{year}", self.yearly, methods=["GET"], response_model=YearlyReport)
        r.add_api_route(
            "/compare/{year}/{previous_year}",
            self.compare,
            methods=["GET"],
            response_model=YearComparison,
        )
        r.add_api_route("/period/{kind}", self.period, methods=["GET"], response_model=PeriodReport)
        r.add_api_route("/monthly", self.monthly, methods=["GET"], response_model=PeriodReport)

    async def sessions(
        self,
        session: DBSession,
        start: datetime | None = Query(default=None),
        end: datetime | None = Query(default=None),
        gap_minutes: int = Query(default=DEFAULT_SESSION_GAP_MINUTES, ge=1),
        min_tracks: int = Query(default=1, ge=1),
        source: str | None = Query(default=None),
    ) -> SessionsReport:
        """Listening sessions split on gaps longer than ``gap_minutes``."""
        return await _bad_request_on_invalid(
            self._service.sessions(session, start, end, gap_minutes, min_tracks, source)
        )

    async def novelty(
        self,
        session: DBSession,
        start: datetime | None = Query(default=None),
        end: datetime | None = Query(default=None),
        granularity: str = Query(default=DEFAULT_GRANULARITY),
    ) -> NoveltyReport:
        """New versus repeat listening per period."""
        return await _bad_request_on_invalid(self._service.novelty(session, start, end, granularity))

    async def diversity(
        self,
        session: DBSession,
        start: datetime | None = Query(default=None),
        end: datetime | None = Query(default=None),
        granularity: str = Query(default=DEFAULT_GRANULARITY),
    ) -> DiversityReport:
        """Artist entropy and concentration per period."""
        return await _bad_request_on_invalid(self._service.diversity(session, start, end, granularity))

    async def transitions(
        self,
        session: DBSession,
        start: datetime | None = Query(default=None),
        end: datetime | None = Query(default=None),
        gap_minutes: int = Query(default=DEFAULT_SESSION_GAP_MINUTES, ge=1),
        min_count: int = Query(default=DEFAULT_TRANSITION_MIN_COUNT, ge=1),
        include_self_transitions: bool = Query(default=False),
    ) -> TransitionsReport:
        """Artist-to-artist transitions within sessions."""
        return await _bad_request_on_invalid(
            self._service.transitions(session, start, end, gap_minutes, min_count, include_self_transitions)
        )

    async def heatmap(
        self,
        session: DBSession,
        settings: Settings,
        start: datetime | None = Query(default=None),
        end: datetime | None = Query(default=None),
        timezone: str | None = Query(default=None),
        normalize: bool = Query(default=False),
    ) -> HeatmapReport:
        """Weekday/hour distribution in the requested timezone."""
        return await _bad_request_on_invalid(
            self._service.heatmap(session, start, end, timezone or settings.DEFAULT_TIMEZONE, normalize)
        )

    async def yearly(self, year: int, session: DBSession) -> YearlyReport:
        """Year-in-review for a calendar year."""
        return await _bad_request_on_invalid(self._service.yearly(session, year))

    async def compare(self, year: int, previous_year: int, session: DBSession) -> YearComparison:
        """Year-over-year comparison of two yearly reports."""
        return await _bad_request_on_invalid(self._service.compare(session, year, previous_year))

    async def period(self, kind: str, session: DBSession) -> PeriodReport:
        """Top content for ``alltime``, ``lastmonth`` or a year such as ``2024``."""
        return await _bad_request_on_invalid(self._service.period(session, kind))

    async def monthly(
        self,
        session: DBSession,
        year: int = Query(...),
        month: int = Query(...),
    ) -> PeriodReport:
        """Top content for one calendar month."""
        return await _bad_request_on_invalid(self._service.monthly(session, year, month))


_instance = ReportsRouter()
router = _instance.router
