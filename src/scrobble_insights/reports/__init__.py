"""Analytics report endpoints."""

from scrobble_insights.reports.router import router
from scrobble_insights.reports.service import ReportService

__all__ = ["ReportService", "router"]
