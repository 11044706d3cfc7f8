"""Period labels, calendar bounds and report parameter validation."""

import calendar
import enum
from datetime import UTC, datetime, timedelta

from scrobble_insights.constants import MAX_REPORT_YEAR, MIN_REPORT_YEAR
from scrobble_insights.exceptions import InvalidReportParameterError


class Granularity(enum.StrEnum):
    """Bucket size for timeline reports."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def format_period(timestamp: datetime, granularity: Granularity) -> str:
    """Canonical period label for ``timestamp`` (evaluated in UTC).

    Weeks use ISO year and week number (``2024-W01``) so labels sort in the
    same order as the instants they were produced from.
    """
    ts = timestamp.astimezone(UTC) if timestamp.tzinfo else timestamp
    match granularity:
        case Granularity.DAY:
            return ts.strftime("%Y-%m-%d")
        case Granularity.WEEK:
            iso_year, iso_week, _ = ts.isocalendar()
            return f"{iso_year:04d}-W{iso_week:02d}"
        case Granularity.MONTH:
            return ts.strftime("%Y-%m")
        case Granularity.YEAR:
            return f"{ts.year:04d}"


def parse_granularity(value: str | Granularity) -> Granularity:
    """Parse a granularity name (case-insensitive)."""
    if isinstance(value, Granularity):
        return value
    try:
        return Granularity(value.strip().lower())
    except ValueError:
        allowed = ", ".join(g.value for g in Granularity)
        raise InvalidReportParameterError("granularity", f"{value!r} is not one of {allowed}") from None


def validate_year(year: int) -> int:
    """Reject years outside the supported report range."""
    if not MIN_REPORT_YEAR <= year <= MAX_REPORT_YEAR:
        raise InvalidReportParameterError("year", f"{year} is outside {MIN_REPORT_YEAR}-{MAX_REPORT_YEAR}")
    return year


def validate_month(month: int) -> int:
    """Reject months outside 1-12."""
    if not 1 <= month <= 12:
        raise InvalidReportParameterError("month", f"{month} is outside 1-12")
    return month


def validate_range(start: datetime | None, end: datetime | None) -> None:
    """Reject ranges whose start lies after their end."""
    if start is not None and end is not None and as_aware(start) > as_aware(end):
        raise InvalidReportParameterError("range", "start must not be after end")


def year_bounds(year: int) -> tuple[datetime, datetime]:
    """Inclusive UTC bounds of a calendar year: Jan 1 00:00:00 to Dec 31 23:59:59."""
    validate_year(year)
    start = datetime(year, 1, 1, tzinfo=UTC)
    end = datetime(year, 12, 31, 23, 59, 59, tzinfo=UTC)
    return start, end


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """Inclusive UTC bounds of a calendar month, ending one second before the next month."""
    validate_year(year)
    validate_month(month)
    start = datetime(year, month, 1, tzinfo=UTC)
    last_day = calendar.monthrange(year, month)[1]
    end = datetime(year, month, last_day, tzinfo=UTC) + timedelta(days=1, seconds=-1)
    return start, end


def previous_month(now: datetime) -> tuple[int, int]:
    """(year, month) of the calendar month before ``now``."""
    if now.month == 1:
        return now.year - 1, 12
    return now.year, now.month - 1


def days_in_year(year: int) -> int:
    """365, or 366 for leap years."""
    return 366 if calendar.isleap(year) else 365


def whole_minutes(delta: timedelta) -> int:
    """Whole minutes in ``delta``, truncated toward zero."""
    return int(delta.total_seconds() / 60)


def as_aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)
