"""Weekday/hour listening heatmap in a caller-chosen timezone."""

from collections.abc import Iterable
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from scrobble_insights.analytics.periods import as_aware
from scrobble_insights.analytics.schemas import (
    DayGrid,
    DayTotal,
    HeatmapCell,
    HeatmapReport,
    HeatmapSummary,
    HourData,
    HourTotal,
    PeakDay,
    PeakHour,
)
from scrobble_insights.events import PlayEvent
from scrobble_insights.exceptions import InvalidReportParameterError

DAYS_PER_WEEK = 7
HOURS_PER_DAY = 24
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def resolve_timezone(name: str) -> ZoneInfo:
    """Look up an IANA timezone name."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise InvalidReportParameterError("timezone", f"unknown timezone {name!r}") from None


def weeks_between(start: datetime | None, end: datetime | None) -> int:
    """Whole weeks spanned by the range, at least 1; 1 when either bound is missing."""
    if start is None or end is None:
        return 1
    return max((as_aware(end) - as_aware(start)).days // DAYS_PER_WEEK, 1)


class HeatmapBuilder:
    """Stateless weekday/hour bucketing."""

    @staticmethod
    def analyze(
        events: Iterable[PlayEvent],
        timezone: ZoneInfo | str,
        normalize: bool = False,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> HeatmapReport:
        """Count plays per (weekday, hour) cell after converting to ``timezone``.

        Every one of the 168 cells is present, Monday 00h first. With
        ``normalize`` each cell's ``normalized`` value is its count divided by
        the number of whole weeks in ``[start, end]``.
        """
        tz = resolve_timezone(timezone) if isinstance(timezone, str) else timezone

        counts = [[0] * HOURS_PER_DAY for _ in range(DAYS_PER_WEEK)]
        total = 0
        for event in events:
            local = event.timestamp.astimezone(tz)
            counts[local.weekday()][local.hour] += 1
            total += 1

        weeks = weeks_between(start, end)
        cells = [
            HeatmapCell(
                weekday=day,
                hour=hour,
                count=counts[day][hour],
                normalized=counts[day][hour] / weeks if normalize else float(counts[day][hour]),
            )
            for day in range(DAYS_PER_WEEK)
            for hour in range(HOURS_PER_DAY)
        ]

        day_totals = [sum(row) for row in counts]
        hour_totals = [sum(counts[day][hour] for day in range(DAYS_PER_WEEK)) for hour in range(HOURS_PER_DAY)]
        peak_day = _first_max_index(day_totals)
        peak_hour = _first_max_index(hour_totals)

        peak_cell = cells[0]
        for cell in cells:
            if cell.count > peak_cell.count:
                peak_cell = cell

        return HeatmapReport(
            timezone=str(tz.key),
            heatmap=cells,
            grid=[
                DayGrid(
                    day_of_week=day,
                    hours=[HourData(hour=hour, count=counts[day][hour]) for hour in range(HOURS_PER_DAY)],
                )
                for day in range(DAYS_PER_WEEK)
            ],
            peak_day=PeakDay(day_of_week=peak_day, count=day_totals[peak_day]),
            peak_hour=PeakHour(hour=peak_hour, count=hour_totals[peak_hour]),
            weekday_totals=[
                DayTotal(weekday=day, name=WEEKDAY_NAMES[day], count=day_totals[day])
                for day in range(DAYS_PER_WEEK)
            ],
            hour_totals=[HourTotal(hour=hour, count=hour_totals[hour]) for hour in range(HOURS_PER_DAY)],
            summary=HeatmapSummary(
                total_scrobbles=total,
                weeks_in_range=weeks,
                peak_weekday=peak_cell.weekday,
                peak_hour=peak_cell.hour,
                peak_count=peak_cell.count,
            ),
            total_scrobbles=total,
            is_normalized=normalize,
        )


def _first_max_index(values: list[int]) -> int:
    best = 0
    for i, value in enumerate(values):
        if value > values[best]:
            best = i
    return best
