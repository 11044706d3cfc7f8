"""Centralized constants for the scrobble insights service."""

from dataclasses import dataclass

# --- Service identity ---

SERVICE_NAME = "scrobble-insights"

# --- Application metadata ---

APP_TITLE = "Scrobble Insights API"
APP_DESCRIPTION = "Listening sessions, novelty, diversity, transitions, heatmaps and yearly wrap-ups"
APP_VERSION = "0.1.0"


# --- Route configuration ---


@dataclass(frozen=True, slots=True)
class _Route:
    """A route prefix paired with its OpenAPI tag."""

    prefix: str
    tag: str


class Routes:
    """API route prefixes and tags."""

    REPORTS = _Route("/api/reports", "reports")
    SCROBBLES = _Route("/api", "scrobbles")
    HEALTH = "/healthz"


# --- Report defaults ---

DEFAULT_SESSION_GAP_MINUTES = 45
DEFAULT_TRANSITION_MIN_COUNT = 2
DEFAULT_GRANULARITY = "week"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 1000

# Yearly reports use their own session rule, distinct from DEFAULT_SESSION_GAP_MINUTES.
YEARLY_SESSION_GAP_MINUTES = 30

TOP_CONTENT_LIMIT = 50
TOP_TRANSITIONS_LIMIT = 50
COMFORT_TRACKS_LIMIT = 10
COMPARISON_TOP_ARTISTS = 10

# Average track length used to estimate listening time.
AVERAGE_TRACK_MINUTES = 3.5

# log2(100): fixed entropy reference for diversity scores.
ENTROPY_NORMALIZATION = 6.64

MIN_REPORT_YEAR = 1970
MAX_REPORT_YEAR = 2100

# Earliest instant covered by the all-time period report.
ALL_TIME_START_YEAR = 2000
