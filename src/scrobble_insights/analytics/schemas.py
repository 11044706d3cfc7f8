"""Pydantic result models for every analytics report."""

from datetime import datetime

from pydantic import BaseModel

# --- Sessions ---


class SessionTrack(BaseModel):
    """One play inside a session, with the gap to the next play."""

    artist: str
    album: str | None
    track: str
    timestamp: datetime
    gap_after_minutes: int | None  # None for the last track


class Session(BaseModel):
    """A maximal run of plays with no internal gap above the threshold."""

    id: str  # "session_<unix start seconds>"
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    track_count: int
    unique_artists: int
    tracks: list[SessionTrack]


class SessionsSummary(BaseModel):
    total_sessions: int
    avg_duration_minutes: float
    avg_tracks_per_session: float
    longest_session_minutes: int
    total_listening_hours: float


class SessionDistribution(BaseModel):
    """Session counts per duration and per track-count bucket (fixed bucket order)."""

    by_duration: dict[str, int]
    by_track_count: dict[str, int]


class DayCount(BaseModel):
    date: str
    count: int


class SessionsReport(BaseModel):
    sessions: list[Session]
    summary: SessionsSummary
    distribution: SessionDistribution
    sessions_per_day: list[DayCount]


# --- Novelty ---


class NoveltyPoint(BaseModel):
    """Discovery statistics for one period."""

    period: str
    total_scrobbles: int
    new_tracks: int
    repeat_tracks: int
    new_artists: int
    repeat_artists: int
    novelty_ratio: float


class ArtistDiscovery(BaseModel):
    artist: str
    first_heard: datetime
    period: str
    total_plays: int


class ComfortTrack(BaseModel):
    artist: str
    track: str
    play_count: int
    first_heard: datetime


class NoveltySummary(BaseModel):
    total_scrobbles: int
    total_unique_tracks: int
    total_unique_artists: int
    avg_novelty_ratio: float
    most_exploratory_period: str
    least_exploratory_period: str


class NoveltyReport(BaseModel):
    timeline: list[NoveltyPoint]
    summary: NoveltySummary
    new_artists_discovered: list[ArtistDiscovery]
    top_comfort_tracks: list[ComfortTrack]


# --- Diversity ---


class DiversityPoint(BaseModel):
    """Entropy and concentration statistics for one period."""

    period: str
    total_scrobbles: int
    unique_artists: int
    unique_tracks: int
    shannon_entropy: float
    gini_coefficient: float
    diversity_score: float  # 0-100


class DiversitySummary(BaseModel):
    total_scrobbles: int
    total_unique_artists: int
    total_unique_tracks: int
    avg_diversity_score: float
    avg_shannon_entropy: float
    avg_gini_coefficient: float
    most_diverse_period: str
    least_diverse_period: str


class DiversityReport(BaseModel):
    timeline: list[DiversityPoint]
    summary: DiversitySummary


# --- Transitions ---


class Transition(BaseModel):
    from_artist: str
    to_artist: str
    count: int
    percentage: float


class Node(BaseModel):
    id: str
    label: str
    size: int


class Edge(BaseModel):
    source: str
    target: str
    weight: int


class NetworkGraph(BaseModel):
    nodes: list[Node]
    edges: list[Edge]


class TransitionsSummary(BaseModel):
    total_transitions: int
    unique_transitions: int
    most_common_transition: Transition | None
    most_connected_artist: str
    avg_transitions_per_session: float


class TransitionsReport(BaseModel):
    transitions: list[Transition]
    top_transitions: list[Transition]
    network_data: NetworkGraph
    summary: TransitionsSummary


# --- Heatmap ---


class HeatmapCell(BaseModel):
    """Single cell in the weekday/hour grid."""

    weekday: int  # 0=Monday .. 6=Sunday (ISO)
    hour: int  # 0-23
    count: int
    normalized: float


class HourData(BaseModel):
    hour: int
    count: int


class DayGrid(BaseModel):
    day_of_week: int
    hours: list[HourData]


class PeakDay(BaseModel):
    day_of_week: int
    count: int


class PeakHour(BaseModel):
    hour: int
    count: int


class DayTotal(BaseModel):
    weekday: int
    name: str
    count: int


class HourTotal(BaseModel):
    hour: int
    count: int


class HeatmapSummary(BaseModel):
    total_scrobbles: int
    weeks_in_range: int
    peak_weekday: int
    peak_hour: int
    peak_count: int


class HeatmapReport(BaseModel):
    """Weekday/hour distribution of listening activity in a target timezone."""

    timezone: str
    heatmap: list[HeatmapCell]  # always 168 cells
    grid: list[DayGrid]
    peak_day: PeakDay
    peak_hour: PeakHour
    weekday_totals: list[DayTotal]
    hour_totals: list[HourTotal]
    summary: HeatmapSummary
    total_scrobbles: int
    is_normalized: bool


# --- Yearly ---


class YearOverview(BaseModel):
    total_scrobbles: int
    total_artists: int
    total_tracks: int
    total_albums: int
    total_minutes: int
    average_per_day: float
    most_active_month: str
    most_active_day: str


class TopArtist(BaseModel):
    artist: str
    play_count: int
    percentage: float
    rank: int


class TopTrack(BaseModel):
    artist: str
    track: str
    play_count: int
    rank: int


class TopAlbum(BaseModel):
    artist: str
    album: str
    play_count: int
    rank: int


class TopContent(BaseModel):
    top_artists: list[TopArtist]
    top_tracks: list[TopTrack]
    top_albums: list[TopAlbum]


class ListeningPatterns(BaseModel):
    peak_hour: int
    peak_day: int
    longest_session_minutes: int
    avg_session_minutes: float
    night_owl_score: float
    early_bird_score: float
    weekend_warrior_score: float


class FirstPlay(BaseModel):
    artist: str
    track: str
    timestamp: datetime


class TopDiscovery(BaseModel):
    artist: str
    first_heard: datetime
    plays_this_year: int


class Discoveries(BaseModel):
    new_artists: int
    new_tracks: int
    first_artist: FirstPlay | None
    top_discovery: TopDiscovery | None


class DiversityStats(BaseModel):
    diversity_score: float
    genre_count: int  # always 0: genres are not classified
    artist_loyalty: float
    exploration_score: float


class Milestone(BaseModel):
    title: str
    description: str
    value: str
    icon: str


class YearlyReport(BaseModel):
    """Year-in-review aggregate; recomputed on every request."""

    year: int
    overview: YearOverview
    top_content: TopContent
    listening_patterns: ListeningPatterns
    discoveries: Discoveries
    diversity: DiversityStats
    milestones: list[Milestone]


class YearComparison(BaseModel):
    current_year: int
    previous_year: int
    scrobbles_change: int
    scrobbles_change_percent: float
    artists_change: int
    artists_change_percent: float
    diversity_change: float
    top_artists_overlap: list[str]
    new_favorites: list[str]


# --- Period summary ---


class ArtistCount(BaseModel):
    artist: str
    play_count: int


class TrackCount(BaseModel):
    artist: str
    track: str
    play_count: int


class AlbumCount(BaseModel):
    artist: str
    album: str
    play_count: int


class PeriodReport(BaseModel):
    """Top artists/tracks/albums for a calendar period."""

    period: str
    start_date: datetime
    end_date: datetime
    total_scrobbles: int
    top_artists: list[ArtistCount]
    top_tracks: list[TrackCount]
    top_albums: list[AlbumCount]
