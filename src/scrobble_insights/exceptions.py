"""Domain exceptions for report computation."""


class ScrobbleInsightsError(Exception):
    """Base exception for the scrobble insights service."""


class InvalidReportParameterError(ScrobbleInsightsError):
    """A report parameter (year, month, granularity, timezone, range) was rejected."""

    def __init__(self, parameter: str, detail: str) -> None:
        self.parameter = parameter
        self.detail = detail
        super().__init__(f"Invalid {parameter}: {detail}")
