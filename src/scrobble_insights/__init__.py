"""Scrobble insights: temporal listening-pattern analytics over a scrobble history."""

__version__ = "0.1.0"
