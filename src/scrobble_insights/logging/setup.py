"""Structured logging configuration."""

import logging
import sys

from scrobble_insights.constants import SERVICE_NAME
from scrobble_insights.logging.context import RequestContextFilter
from scrobble_insights.logging.formatter import JSONLogFormatter


def configure_logging(level: str = "INFO", service: str = SERVICE_NAME) -> None:
    """Set up structured JSON logging on the root logger."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONLogFormatter(service=service))
    handler.addFilter(RequestContextFilter())
    root.addHandler(handler)
