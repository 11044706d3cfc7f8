"""Structured JSON logging with request context."""

from scrobble_insights.logging.context import RequestContextFilter, request_id_var
from scrobble_insights.logging.formatter import JSONLogFormatter
from scrobble_insights.logging.setup import configure_logging

__all__ = ["JSONLogFormatter", "RequestContextFilter", "configure_logging", "request_id_var"]
