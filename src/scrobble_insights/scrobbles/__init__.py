"""Raw scrobble browsing endpoints."""

from scrobble_insights.scrobbles.router import router

__all__ = ["router"]
