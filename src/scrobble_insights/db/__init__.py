"""Event store package -- convenience re-exports.

Importing this module registers all models with Base.metadata.
"""

from scrobble_insights.db.base import Base
from scrobble_insights.db.models import Scrobble
from scrobble_insights.db.queries import ScrobbleQueries
from scrobble_insights.db.repository import ScrobbleRepository
from scrobble_insights.db.session import DatabaseManager

__all__ = [
    "Base",
    "DatabaseManager",
    "Scrobble",
    "ScrobbleQueries",
    "ScrobbleRepository",
]
