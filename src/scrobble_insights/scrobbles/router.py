"""Scrobble browsing endpoints, class-based router."""

from fastapi import APIRouter, Query

from scrobble_insights.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from scrobble_insights.db import ScrobbleQueries
from scrobble_insights.dependencies import DBSession
from scrobble_insights.scrobbles.schemas import AvailableYears, ScrobblePage


class ScrobblesRouter:
    """Read-only access to the stored play history."""

    def __init__(self) -> None:
        self.router = APIRouter()
        self._register_routes()

    def _register_routes(self) -> None:
        r = self.router
        r.add_api_route("/scrobbles", self.scrobbles, methods=["GET"], response_model=ScrobblePage)
        r.add_api_route("/years", self.years, methods=["GET"], response_model=AvailableYears)

    async def scrobbles(
        self,
        session: DBSession,
        limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
        offset: int = Query(default=0, ge=0),
    ) -> ScrobblePage:
        """Paginated scrobbles, newest first."""
        items, total = await ScrobbleQueries.recent(session, limit=limit, offset=offset)
        return ScrobblePage(total=total, limit=limit, offset=offset, items=items)

    async def years(self, session: DBSession) -> AvailableYears:
        """Calendar years that contain at least one scrobble, newest first."""
        return AvailableYears(years=await ScrobbleQueries.available_years(session))


_instance = ScrobblesRouter()
router = _instance.router
