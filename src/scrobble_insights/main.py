"""Main FastAPI application for the scrobble insights service."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scrobble_insights.constants import APP_DESCRIPTION, APP_TITLE, APP_VERSION, SERVICE_NAME, Routes
from scrobble_insights.dependencies import db_manager
from scrobble_insights.logging import configure_logging
from scrobble_insights.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from scrobble_insights.reports import router as reports_router
from scrobble_insights.scrobbles import router as scrobbles_router
from scrobble_insights.settings import get_settings


class ScrobbleInsightsApp:
    """Application container wiring middleware and routers around the store lifespan."""

    app: FastAPI

    def __init__(self) -> None:
        configure_logging(get_settings().LOG_LEVEL, service=SERVICE_NAME)
        self.app = FastAPI(
            title=APP_TITLE,
            description=APP_DESCRIPTION,
            version=APP_VERSION,
            lifespan=self._lifespan,
        )
        self._setup_middleware()
        self._setup_routers()

    @staticmethod
    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """Application lifespan: create missing tables, release the engine on shutdown."""
        await db_manager.create_schema()
        try:
            yield
        finally:
            await db_manager.dispose()

    def _setup_middleware(self) -> None:
        settings = get_settings()

        # Security headers
        self.app.add_middleware(SecurityHeadersMiddleware)

        # Request-ID (generates/propagates X-Request-ID)
        self.app.add_middleware(RequestIDMiddleware)

        # CORS
        origins = [o.strip() for o in settings.CORS_ALLOWED_ORIGINS.split(",") if o.strip()]
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    def _setup_routers(self) -> None:
        self.app.include_router(reports_router, prefix=Routes.REPORTS.prefix, tags=[Routes.REPORTS.tag])
        self.app.include_router(scrobbles_router, prefix=Routes.SCROBBLES.prefix, tags=[Routes.SCROBBLES.tag])

        @self.app.get(Routes.HEALTH)
        async def health_check() -> dict[str, str]:
            """Health check endpoint."""
            return {"status": "healthy"}

        @self.app.get("/")
        async def root() -> dict[str, str]:
            """Root endpoint."""
            return {"message": APP_TITLE, "version": APP_VERSION}


_application = ScrobbleInsightsApp()
app: FastAPI = _application.app
