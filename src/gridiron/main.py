"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from gridiron.api.catalog import router as catalog_router
from gridiron.api.leagues import router as leagues_router
from gridiron.config import Settings
from gridiron.core.catalog import get_catalog
from gridiron.core.session import InMemoryTeamSource, SessionRegistry, TeamSource

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    team_source: TeamSource | None = None,
) -> FastAPI:
    """Create and configure the Gridiron expansion API.

    ``team_source`` is the persistence collaborator that supplies raw league
    teams; without one the app serves an empty in-memory source.
    """
    settings = settings or Settings()

    logging.basicConfig(
        level=getattr(logging, settings.gridiron_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Gridiron Expansion",
        version="0.1.0",
        description="Expansion team overlay for 32-team franchise leagues",
        docs_url="/docs" if settings.gridiron_env != "production" else None,
    )
    app.state.settings = settings
    app.state.sessions = SessionRegistry(get_catalog(settings), settings)
    app.state.team_source = team_source or InMemoryTeamSource()

    app.include_router(leagues_router)
    app.include_router(catalog_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "env": settings.gridiron_env}

    logger.info("app_created env=%s", settings.gridiron_env)
    return app


app = create_app()
